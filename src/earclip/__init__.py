"""Polygon triangulation (ear clipping) with optional grid tesselation"""

import logging
import math
from typing import Optional

from .earcut import Store, earcut, signed_area
from .flatten import convert_2d, convert_3d, deviation, flatten
from .tesselate import tesselate

__all__ = [
    "earclip",
    "earcut",
    "tesselate",
    "flatten",
    "convert_2d",
    "convert_3d",
    "deviation",
    "signed_area",
    "Store",
]

logger = logging.getLogger(__name__)


def earclip(polygon, modulo: Optional[float] = None, offset: int = 0) -> tuple[list[float], list[int]]:
    """
    Triangulates a polygon given as nested rings and tesselates it on a grid

    Parameters
    ----------
    polygon
        Outer ring followed by hole rings; points are coordinate sequences
        or objects with ``x``, ``y`` (and ``z``) attributes
    modulo
        Grid spacing for :func:`tesselate`; ``None`` or ``inf`` skips it
    offset
        Added to every returned index

    Returns
    -------
    vertices, indices
    """
    vertices, hole_indices, dim = flatten(polygon)
    indices = earcut(vertices, hole_indices, dim)

    if modulo is not None and not math.isinf(modulo):
        before = len(indices)
        tesselate(vertices, indices, modulo, dim)
        logger.debug("tesselation grew %d indices to %d", before, len(indices))

    if offset:
        indices = [index + offset for index in indices]

    return vertices, indices
