import math
from typing import Optional

import numpy as np


def ring_normal(ring: np.ndarray) -> Optional[np.ndarray]:
    """Unit normal of a (n, 3) ring, or None when the ring has no usable area"""
    shifted = np.roll(ring, -1, axis=0)
    n = np.average(np.cross(ring - shifted, ring + shifted), axis=0)
    d = np.linalg.norm(n)
    if d < 1e-7:
        return None
    else:
        return n / d


def _rotation_to_xy(normal: np.ndarray) -> Optional[np.ndarray]:
    nx, ny = normal[:2]
    dd = (nx**2 + ny**2) ** 0.5
    if dd < 1e-8:
        # already parallel to the xy plane
        return None
    ax: float = -ny / dd
    ay: float = nx / dd
    theta = math.acos(min(1.0, max(-1.0, normal[2])))
    sint = math.sin(theta)
    cost = math.cos(theta)
    s = ax * ay * (1 - cost)
    t = ay * sint
    u = ax * sint
    return np.array(
        [
            [ax * ax * (1 - cost) + cost, s, t],
            [s, ay * ay * (1 - cost) + cost, -u],
            [-t, u, cost],
        ]
    )


def project3d_to_2d(data, num_outer: int) -> Optional[list[float]]:
    """
    Rotates a flat 3D coordinate buffer onto the plane of its outer ring

    Parameters
    ----------
    data
        Coordinates ``[x0, y0, z0, x1, ...]`` of the outer ring followed by its holes
    num_outer
        Number of vertices of the outer ring

    Returns
    -------
    A 2D coordinate buffer with the same vertex order, or None when the
    outer ring is degenerate (no normal can be computed)
    """
    d = np.asarray(data, dtype=np.float64).reshape(-1, 3)
    normal = ring_normal(d[:num_outer])
    if normal is None:
        return None
    rotation = _rotation_to_xy(normal)
    if rotation is None:
        return d[:, :2].flatten().tolist()
    return (d @ rotation)[:, :2].flatten().tolist()
