import math
from typing import Sequence

from .earcut.predicates import signed_area


def _is_point_like(point) -> bool:
    return hasattr(point, "x") and hasattr(point, "y")


# turn a polygon in a multi-dimensional array form (e.g. as in GeoJSON) into a form earcut accepts
def flatten(data) -> tuple[list[float], list[int], int]:
    """
    Flattens nested rings into a coordinate buffer

    Points are either coordinate sequences (``[x, y]`` / ``[x, y, z]``) or
    objects exposing ``x``, ``y`` and optionally ``z``. The dimension is taken
    from the first point of the outer ring.

    Returns
    -------
    vertices, hole_indices, dim
    """
    vertices = []
    holes = []
    hole_index = 0
    dim = 2

    if len(data) == 0 or len(data[0]) == 0:
        return vertices, holes, dim

    first = data[0][0]
    is_flat = not _is_point_like(first)
    if is_flat:
        dim = len(first)
    else:
        dim = 3 if getattr(first, "z", None) is not None else 2

    for i in range(len(data)):
        for point in data[i]:
            if is_flat:
                for d in range(dim):
                    vertices.append(point[d])
            else:
                vertices.append(point.x)
                vertices.append(point.y)
                if dim == 3:
                    vertices.append(point.z)

        if i > 0:
            hole_index += len(data[i - 1])
            holes.append(hole_index)

    return vertices, holes, dim


def convert_2d(data) -> list[list[list[float]]]:
    """Converts rings of point-like objects into rings of ``[x, y]``"""
    return [[[point.x, point.y] for point in line] for line in data]


def convert_3d(data) -> list[list[list[float]]]:
    """Converts rings of point-like objects into rings of ``[x, y, z]``"""
    return [[[point.x, point.y, point.z] for point in line] for line in data]


# return a percentage difference between the polygon area and its triangulation area
# used to verify correctness of triangulation
def deviation(data: Sequence[float], hole_indices, dim: int, triangles: Sequence[int]) -> float:
    has_holes = bool(hole_indices)
    outer_len = hole_indices[0] * dim if has_holes else len(data)

    polygon_area = abs(signed_area(data, 0, outer_len, dim))
    if has_holes:
        _len = len(hole_indices)
        for i in range(_len):
            start = hole_indices[i] * dim
            end = hole_indices[i + 1] * dim if i < _len - 1 else len(data)
            polygon_area -= abs(signed_area(data, start, end, dim))

    triangles_area = 0
    for i in range(0, len(triangles), 3):
        a = triangles[i] * dim
        b = triangles[i + 1] * dim
        c = triangles[i + 2] * dim
        triangles_area += abs(
            (data[a] - data[c]) * (data[b + 1] - data[a + 1]) - (data[a] - data[b]) * (data[c + 1] - data[a + 1])
        )

    if polygon_area == 0 and triangles_area == 0:
        return 0
    if polygon_area == 0:
        return math.inf
    return abs((triangles_area - polygon_area) / polygon_area)
