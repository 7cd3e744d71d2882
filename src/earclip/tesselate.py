import math
from typing import Optional


def tesselate(vertices: list[float], indices: list[int], modulo: Optional[float], dim: int) -> None:
    """
    Splits every triangle crossing a grid line (a multiple of ``modulo``) on any axis

    ``vertices`` and ``indices`` are updated in place: new vertices are appended and
    split triangles are rewritten or appended. Nothing happens for a missing or
    infinite ``modulo``.

    Raises
    ------
    ValueError
        If ``modulo`` is not positive
    """
    if modulo is None or math.isinf(modulo):
        return
    if not modulo > 0:
        raise ValueError(f"modulo must be positive, got {modulo}")

    for axis in range(dim):
        i = 0
        while i < len(indices):
            triangle = _split_if_necessary(
                indices[i], indices[i + 1], indices[i + 2], vertices, indices, dim, axis, modulo
            )
            if triangle is not None:
                indices[i : i + 3] = triangle
                # test the replaced triangle again
                continue
            i += 3


# find a grid value between the corner vertex and both opposite vertices and split there
def _split_if_necessary(i1, i2, i3, vertices, indices, dim, axis, modulo) -> Optional[tuple[int, int, int]]:
    v1 = vertices[i1 * dim + axis]
    v2 = vertices[i2 * dim + axis]
    v3 = vertices[i3 * dim + axis]

    # 1 is corner
    if v1 < v2 and v1 < v3:
        mod_point = v1 + modulo - _mod2(v1, modulo)
        if v1 < mod_point <= v2 and mod_point <= v3 and v2 != mod_point:
            return _split_right(mod_point, i1, i2, i3, v1, v2, v3, vertices, indices, dim, axis, modulo)
    elif v1 > v2 and v1 > v3:
        mod_point = v1 - (_mod2(v1, modulo) or modulo)
        if v1 > mod_point >= v2 and mod_point >= v3 and v2 != mod_point:
            return _split_left(mod_point, i1, i2, i3, v1, v2, v3, vertices, indices, dim, axis, modulo)

    # 2 is corner
    if v2 < v1 and v2 < v3:
        mod_point = v2 + modulo - _mod2(v2, modulo)
        if v2 < mod_point <= v3 and mod_point <= v1 and (v1 != mod_point or v3 != mod_point):
            return _split_right(mod_point, i2, i3, i1, v2, v3, v1, vertices, indices, dim, axis, modulo)
    elif v2 > v1 and v2 > v3:
        mod_point = v2 - (_mod2(v2, modulo) or modulo)
        if v2 > mod_point >= v3 and mod_point >= v1 and (v1 != mod_point or v3 != mod_point):
            return _split_left(mod_point, i2, i3, i1, v2, v3, v1, vertices, indices, dim, axis, modulo)

    # 3 is corner
    if v3 < v1 and v3 < v2:
        mod_point = v3 + modulo - _mod2(v3, modulo)
        if v3 < mod_point <= v1 and mod_point <= v2 and (v1 != mod_point or v2 != mod_point):
            return _split_right(mod_point, i3, i1, i2, v3, v1, v2, vertices, indices, dim, axis, modulo)
    elif v3 > v1 and v3 > v2:
        mod_point = v3 - (_mod2(v3, modulo) or modulo)
        if v3 > mod_point >= v1 and mod_point >= v2 and (v1 != mod_point or v2 != mod_point):
            return _split_left(mod_point, i3, i1, i2, v3, v1, v2, vertices, indices, dim, axis, modulo)

    return None


# append a vertex on the edge i1 -> i2 where the split axis reaches split_point
def _create_vertex(split_point, i1, i2, v1, v2, vertices, dim, axis) -> int:
    index = len(vertices) // dim
    travel_divisor = (v2 - v1) / (split_point - v1)
    for d in range(dim):
        if d == axis:
            vertices.append(split_point)
        else:
            va1 = vertices[i1 * dim + d]
            va2 = vertices[i2 * dim + d]
            vertices.append(va1 + (va2 - va1) / travel_divisor)
    return index


# i1 is the corner with the lowest value; grid lines are walked upwards
def _split_right(mod_point, i1, i2, i3, v1, v2, v3, vertices, indices, dim, axis, modulo):
    i12 = _create_vertex(mod_point, i1, i2, v1, v2, vertices, dim, axis)
    i13 = _create_vertex(mod_point, i1, i3, v1, v3, vertices, dim, axis)
    indices.extend((i1, i12, i13))
    mod_point += modulo

    if v2 < v3:
        while mod_point < v2:
            # next triangles are i13 -> i12 -> next i13 and next i13 -> i12 -> next i12
            indices.extend((i13, i12))
            i13 = _create_vertex(mod_point, i1, i3, v1, v3, vertices, dim, axis)
            indices.extend((i13, i13, i12))
            i12 = _create_vertex(mod_point, i1, i2, v1, v2, vertices, dim, axis)
            indices.append(i12)
            mod_point += modulo
        indices.extend((i13, i12, i2))
        return i13, i2, i3
    else:
        while mod_point < v3:
            indices.extend((i13, i12))
            i13 = _create_vertex(mod_point, i1, i3, v1, v3, vertices, dim, axis)
            indices.extend((i13, i13, i12))
            i12 = _create_vertex(mod_point, i1, i2, v1, v2, vertices, dim, axis)
            indices.append(i12)
            mod_point += modulo
        indices.extend((i13, i12, i3))
        return i3, i12, i2


# i1 is the corner with the highest value; grid lines are walked downwards
def _split_left(mod_point, i1, i2, i3, v1, v2, v3, vertices, indices, dim, axis, modulo):
    i12 = _create_vertex(mod_point, i1, i2, v1, v2, vertices, dim, axis)
    i13 = _create_vertex(mod_point, i1, i3, v1, v3, vertices, dim, axis)
    indices.extend((i1, i12, i13))
    mod_point -= modulo

    if v2 > v3:
        while mod_point > v2:
            indices.extend((i13, i12))
            i13 = _create_vertex(mod_point, i1, i3, v1, v3, vertices, dim, axis)
            indices.extend((i13, i13, i12))
            i12 = _create_vertex(mod_point, i1, i2, v1, v2, vertices, dim, axis)
            indices.append(i12)
            mod_point -= modulo
        indices.extend((i13, i12, i2))
        return i13, i2, i3
    else:
        while mod_point > v3:
            indices.extend((i13, i12))
            i13 = _create_vertex(mod_point, i1, i3, v1, v3, vertices, dim, axis)
            indices.extend((i13, i13, i12))
            i12 = _create_vertex(mod_point, i1, i2, v1, v2, vertices, dim, axis)
            indices.append(i12)
            mod_point -= modulo
        indices.extend((i13, i12, i3))
        return i3, i12, i2


# x modulo n in [0, n), also for negative x
def _mod2(x, n):
    return math.fmod(math.fmod(x, n) + n, n)
