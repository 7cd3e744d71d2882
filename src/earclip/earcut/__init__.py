import enum
import logging
from typing import Optional

from .holes import eliminate_holes
from .node import LinkInfo, Node, Store, filter_points, linked_list, remove_node, split_polygon
from .predicates import area, equals, intersects, is_valid_diagonal, locally_inside, point_in_triangle, signed_area
from .zorder import HASH_THRESHOLD, bounding_box, index_curve, inverse_size, z_order

__all__ = ["earcut", "signed_area", "Store", "Node", "LinkInfo", "Pass"]

logger = logging.getLogger(__name__)


class Pass(enum.IntEnum):
    """Recovery tier of the ear slicing loop"""

    # plain ear slicing
    INITIAL = 0
    # collinear and duplicate points were filtered
    FILTERED = 1
    # small self-intersections were cured; next stall splits the polygon
    CURED = 2


def earcut(data, hole_indices=None, dim=2, store: Optional[Store] = None) -> list[int]:
    if dim < 2:
        raise ValueError(f"dim must be at least 2, got {dim}")

    triangles = []
    # a polygon needs at least three vertices
    if len(data) < 3 * dim:
        return triangles

    if store is None:
        store = Store()
    store.reset(data)
    nodes = store.nodes

    has_holes = bool(hole_indices)
    outer_len = hole_indices[0] * dim if has_holes else len(data)
    outer_node = linked_list(store, 0, outer_len, dim, True)

    if outer_node is None or nodes[outer_node].next == nodes[outer_node].prev:
        return triangles

    min_x = min_y = 0
    inv_size = 0

    if has_holes:
        outer_node = eliminate_holes(store, hole_indices, outer_node, dim)

    # if the shape is not too simple, we'll use z-order curve hash later; calculate polygon bbox
    if len(data) > HASH_THRESHOLD * dim:
        min_x, min_y, max_x, max_y = bounding_box(data, outer_len, dim)
        # minX, minY and invSize are later used to transform coords into integers for z-order calculation
        inv_size = inverse_size(min_x, min_y, max_x, max_y)

    earcut_linked(nodes, outer_node, triangles, dim, min_x, min_y, inv_size)

    return triangles


# main ear slicing loop which triangulates a polygon (given as a linked list)
# rings waiting to be sliced are kept on a stack instead of the call stack
def earcut_linked(nodes, ear, triangles, dim, min_x, min_y, inv_size):
    work = [(ear, Pass.INITIAL)]

    while work:
        ear, _pass = work.pop()
        if ear is None:
            continue

        # interlink polygon nodes in z-order
        if _pass is Pass.INITIAL and inv_size:
            index_curve(nodes, ear, min_x, min_y, inv_size)

        stop = ear

        # iterate through ears, slicing them one by one
        while nodes[ear].prev != nodes[ear].next:
            node = nodes[ear]
            prev = nodes[node.prev]
            next = nodes[node.next]

            if is_ear_hashed(nodes, node, min_x, min_y, inv_size) if inv_size else is_ear(nodes, node):
                # cut off the triangle
                triangles.append(prev.i // dim)
                triangles.append(node.i // dim)
                triangles.append(next.i // dim)

                remove_node(nodes, node.link_info())

                # skipping the next vertex leads to less sliver triangles
                ear = stop = next.next

                continue

            ear = node.next

            # if we looped through the whole remaining polygon and can't find any more ears
            if ear == stop:
                work.extend(_recover(nodes, ear, _pass, triangles, dim))
                break


def _recover(nodes, ear, _pass, triangles, dim):
    # try filtering points and slicing again
    if _pass is Pass.INITIAL:
        return [(filter_points(nodes, ear), Pass.FILTERED)]

    # if this didn't work, try curing all small self-intersections locally
    if _pass is Pass.FILTERED:
        ear = cure_local_intersections(nodes, filter_points(nodes, ear), triangles, dim)
        return [(ear, Pass.CURED)]

    # as a last resort, try splitting the remaining polygon into two
    halves = split_earcut(nodes, ear)
    if halves is None:
        logger.debug("no valid diagonal found; dropping ring at vertex %d", nodes[ear].i)
        return []

    a, c = halves
    # c is pushed first so a is sliced first
    return [(c, Pass.INITIAL), (a, Pass.INITIAL)]


# check whether a polygon node forms a valid ear with adjacent nodes
def is_ear(nodes, ear: Node) -> bool:
    a = nodes[ear.prev]
    b = ear
    c = nodes[ear.next]

    if area(a, b, c) >= 0:
        return False  # reflex, can't be an ear

    # now make sure we don't have other points inside the potential ear
    ax = a.x
    ay = a.y
    bx = b.x
    by = b.y
    cx = c.x
    cy = c.y

    # triangle bbox; min & max are calculated like this for speed
    x0 = (ax if ax < cx else cx) if ax < bx else (bx if bx < cx else cx)
    y0 = (ay if ay < cy else cy) if ay < by else (by if by < cy else cy)
    x1 = (ax if ax > cx else cx) if ax > bx else (bx if bx > cx else cx)
    y1 = (ay if ay > cy else cy) if ay > by else (by if by > cy else cy)

    p = nodes[c.next]
    while p is not a:
        if (
            p.x >= x0
            and p.x <= x1
            and p.y >= y0
            and p.y <= y1
            and point_in_triangle(ax, ay, bx, by, cx, cy, p.x, p.y)
            and area(nodes[p.prev], p, nodes[p.next]) >= 0
        ):
            return False
        p = nodes[p.next]

    return True


def is_ear_hashed(nodes, ear: Node, min_x, min_y, inv_size) -> bool:
    a = nodes[ear.prev]
    b = ear
    c = nodes[ear.next]

    if area(a, b, c) >= 0:
        return False  # reflex, can't be an ear

    ax = a.x
    ay = a.y
    bx = b.x
    by = b.y
    cx = c.x
    cy = c.y

    # triangle bbox; min & max are calculated like this for speed
    x0 = (ax if ax < cx else cx) if ax < bx else (bx if bx < cx else cx)
    y0 = (ay if ay < cy else cy) if ay < by else (by if by < cy else cy)
    x1 = (ax if ax > cx else cx) if ax > bx else (bx if bx > cx else cx)
    y1 = (ay if ay > cy else cy) if ay > by else (by if by > cy else cy)

    # z-order range for the current triangle bbox
    min_z = z_order(x0, y0, min_x, min_y, inv_size)
    max_z = z_order(x1, y1, min_x, min_y, inv_size)

    def blocks(n):
        return (
            n.x >= x0
            and n.x <= x1
            and n.y >= y0
            and n.y <= y1
            and n is not a
            and n is not c
            and point_in_triangle(ax, ay, bx, by, cx, cy, n.x, n.y)
            and area(nodes[n.prev], n, nodes[n.next]) >= 0
        )

    p = nodes[ear.prev_z] if ear.prev_z is not None else None
    n = nodes[ear.next_z] if ear.next_z is not None else None

    # look for points inside the triangle in both directions
    while p is not None and p.z >= min_z and n is not None and n.z <= max_z:
        if blocks(p):
            return False
        p = nodes[p.prev_z] if p.prev_z is not None else None

        if blocks(n):
            return False
        n = nodes[n.next_z] if n.next_z is not None else None

    # look for remaining points in decreasing z-order
    while p is not None and p.z >= min_z:
        if blocks(p):
            return False
        p = nodes[p.prev_z] if p.prev_z is not None else None

    # look for remaining points in increasing z-order
    while n is not None and n.z <= max_z:
        if blocks(n):
            return False
        n = nodes[n.next_z] if n.next_z is not None else None

    return True


# go through all polygon nodes and cure small local self-intersections
def cure_local_intersections(nodes, start, triangles, dim):
    p_i = start
    while True:
        p = nodes[p_i]
        p_next = nodes[p.next]
        a = nodes[p.prev]
        b_i = p_next.next
        b = nodes[b_i]

        if not equals(a, b) and intersects(a, p, p_next, b) and locally_inside(nodes, a, b) and locally_inside(nodes, b, a):
            triangles.append(a.i // dim)
            triangles.append(p.i // dim)
            triangles.append(b.i // dim)

            # remove two nodes involved
            remove_node(nodes, p.link_info())
            remove_node(nodes, p_next.link_info())

            p_i = start = b_i

        p_i = nodes[p_i].next
        if p_i == start:
            return filter_points(nodes, p_i)


# find a diagonal that divides the polygon into two and split it there
def split_earcut(nodes, start) -> Optional[tuple[int, int]]:
    a_i = start
    while True:
        a = nodes[a_i]
        b_i = nodes[a.next].next
        while b_i != a.prev:
            b = nodes[b_i]
            if a.i != b.i and is_valid_diagonal(nodes, a, b):
                # split the polygon in two by the diagonal
                c_i = split_polygon(nodes, a_i, b_i)

                # filter colinear points around the cuts
                a_i = filter_points(nodes, a_i, nodes[a_i].next)
                c_i = filter_points(nodes, c_i, nodes[c_i].next)
                return a_i, c_i
            b_i = b.next
        a_i = a.next
        if a_i == start:
            return None
