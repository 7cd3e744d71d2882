import logging
import math
from typing import Optional

from .node import Store, filter_points, get_leftmost, linked_list, split_polygon
from .predicates import locally_inside, point_in_triangle, sector_contains_sector

logger = logging.getLogger(__name__)


# link every hole into the outer loop, producing a single-ring polygon without holes
def eliminate_holes(store: Store, hole_indices, outer_node: int, dim: int) -> int:
    nodes = store.nodes
    queue = store.queue
    queue.clear()
    _len = len(hole_indices)

    for i in range(_len):
        start = hole_indices[i] * dim
        end = hole_indices[i + 1] * dim if i < _len - 1 else len(store.data)
        lst = linked_list(store, start, end, dim, False)
        if lst is None:
            continue
        if lst == nodes[lst].next:
            nodes[lst].steiner = True
        queue.append(get_leftmost(nodes, lst))

    queue.sort(key=lambda q: (nodes[q].x, nodes[q].y))

    # process holes from left to right
    for q in queue:
        outer_node = eliminate_hole(nodes, q, outer_node)

    return outer_node


# find a bridge between vertices that connects hole with an outer ring and link it
def eliminate_hole(nodes, hole: int, outer_node: int) -> int:
    bridge = find_hole_bridge(nodes, hole, outer_node)
    if bridge is None:
        logger.debug("no bridge found for hole vertex %d", nodes[hole].i)
        return outer_node

    bridge_reverse = split_polygon(nodes, bridge, hole)

    # filter collinear points around the cuts
    filter_points(nodes, bridge_reverse, nodes[bridge_reverse].next)
    return filter_points(nodes, bridge, nodes[bridge].next)


# David Eberly's algorithm for finding a bridge between hole and outer polygon
def find_hole_bridge(nodes, hole_i: int, outer_node: int) -> Optional[int]:
    hole = nodes[hole_i]
    hx = hole.x
    hy = hole.y
    qx = -math.inf
    m_i = None

    # find a segment intersected by a ray from the hole's leftmost point to the left
    # segment's endpoint with lesser x will be potential connection point
    p_i = outer_node
    while True:
        p = nodes[p_i]
        p_next = nodes[p.next]
        if hy <= p.y and hy >= p_next.y and p_next.y != p.y:
            x = p.x + (hy - p.y) * (p_next.x - p.x) / (p_next.y - p.y)
            if x <= hx and x > qx:
                qx = x
                m_i = p_i if p.x < p_next.x else p.next
                if x == hx:
                    # hole touches outer segment; pick leftmost endpoint
                    return m_i
        p_i = p.next
        if p_i == outer_node:
            break

    if m_i is None:
        return None

    # look for points inside the triangle of hole point, segment intersection and endpoint
    # if there are no points found, we have a valid connection
    # otherwise choose the point of the minimum angle with the ray as connection point

    stop = m_i
    m = nodes[m_i]
    mx = m.x
    my = m.y
    tan_min = math.inf

    p_i = m_i
    while True:
        p = nodes[p_i]
        px = p.x
        py = p.y
        if (
            hx >= px
            and px >= mx
            and hx != px
            and point_in_triangle(
                hx if hy < my else qx,
                hy,
                mx,
                my,
                qx if hy < my else hx,
                hy,
                px,
                py,
            )
        ):
            tan = abs(hy - py) / (hx - px)  # tangential

            if locally_inside(nodes, p, hole) and (
                tan < tan_min
                or (tan == tan_min and (px > m.x or (px == m.x and sector_contains_sector(nodes, m, p))))
            ):
                m_i = p_i
                m = p
                tan_min = tan

        p_i = p.next
        if p_i == stop:
            return m_i
