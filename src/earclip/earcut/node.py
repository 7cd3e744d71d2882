from typing import NamedTuple, Optional

from .predicates import area, equals, signed_area


class LinkInfo(NamedTuple):
    prev: int
    next: int
    prev_z: Optional[int]
    next_z: Optional[int]


class Node:
    __slots__ = ["i", "x", "y", "prev", "next", "z", "prev_z", "next_z", "steiner"]
    i: int
    x: float
    y: float
    prev: int
    next: int
    z: Optional[int]
    prev_z: Optional[int]
    next_z: Optional[int]
    steiner: bool

    def __init__(self, i, x, y):
        # vertex index in coordinates array
        self.i = i

        # vertex coordinates
        self.x = x
        self.y = y

        # previous and next vertex nodes in a polygon ring (arena handles)
        self.prev = -1
        self.next = -1

        # z-order curve value
        self.z = None

        # previous and next nodes in z-order
        self.prev_z = None
        self.next_z = None

        # indicates whether this is a steiner point
        self.steiner = False

    def link_info(self) -> LinkInfo:
        return LinkInfo(self.prev, self.next, self.prev_z, self.next_z)

    def __repr__(self):
        return f"Node(i={self.i}, x={self.x}, y={self.y}, prev={self.prev}, next={self.next})"


class Store:
    """
    Working set of one triangulation

    A store can be reused for many sequential calls to
    :func:`earclip.earcut.earcut`; it is reset (cleared) at the start of
    every call. A store must not be shared between threads.

    Attributes
    ----------
    data: Sequence[float]
        Borrowed coordinate buffer of the current call
    nodes: List[:class:`Node`]
        Node arena; list positions are the handles stored in node links
    queue: List[int]
        Scratch list of node handles (hole ordering)
    """

    __slots__ = ("data", "nodes", "queue")

    def __init__(self, data=None):
        self.data = data if data is not None else []
        self.nodes: list[Node] = []
        self.queue: list[int] = []

    def reset(self, data) -> None:
        """Rebinds the coordinate buffer and clears the arena and the queue"""
        self.data = data
        self.nodes.clear()
        self.queue.clear()

    def __len__(self):
        return len(self.nodes)


# create a node and optionally link it with previous one (in a circular doubly linked list)
def insert_node(nodes, i, x, y, last: Optional[int]) -> int:
    p = Node(i, x, y)
    p_i = len(nodes)

    if last is None:
        p.prev = p_i
        p.next = p_i

    else:
        last_node = nodes[last]
        p.next = last_node.next
        p.prev = last
        nodes[last_node.next].prev = p_i
        last_node.next = p_i

    nodes.append(p)
    return p_i


# unlink a node from both lists given a snapshot of its links; the node itself is left untouched
def remove_node(nodes, link: LinkInfo) -> tuple[int, int]:
    nodes[link.prev].next = link.next
    nodes[link.next].prev = link.prev

    if link.prev_z is not None:
        nodes[link.prev_z].next_z = link.next_z

    if link.next_z is not None:
        nodes[link.next_z].prev_z = link.prev_z

    return link.prev, link.next


# link two polygon vertices with a bridge; if the vertices belong to the same ring, it splits polygon into two
# if one belongs to the outer ring and another to a hole, it merges it into a single ring
def split_polygon(nodes, a_i: int, b_i: int) -> int:
    a = nodes[a_i]
    b = nodes[b_i]
    a2_i = len(nodes)
    b2_i = a2_i + 1
    a2 = Node(a.i, a.x, a.y)
    b2 = Node(b.i, b.x, b.y)
    an_i = a.next
    bp_i = b.prev

    a.next = b_i
    b.prev = a_i

    a2.next = an_i
    nodes[an_i].prev = a2_i

    b2.next = a2_i
    a2.prev = b2_i

    nodes[bp_i].next = b2_i
    b2.prev = bp_i

    nodes.append(a2)
    nodes.append(b2)

    return b2_i


# eliminate colinear or duplicate points
def filter_points(nodes, start: Optional[int], end: Optional[int] = None) -> Optional[int]:
    if start is None:
        return start

    if end is None:
        end = start

    p_i = start
    while True:
        p = nodes[p_i]
        p_next = nodes[p.next]

        if not p.steiner and (equals(p, p_next) or area(nodes[p.prev], p, p_next) == 0):
            prev_i, next_i = remove_node(nodes, p.link_info())
            p_i = end = prev_i
            if p_i == next_i:
                return end

        else:
            p_i = p.next
            if p_i == end:
                return end


# find the leftmost node of a polygon ring
def get_leftmost(nodes, start: int) -> int:
    p_i = start
    leftmost = nodes[start]
    leftmost_i = start

    while True:
        p = nodes[p_i]
        if p.x < leftmost.x or (p.x == leftmost.x and p.y < leftmost.y):
            leftmost = p
            leftmost_i = p_i

        p_i = p.next
        if p_i == start:
            return leftmost_i


# create a circular doubly linked list from polygon points in the specified winding order
def linked_list(store: Store, start: int, end: int, dim: int, clockwise: bool) -> Optional[int]:
    data = store.data
    nodes = store.nodes
    last = None

    if clockwise == (signed_area(data, start, end, dim) > 0):
        for i in range(start, end, dim):
            last = insert_node(nodes, i, data[i], data[i + 1], last)
    else:
        for i in reversed(range(start, end, dim)):
            last = insert_node(nodes, i, data[i], data[i + 1], last)

    if last is not None:
        last_node = nodes[last]
        if equals(last_node, nodes[last_node.next]):
            _, last = remove_node(nodes, last_node.link_info())

    return last
