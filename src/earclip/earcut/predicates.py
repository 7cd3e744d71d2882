def signed_area(data, start, end, dim):
    sum = 0
    j = end - dim
    for i in range(start, end, dim):
        sum += (data[j] - data[i]) * (data[i + 1] + data[j + 1])
        j = i

    return sum


# signed area of a triangle
def area(p, q, r):
    return (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)


# check if two points are equal
def equals(p1, p2):
    return p1.x == p2.x and p1.y == p2.y


# check if a point lies within a convex triangle
def point_in_triangle(ax, ay, bx, by, cx, cy, px, py):
    return (
        (cx - px) * (ay - py) >= (ax - px) * (cy - py)
        and (ax - px) * (by - py) >= (bx - px) * (ay - py)
        and (bx - px) * (cy - py) >= (cx - px) * (by - py)
    )


def sign(num):
    if num > 0:
        return 1
    if num < 0:
        return -1
    return 0


# for collinear points p, q, r, check if point q lies on segment pr
def on_segment(p, q, r):
    return (
        q.x <= max(p.x, r.x)
        and q.x >= min(p.x, r.x)
        and q.y <= max(p.y, r.y)
        and q.y >= min(p.y, r.y)
    )


# check if two segments intersect
def intersects(p1, q1, p2, q2):
    o1 = sign(area(p1, q1, p2))
    o2 = sign(area(p1, q1, q2))
    o3 = sign(area(p2, q2, p1))
    o4 = sign(area(p2, q2, q1))

    if o1 != o2 and o3 != o4:
        return True  # general case

    if o1 == 0 and on_segment(p1, p2, q1):
        return True  # p1, q1 and p2 are collinear and p2 lies on p1q1
    if o2 == 0 and on_segment(p1, q2, q1):
        return True  # p1, q1 and q2 are collinear and q2 lies on p1q1
    if o3 == 0 and on_segment(p2, p1, q2):
        return True  # p2, q2 and p1 are collinear and p1 lies on p2q2
    if o4 == 0 and on_segment(p2, q1, q2):
        return True  # p2, q2 and q1 are collinear and q1 lies on p2q2

    return False


# check if a polygon diagonal intersects any polygon segments
def intersects_polygon(nodes, a, b):
    ai = a.i
    bi = b.i
    p = a
    while True:
        p_next = nodes[p.next]
        if (
            p.i != ai
            and p_next.i != ai
            and p.i != bi
            and p_next.i != bi
            and intersects(p, p_next, a, b)
        ):
            return True

        p = p_next
        if p is a:
            return False


# check if a polygon diagonal is locally inside the polygon
def locally_inside(nodes, a, b):
    a_prev = nodes[a.prev]
    a_next = nodes[a.next]
    if area(a_prev, a, a_next) < 0:
        return area(a, b, a_next) >= 0 and area(a, a_prev, b) >= 0
    else:
        return area(a, b, a_prev) < 0 or area(a, a_next, b) < 0


# check if the middle point of a polygon diagonal is inside the polygon
def middle_inside(nodes, a, b):
    p = a
    inside = False
    px = (a.x + b.x) / 2
    py = (a.y + b.y) / 2
    while True:
        p_next = nodes[p.next]
        if (
            (p.y > py) != (p_next.y > py)
            and p_next.y != p.y
            and px < (p_next.x - p.x) * (py - p.y) / (p_next.y - p.y) + p.x
        ):
            inside = not inside
        p = p_next
        if p is a:
            return inside


# whether sector in vertex m contains sector in vertex p in the same coordinates
def sector_contains_sector(nodes, m, p):
    return area(nodes[m.prev], m, nodes[p.prev]) < 0 and area(nodes[p.next], m, nodes[m.next]) < 0


# check if a diagonal between two polygon nodes is valid (lies in polygon interior)
def is_valid_diagonal(nodes, a, b):
    a_prev = nodes[a.prev]
    a_next = nodes[a.next]
    b_prev = nodes[b.prev]
    b_next = nodes[b.next]
    return (
        a_next.i != b.i
        and a_prev.i != b.i
        and not intersects_polygon(nodes, a, b)  # doesn't intersect other edges
        and (
            locally_inside(nodes, a, b)
            and locally_inside(nodes, b, a)
            and middle_inside(nodes, a, b)  # locally visible
            and (area(a_prev, a, b_prev) != 0 or area(a, b_prev, b) != 0)  # does not create opposite-facing sectors
            or equals(a, b)
            and area(a_prev, a, a_next) > 0
            and area(b_prev, b, b_next) > 0  # special zero-length case
        )
    )
