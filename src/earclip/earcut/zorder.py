from typing import Optional

# polygons with more coordinates than this many vertices use the z-order hash
HASH_THRESHOLD = 80

# coords are scaled into a non-negative 15-bit integer range
Z_ORDER_SCALE = 32767


def bounding_box(data, outer_len, dim):
    min_x = max_x = data[0]
    min_y = max_y = data[1]

    for i in range(dim, outer_len, dim):
        x = data[i]
        y = data[i + 1]
        if x < min_x:
            min_x = x
        if y < min_y:
            min_y = y
        if x > max_x:
            max_x = x
        if y > max_y:
            max_y = y

    return min_x, min_y, max_x, max_y


# inverse of the longer side of the data bbox; 0 disables hashing for degenerate boxes
def inverse_size(min_x, min_y, max_x, max_y):
    size = max(max_x - min_x, max_y - min_y)
    return Z_ORDER_SCALE / size if size != 0 else 0


# z-order of a point given coords and inverse of the longer side of data bbox
def z_order(x, y, min_x, min_y, inv_size):
    x = int((x - min_x) * inv_size)
    y = int((y - min_y) * inv_size)

    x = (x | (x << 8)) & 0x00FF00FF
    x = (x | (x << 4)) & 0x0F0F0F0F
    x = (x | (x << 2)) & 0x33333333
    x = (x | (x << 1)) & 0x55555555

    y = (y | (y << 8)) & 0x00FF00FF
    y = (y | (y << 4)) & 0x0F0F0F0F
    y = (y | (y << 2)) & 0x33333333
    y = (y | (y << 1)) & 0x55555555

    return x | (y << 1)


# interlink polygon nodes in z-order
def index_curve(nodes, start, min_x, min_y, inv_size):
    p_i = start
    while True:
        p = nodes[p_i]
        if p.z is None:
            p.z = z_order(p.x, p.y, min_x, min_y, inv_size)
        p.prev_z = p.prev
        p.next_z = p.next
        p_i = p.next
        if p_i == start:
            break

    head = nodes[start]
    nodes[head.prev_z].next_z = None
    head.prev_z = None

    return sort_linked(nodes, start)


# Simon Tatham's linked list merge sort algorithm
# http://www.chiark.greenend.org.uk/~sgtatham/algorithms/listsort.html
def sort_linked(nodes, head: Optional[int]) -> Optional[int]:
    in_size = 1

    while True:
        p_i = head
        head = None
        tail = None
        num_merges = 0

        while p_i is not None:
            num_merges += 1
            q_i = p_i
            p_size = 0
            for _ in range(in_size):
                p_size += 1
                q_i = nodes[q_i].next_z
                if q_i is None:
                    break
            q_size = in_size

            while p_size > 0 or (q_size > 0 and q_i is not None):
                if p_size != 0 and (q_size == 0 or q_i is None or nodes[p_i].z <= nodes[q_i].z):
                    e_i = p_i
                    p_i = nodes[p_i].next_z
                    p_size -= 1
                else:
                    e_i = q_i
                    q_i = nodes[q_i].next_z
                    q_size -= 1

                if tail is not None:
                    nodes[tail].next_z = e_i
                else:
                    head = e_i

                nodes[e_i].prev_z = tail
                tail = e_i

            p_i = q_i

        nodes[tail].next_z = None
        in_size *= 2

        if num_merges <= 1:
            return head
