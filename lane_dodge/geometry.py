from collections import namedtuple

Box = namedtuple("Box", ["x", "y", "width", "height"])


def intersects(a, b):
    """Axis-aligned overlap test. Boxes that only share an edge do not overlap."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def first_hit(box, others):
    for other in others:
        if intersects(box, other):
            return other
    return None
