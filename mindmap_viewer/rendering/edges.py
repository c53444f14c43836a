"""
Edge geometry.

Each parent -> child edge is a quadratic Bezier whose control point sits at
the chord midpoint, pushed sideways (perpendicular to the chord) by a fixed
offset. All coordinates are logical units.
"""

import math

from matplotlib.path import Path as MplPath

from mindmap_viewer.layout.radial import NodeBox

CONTROL_OFFSET = 30
ARROW_SIZE = 8


def control_point(parent: NodeBox, child: NodeBox) -> tuple[float, float]:
    """Midpoint of parent->child shifted CONTROL_OFFSET along the +90 degree normal."""
    mid_x = (parent.x + child.x) / 2
    mid_y = (parent.y + child.y) / 2
    perp = math.atan2(child.y - parent.y, child.x - parent.x) + math.pi / 2
    return (mid_x + math.cos(perp) * CONTROL_OFFSET,
            mid_y + math.sin(perp) * CONTROL_OFFSET)


def edge_path(parent: NodeBox, child: NodeBox) -> MplPath:
    """Quadratic curve from the parent center to the child center."""
    cx, cy = control_point(parent, child)
    return MplPath(
        [(parent.x, parent.y), (cx, cy), (child.x, child.y)],
        [MplPath.MOVETO, MplPath.CURVE3, MplPath.CURVE3],
    )


def arrowhead(parent: NodeBox, child: NodeBox,
              size: float = ARROW_SIZE) -> list[tuple[float, float]]:
    """
    Triangle with its tip on the child center.

    Oriented along the curve's end tangent (control point -> child), with
    the two barbs 30 degrees either side.
    """
    cx, cy = control_point(parent, child)
    end_angle = math.atan2(child.y - cy, child.x - cx)
    return [
        (child.x, child.y),
        (child.x - size * math.cos(end_angle - math.pi / 6),
         child.y - size * math.sin(end_angle - math.pi / 6)),
        (child.x - size * math.cos(end_angle + math.pi / 6),
         child.y - size * math.sin(end_angle + math.pi / 6)),
    ]
