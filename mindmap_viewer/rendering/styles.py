"""
Visual Styles
=============

Colors, stroke widths and shadows for nodes and edges in each interaction
state. Everything here is plain data; ``renderer`` turns it into artists.
"""

from dataclasses import dataclass
from typing import Optional

from matplotlib.colors import to_rgba

RGBA = tuple[float, float, float, float]

# ============================================================
# COLOR PALETTE (matches the course mind-map generator)
# ============================================================

COLORS = {
    'accent': '#633ff3',        # Selected edges, arrowheads, main topics
    'accent_light': '#8b5cf6',  # Hover-highlighted edges, subtopics
    'detail': '#a78bfa',        # Detail leaves
    'edge': '#d0d0d0',          # Neutral edges
    'text': '#ffffff',          # Node labels
    'background': '#f5f5f7',    # Canvas
    'chrome_text': '#111827',   # Header title
    'muted': '#4b5563',         # Hints, legend labels
}

LEGEND_ITEMS = [
    ('Main Topics', COLORS['accent']),
    ('Subtopics', COLORS['accent_light']),
    ('Details', COLORS['detail']),
]

# Alpha suffixes used by the generator's color scheme ('#rrggbb' + 'aa')
ALPHA_CC = 0xcc / 255
ALPHA_DD = 0xdd / 255
ALPHA_BB = 0xbb / 255
ALPHA_AA = 0xaa / 255
ALPHA_60 = 0x60 / 255
ALPHA_40 = 0x40 / 255

ROOT_CORNER_RADIUS = 35
NODE_CORNER_RADIUS = 20

EDGE_WIDTH = 2.5
EDGE_WIDTH_HOVER = 4
EDGE_WIDTH_SELECTED = 5


def with_alpha(color: str, alpha: float) -> RGBA:
    """RGBA tuple for ``color`` with its alpha replaced."""
    return to_rgba(color, alpha=alpha)


# ============================================================
# NODE STYLE
# ============================================================

@dataclass(frozen=True)
class Shadow:
    color: RGBA
    blur: float
    offset_y: float


@dataclass(frozen=True)
class NodeStyle:
    """
    Resolved look of one node.

    ``gradient`` runs from the top-left to the bottom-right corner.
    ``strokes`` are drawn in order, so later strokes sit on top.
    """
    gradient: tuple[RGBA, RGBA]
    corner_radius: float
    strokes: tuple[tuple[RGBA, float], ...]
    shadow: Optional[Shadow]


SHADOW_SELECTED = Shadow(to_rgba((99 / 255, 63 / 255, 243 / 255, 0.5)), blur=30, offset_y=8)
SHADOW_HOVERED = Shadow(to_rgba((99 / 255, 63 / 255, 243 / 255, 0.4)), blur=25, offset_y=6)
SHADOW_ROOT = Shadow(to_rgba((0.0, 0.0, 0.0, 0.15)), blur=15, offset_y=4)


def node_style(color: str, *, central: bool, hovered: bool, selected: bool,
               connected: bool) -> NodeStyle:
    """
    Pick gradient, border and shadow for a node.

    Precedence for the fill is selected > hovered > connected > plain; the
    border treats hovered and connected alike.
    """
    if selected:
        gradient = (with_alpha(color, 1.0), with_alpha(color, 1.0))
    elif hovered:
        gradient = (with_alpha(color, 1.0), with_alpha(color, ALPHA_CC))
    elif connected:
        gradient = (with_alpha(color, ALPHA_DD), with_alpha(color, ALPHA_AA))
    else:
        gradient = (with_alpha(color, ALPHA_DD), with_alpha(color, ALPHA_BB))

    white = to_rgba('#ffffff')
    if selected:
        strokes = ((white, 4), (with_alpha(color, ALPHA_60), 8))
    elif hovered or connected:
        strokes = ((white, 3), (with_alpha(color, ALPHA_40), 6))
    else:
        strokes = ((with_alpha('#ffffff', 0.4), 2),)

    if selected:
        shadow = SHADOW_SELECTED
    elif hovered:
        shadow = SHADOW_HOVERED
    elif central:
        shadow = SHADOW_ROOT
    else:
        shadow = None

    return NodeStyle(
        gradient=gradient,
        corner_radius=ROOT_CORNER_RADIUS if central else NODE_CORNER_RADIUS,
        strokes=strokes,
        shadow=shadow,
    )


# ============================================================
# EDGE STYLE
# ============================================================

@dataclass(frozen=True)
class EdgeStyle:
    color: str
    width: float
    highlighted: bool


def edge_style(parent_id: str, child_id: str, hovered: Optional[str],
               selected: Optional[str]) -> EdgeStyle:
    """Thick accent edge (with arrowhead) when either end is hovered or selected."""
    ends = (parent_id, child_id)
    is_selected = selected is not None and selected in ends
    is_highlighted = is_selected or (hovered is not None and hovered in ends)

    if not is_highlighted:
        return EdgeStyle(COLORS['edge'], EDGE_WIDTH, False)
    if is_selected:
        return EdgeStyle(COLORS['accent'], EDGE_WIDTH_SELECTED, True)
    return EdgeStyle(COLORS['accent_light'], EDGE_WIDTH_HOVER, True)
