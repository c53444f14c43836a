"""
Node label typography and word wrapping.

Labels wrap greedily on single spaces to the node width minus 30 units of
horizontal padding, and are capped at 3 lines; when more lines were needed
the third is cut to 15 characters and ellipsized.
"""

from dataclasses import dataclass
from typing import Callable

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import text_to_path

from mindmap_viewer.data.model import MindMapNode

HORIZONTAL_PADDING = 30
MAX_LINES = 3
TRUNCATE_AT = 15
ELLIPSIS = '...'

FONT_FAMILY = 'sans-serif'


@dataclass(frozen=True)
class LabelFont:
    size: float         # Logical pixels
    weight: str
    line_height: float


ROOT_FONT = LabelFont(17, 'bold', 22)
BRANCH_FONT = LabelFont(14, 'bold', 19)
DETAIL_FONT = LabelFont(13, 'normal', 17)
CAPTION_FONT = LabelFont(10, 'normal', 12)


def label_font(node: MindMapNode) -> LabelFont:
    """Central nodes largest, then level 1, then everything deeper."""
    if node.is_central:
        return ROOT_FONT
    if node.level == 1:
        return BRANCH_FONT
    return DETAIL_FONT


def measure_text(text: str, font: LabelFont) -> float:
    """Advance width of ``text`` in logical pixels."""
    if not text:
        return 0.0
    prop = FontProperties(family=FONT_FAMILY, weight=font.weight, size=font.size)
    width, _, _ = text_to_path.get_text_width_height_descent(text, prop, ismath=False)
    return width


def wrap_label(label: str, max_width: float,
               measure: Callable[[str], float]) -> list[str]:
    """
    Greedy word wrap, capped at MAX_LINES.

    A single word wider than ``max_width`` stays on its own line rather than
    being broken.
    """
    lines: list[str] = []
    current = ''
    for word in label.split(' '):
        candidate = current + (' ' if current else '') + word
        if measure(candidate) > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)

    display = lines[:MAX_LINES]
    if len(lines) > MAX_LINES:
        display[-1] = display[-1][:TRUNCATE_AT] + ELLIPSIS
    return display


def layout_label(node: MindMapNode, box_width: float) -> tuple[list[str], LabelFont]:
    """Wrapped lines and font for a node drawn ``box_width`` units wide."""
    font = label_font(node)
    lines = wrap_label(node.label, box_width - HORIZONTAL_PADDING,
                       lambda s: measure_text(s, font))
    return lines, font


def line_offsets(line_count: int, line_height: float) -> list[float]:
    """Vertical offsets of each line's center from the node center."""
    total = line_count * line_height
    first = -total / 2 + line_height / 2
    return [first + i * line_height for i in range(line_count)]
