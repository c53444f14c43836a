"""
Pointer hit-testing.

Every call recomputes the full layout with the same inputs the draw pass
uses; there is no cached position map to go stale.
"""

from typing import Iterable, Optional

from mindmap_viewer.data.model import MindMapNode
from mindmap_viewer.interaction.state import ViewState
from mindmap_viewer.layout.radial import compute_layout


def screen_to_logical(x: float, y: float, zoom: float,
                      offset: tuple[float, float]) -> tuple[float, float]:
    """Undo translate-then-scale: ``(screen - offset) / zoom``."""
    return (x - offset[0]) / zoom, (y - offset[1]) / zoom


def hit_test(nodes: Iterable[MindMapNode], state: ViewState,
             canvas_width: float, canvas_height: float,
             x: float, y: float) -> Optional[str]:
    """
    Find the node under a screen-space pointer.

    Args:
        nodes: Node collection being displayed.
        state: Current zoom/offset.
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        x: Pointer x in canvas pixels.
        y: Pointer y in canvas pixels (y grows downward).

    Returns:
        Id of the matching node, or None. When boxes overlap the last node
        in collection order wins.
    """
    nodes = list(nodes)
    positions = compute_layout(nodes, canvas_width, canvas_height, state.zoom, state.offset)
    lx, ly = screen_to_logical(x, y, state.zoom, state.offset)

    found = None
    for node in nodes:
        box = positions.get(node.id)
        if box is not None and box.contains(lx, ly):
            found = node.id
    return found
