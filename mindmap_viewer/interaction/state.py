"""
Viewer Interaction State
========================

Ephemeral per-viewer state and the transitions driven by pointer, wheel and
button events. Nothing here draws; the viewer redraws whenever a transition
reports a change.

Three independent machines share this object:

    drag:       idle -> dragging (pointer-down off any node) -> idle (pointer-up)
    hover:      none <-> node id   (pointer-move while not dragging)
    selection:  none <-> node id   (pointer-down on the hovered node toggles)
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

WHEEL_STEP = 0.1
WHEEL_MIN_ZOOM = 0.3
BUTTON_STEP = 0.2
BUTTON_MIN_ZOOM = 0.5
MAX_ZOOM = 3.0

HitTest = Callable[[float, float], Optional[str]]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


@dataclass
class ViewState:
    """Zoom, pan offset, hover/selection and drag bookkeeping."""
    zoom: float = 1.0
    offset: tuple[float, float] = (0.0, 0.0)
    hovered: Optional[str] = None
    selected: Optional[str] = None
    dragging: bool = False
    drag_anchor: tuple[float, float] = field(default=(0.0, 0.0))

    # ------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> bool:
        """
        Click on the hovered node toggles its selection; anywhere else starts a pan.

        Uses the hover target from the last pointer-move, not a fresh hit-test.

        Returns:
            True if the state changed.
        """
        if self.hovered is not None:
            self.selected = None if self.selected == self.hovered else self.hovered
            return True

        self.dragging = True
        self.drag_anchor = (x - self.offset[0], y - self.offset[1])
        return True

    def pointer_move(self, x: float, y: float, hit_test: HitTest) -> bool:
        """Pan 1:1 in screen space while dragging, otherwise update hover."""
        if self.dragging:
            new_offset = (x - self.drag_anchor[0], y - self.drag_anchor[1])
            changed = new_offset != self.offset
            self.offset = new_offset
            return changed

        hovered = hit_test(x, y)
        changed = hovered != self.hovered
        self.hovered = hovered
        return changed

    def pointer_up(self) -> bool:
        """End a drag; no-op when idle."""
        if not self.dragging:
            return False
        self.dragging = False
        return True

    # ------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------

    def wheel(self, delta_y: float) -> bool:
        """Scroll down (positive delta) zooms out by 0.1, up zooms in; clamp [0.3, 3.0]."""
        delta = -WHEEL_STEP if delta_y > 0 else WHEEL_STEP
        return self._set_zoom(_clamp(self.zoom + delta, WHEEL_MIN_ZOOM, MAX_ZOOM))

    def zoom_in(self) -> bool:
        return self._set_zoom(min(self.zoom + BUTTON_STEP, MAX_ZOOM))

    def zoom_out(self) -> bool:
        # Button floor is 0.5, above the wheel floor of 0.3.
        return self._set_zoom(max(self.zoom - BUTTON_STEP, BUTTON_MIN_ZOOM))

    def reset(self) -> bool:
        """Zoom back to 100% and drop any pan."""
        changed = self.zoom != 1.0 or self.offset != (0.0, 0.0)
        self.zoom = 1.0
        self.offset = (0.0, 0.0)
        return changed

    def clear_selection(self) -> bool:
        changed = self.selected is not None
        self.selected = None
        return changed

    def _set_zoom(self, zoom: float) -> bool:
        changed = zoom != self.zoom
        self.zoom = zoom
        return changed

    @property
    def zoom_percent(self) -> int:
        return round(self.zoom * 100)
