"""
Interactive Mind Map Viewer
===========================

A matplotlib window showing one mind map:

    - Header with the map title and a usage hint
    - Zoom out / zoom in / reset / close buttons and a zoom read-out
    - The canvas: drag to pan, scroll to zoom, hover to preview,
      click a node to select it (click again to deselect)
    - Hover tooltip (top-left) and selection panel (top-right)
    - Legend footer

All state lives in a ViewState; every event handler applies one transition
and redraws only if it reported a change. Layout is recomputed on each draw
and each hit-test.

Usage:
    from mindmap_viewer import MindMapViewer
    from mindmap_viewer.data.loader import load_mind_map

    viewer = MindMapViewer(load_mind_map('map.json'), on_close=lambda: print('bye'))
    viewer.show()
"""

import logging
from typing import Callable, Optional

import matplotlib.pyplot as plt
from matplotlib.backend_tools import Cursors
from matplotlib.patches import Rectangle
from matplotlib.widgets import Button

from config.settings import settings
from mindmap_viewer.data.model import MindMapData
from mindmap_viewer.interaction.hit_testing import hit_test
from mindmap_viewer.interaction.state import ViewState
from mindmap_viewer.rendering.renderer import MindMapRenderer, RenderedFrame
from mindmap_viewer.rendering.styles import COLORS, LEGEND_ITEMS

logger = logging.getLogger(__name__)

HINT = 'Drag to pan • Scroll/buttons to zoom • Click nodes to select • Hover to preview'

LEFT_BUTTON = 1

# Figure regions (figure fractions)
CANVAS_RECT = (0.0, 0.06, 1.0, 0.85)
ZOOM_OUT_RECT = (0.70, 0.925, 0.045, 0.05)
ZOOM_IN_RECT = (0.80, 0.925, 0.045, 0.05)
RESET_RECT = (0.855, 0.925, 0.06, 0.05)
CLOSE_RECT = (0.925, 0.925, 0.06, 0.05)
DISMISS_RECT = (0.955, 0.855, 0.025, 0.035)

PANEL_BOX = dict(boxstyle='round,pad=0.6', facecolor='white',
                 edgecolor='#e5e7eb', alpha=0.95)


def children_caption(count: int) -> str:
    """'1 sub-topic' / 'N sub-topics'."""
    return f"{count} sub-topic{'s' if count > 1 else ''}"


class MindMapViewer:
    """
    Interactive viewer for a MindMapData.

    Args:
        mind_map: Map to display.
        on_close: Called once when the close button is pressed or the
            window is closed.
        figure: Figure to draw into. A new pyplot figure sized from
            settings is created when omitted.
    """

    def __init__(self, mind_map: MindMapData, on_close: Callable[[], None],
                 figure=None):
        self.mind_map = mind_map
        self.on_close = on_close
        self.state = ViewState()
        self.frame: Optional[RenderedFrame] = None
        self._closed = False

        if figure is None:
            dpi = settings.EXPORT_DPI
            figure = plt.figure(
                figsize=(settings.CANVAS_WIDTH / dpi, settings.CANVAS_HEIGHT / dpi),
                dpi=dpi,
            )
        self.figure = figure
        self.figure.set_facecolor(COLORS['background'])

        self.ax = self.figure.add_axes(CANVAS_RECT)
        self.renderer = MindMapRenderer(self.ax, mind_map)

        self._build_header()
        self._build_controls()
        self._build_overlays()
        self._build_legend()

        canvas = self.figure.canvas
        self._cids = [
            canvas.mpl_connect('button_press_event', self.on_press),
            canvas.mpl_connect('motion_notify_event', self.on_motion),
            canvas.mpl_connect('button_release_event', self.on_release),
            canvas.mpl_connect('scroll_event', self.on_scroll),
            canvas.mpl_connect('axes_leave_event', self.on_leave),
            canvas.mpl_connect('resize_event', self.on_resize),
            canvas.mpl_connect('close_event', self.on_window_close),
        ]

        logger.info('Viewer opened: %s (%d nodes)', mind_map.title, len(mind_map.nodes))
        self.redraw()

    # ============================================================
    # CHROME
    # ============================================================

    def _build_header(self):
        fig = self.figure
        fig.text(0.02, 0.965, self.mind_map.title, ha='left', va='center',
                 fontsize=16, fontweight='bold', color=COLORS['chrome_text'])
        fig.text(0.02, 0.93, HINT, ha='left', va='center',
                 fontsize=9, color=COLORS['muted'])

    def _build_controls(self):
        fig = self.figure
        self.zoom_out_button = Button(fig.add_axes(ZOOM_OUT_RECT), '−')
        self.zoom_in_button = Button(fig.add_axes(ZOOM_IN_RECT), '+')
        self.reset_button = Button(fig.add_axes(RESET_RECT), 'Reset')
        self.close_button = Button(fig.add_axes(CLOSE_RECT), 'Close',
                                   color=COLORS['accent'], hovercolor=COLORS['accent_light'])
        self.close_button.label.set_color('white')

        self.zoom_text = fig.text(0.7725, 0.95, '', ha='center', va='center',
                                  fontsize=10, color=COLORS['chrome_text'])

        self.zoom_out_button.on_clicked(lambda _event: self.zoom_out())
        self.zoom_in_button.on_clicked(lambda _event: self.zoom_in())
        self.reset_button.on_clicked(lambda _event: self.reset_view())
        self.close_button.on_clicked(lambda _event: self.close())

    def _build_overlays(self):
        fig = self.figure
        self.tooltip = fig.text(0.02, 0.89, '', ha='left', va='top', fontsize=10,
                                color=COLORS['chrome_text'], bbox=PANEL_BOX,
                                zorder=100, visible=False)
        self.selection_panel = fig.text(0.945, 0.89, '', ha='right', va='top',
                                        fontsize=10, color=COLORS['chrome_text'],
                                        bbox=PANEL_BOX, zorder=100, visible=False)

        self.dismiss_button = Button(fig.add_axes(DISMISS_RECT), '×')
        self.dismiss_button.on_clicked(lambda _event: self.dismiss_selection())
        self._set_dismiss_visible(False)

    def _build_legend(self):
        fig = self.figure
        x = 0.02
        for label, color in LEGEND_ITEMS:
            fig.add_artist(Rectangle((x, 0.018), 0.012, 0.018, facecolor=color,
                                     edgecolor='none', transform=fig.transFigure))
            fig.text(x + 0.018, 0.027, label, ha='left', va='center',
                     fontsize=9, color=COLORS['muted'])
            x += 0.13
        fig.text(0.98, 0.027,
                 f'{len(self.mind_map.nodes)} nodes • Interactive visualization',
                 ha='right', va='center', fontsize=9, color=COLORS['muted'])

    def _set_dismiss_visible(self, visible: bool):
        self.dismiss_button.ax.set_visible(visible)
        self.dismiss_button.set_active(visible)

    def _update_chrome(self):
        self.zoom_text.set_text(f'{self.state.zoom_percent}%')

        hovered = self.mind_map.get_node(self.state.hovered) if self.state.hovered else None
        if hovered is not None:
            self.tooltip.set_text(f'{hovered.label}\nLevel {hovered.level} • Click to select')
        self.tooltip.set_visible(hovered is not None)

        selected = self.mind_map.get_node(self.state.selected) if self.state.selected else None
        if selected is not None:
            self.selection_panel.set_text(self.selection_details(selected.id))
        self.selection_panel.set_visible(selected is not None)
        self._set_dismiss_visible(selected is not None)

    def selection_details(self, node_id: str) -> str:
        """Panel text: label, level, then parent and child count when present."""
        node = self.mind_map.get_node(node_id)
        if node is None:
            return ''
        lines = [node.label, f'Level {node.level}']
        parent = self.mind_map.get_parent(node)
        if parent is not None:
            lines.append(f'Parent: {parent.label}')
        children = self.mind_map.get_children(node.id)
        if children:
            lines.append(children_caption(len(children)))
        return '\n'.join(lines)

    def _update_cursor(self):
        if self.state.dragging:
            cursor = Cursors.MOVE
        elif self.state.hovered is not None:
            cursor = Cursors.HAND
        else:
            cursor = Cursors.POINTER
        self.figure.canvas.set_cursor(cursor)

    # ============================================================
    # DRAWING
    # ============================================================

    def redraw(self):
        """Draw a fresh frame and refresh the chrome."""
        self.frame = self.renderer.draw(self.state)
        self._update_chrome()
        self.figure.canvas.draw_idle()

    def _hit_test(self, x: float, y: float) -> Optional[str]:
        width, height = self.renderer.canvas_size()
        return hit_test(self.mind_map.nodes, self.state, width, height, x, y)

    # ============================================================
    # EVENT HANDLERS
    # ============================================================

    def _in_canvas(self, event) -> bool:
        return (event.inaxes is self.ax
                and event.xdata is not None and event.ydata is not None)

    def on_press(self, event):
        if not self._in_canvas(event) or event.button != LEFT_BUTTON:
            return
        if self.state.pointer_down(event.xdata, event.ydata):
            if self.state.selected is not None:
                logger.debug('Node selected: %s', self.state.selected)
            self._update_cursor()
            self.redraw()

    def on_motion(self, event):
        if not self._in_canvas(event):
            return
        if self.state.pointer_move(event.xdata, event.ydata, self._hit_test):
            self._update_cursor()
            self.redraw()

    def on_release(self, event):
        if self.state.pointer_up():
            self._update_cursor()

    def on_scroll(self, event):
        if not self._in_canvas(event):
            return
        # matplotlib: step > 0 is scroll up, which zooms in
        if self.state.wheel(-event.step):
            self.redraw()

    def on_leave(self, event):
        if event.inaxes is not self.ax:
            return
        if self.state.pointer_up():
            self._update_cursor()

    def on_resize(self, event):
        self.redraw()

    def on_window_close(self, event):
        self._notify_close()

    # ============================================================
    # CONTROLS
    # ============================================================

    def zoom_in(self):
        if self.state.zoom_in():
            self.redraw()

    def zoom_out(self):
        if self.state.zoom_out():
            self.redraw()

    def reset_view(self):
        if self.state.reset():
            self.redraw()

    def dismiss_selection(self):
        if self.state.clear_selection():
            self.redraw()

    def close(self):
        """Close button: notify the owner, then close the window."""
        self._notify_close()
        plt.close(self.figure)

    def _notify_close(self):
        if self._closed:
            return
        self._closed = True
        for cid in self._cids:
            self.figure.canvas.mpl_disconnect(cid)
        logger.info('Viewer closed: %s', self.mind_map.title)
        self.on_close()

    def show(self):
        """Enter the GUI main loop until the window closes."""
        plt.show()
