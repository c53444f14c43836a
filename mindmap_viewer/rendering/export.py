"""
Static Snapshot Export
======================

Renders a single frame without a GUI and writes it as PNG or SVG.

Uses an object-oriented ``Figure`` (Agg canvas) rather than pyplot, so it can
run next to an open interactive viewer or in a headless job.

The image is exactly ``width`` x ``height`` pixels, the same canvas the layout
is computed for, so the root sits at the image center.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from matplotlib.figure import Figure

from config.settings import settings
from mindmap_viewer.data.model import MindMapData
from mindmap_viewer.interaction.state import ViewState
from mindmap_viewer.rendering.renderer import MindMapRenderer
from mindmap_viewer.rendering.styles import COLORS

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('png', 'svg')


def export_image(
    mind_map: MindMapData,
    path: Union[str, Path],
    width: Optional[int] = None,
    height: Optional[int] = None,
    dpi: Optional[int] = None,
    state: Optional[ViewState] = None,
    show_title: bool = True,
) -> Path:
    """
    Render ``mind_map`` and save it.

    Args:
        mind_map: Map to render.
        path: Output file; the suffix (.png or .svg) picks the format.
        width: Canvas width in pixels (default: settings.CANVAS_WIDTH).
        height: Canvas height in pixels (default: settings.CANVAS_HEIGHT).
        dpi: Output DPI (default: settings.EXPORT_DPI).
        state: Zoom/pan/hover/selection to render (default: fresh ViewState).
        show_title: Draw the map title in the top-left corner.

    Returns:
        Path to the written file.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    path = Path(path)
    fmt = path.suffix.lower().lstrip('.')
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported export format '{path.suffix}'. Use one of: "
            + ', '.join(f'.{f}' for f in SUPPORTED_FORMATS)
        )

    width = width or settings.CANVAS_WIDTH
    height = height or settings.CANVAS_HEIGHT
    dpi = dpi or settings.EXPORT_DPI
    state = state or ViewState()

    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi,
                 facecolor=COLORS['background'])
    ax = fig.add_axes((0, 0, 1, 1))
    frame = MindMapRenderer(ax, mind_map).draw(state)

    if show_title and mind_map.title:
        ax.text(
            0.02, 0.97, mind_map.title,
            transform=ax.transAxes,
            ha='left', va='top',
            fontsize=14, fontweight='bold',
            color=COLORS['chrome_text'],
            zorder=1000,
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(path), format=fmt, dpi=dpi, facecolor=COLORS['background'],
                edgecolor='none')

    logger.info('Mind map exported: %s (%d of %d nodes drawn)',
                path, len(frame.node_order), len(mind_map.nodes))
    return path
