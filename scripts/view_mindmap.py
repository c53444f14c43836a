"""
Mind Map Viewer CLI
===================

Opens a mind map JSON file in the interactive viewer, or renders it headlessly
to PNG/SVG.

Accepts either a bare map ``{"title": ..., "nodes": [...]}`` or the API
envelope ``{"success": true, "data": {"mindMap": {...}}}``.

Usage:
    python scripts/view_mindmap.py map.json                     # Interactive
    python scripts/view_mindmap.py --sample                     # Built-in sample
    python scripts/view_mindmap.py map.json --export out.png    # Headless PNG in OUTPUT_DIR
    python scripts/view_mindmap.py map.json --export out.png --output-dir renders
    python scripts/view_mindmap.py --sample --export out.svg --zoom 1.5 --select 2
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import settings
from mindmap_viewer.data.loader import load_mind_map
from mindmap_viewer.data.model import MindMapFormatError
from mindmap_viewer.data.samples import build_sample_map
from mindmap_viewer.interaction.state import MAX_ZOOM, WHEEL_MIN_ZOOM, ViewState
from mindmap_viewer.utils.log import get_logger

logger = get_logger('mindmap_viewer')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='View a radial mind map interactively or export it as PNG/SVG.'
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        'path', nargs='?', type=Path,
        help='Mind map JSON file',
    )
    source.add_argument(
        '--sample', action='store_true',
        help='Use the built-in sample map',
    )
    parser.add_argument(
        '--export', type=Path, metavar='PATH',
        help='Render headlessly to PATH (.png or .svg) instead of opening a window; '
             'relative paths are placed under --output-dir',
    )
    parser.add_argument(
        '--output-dir', type=Path, default=settings.OUTPUT_DIR,
        help=f'Directory for relative --export paths (default: {settings.OUTPUT_DIR})',
    )
    parser.add_argument(
        '--width', type=int, default=settings.CANVAS_WIDTH,
        help=f'Canvas width in pixels (default: {settings.CANVAS_WIDTH})',
    )
    parser.add_argument(
        '--height', type=int, default=settings.CANVAS_HEIGHT,
        help=f'Canvas height in pixels (default: {settings.CANVAS_HEIGHT})',
    )
    parser.add_argument(
        '--dpi', type=int, default=settings.EXPORT_DPI,
        help=f'Export DPI (default: {settings.EXPORT_DPI})',
    )
    parser.add_argument(
        '--zoom', type=float, default=1.0,
        help=f'Initial zoom, {WHEEL_MIN_ZOOM} to {MAX_ZOOM} (default: 1.0)',
    )
    parser.add_argument(
        '--select', metavar='NODE_ID',
        help='Initially selected node id',
    )
    return parser


def initial_state(args, mind_map) -> ViewState:
    """ViewState from --zoom/--select; unknown node ids are ignored with a warning."""
    state = ViewState(zoom=max(WHEEL_MIN_ZOOM, min(args.zoom, MAX_ZOOM)))
    if args.select:
        if mind_map.get_node(args.select) is None:
            logger.warning('Unknown node id, nothing selected', node_id=args.select)
        else:
            state.selected = args.select
    return state


def export_path(args) -> Path:
    """--export as given when absolute, else under --output-dir."""
    if args.export.is_absolute():
        return args.export
    return args.output_dir / args.export


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        mind_map = build_sample_map() if args.sample else load_mind_map(args.path)
    except FileNotFoundError:
        print(f'[ERROR] File not found: {args.path}')
        return 1
    except MindMapFormatError as e:
        print(f'[ERROR] Invalid mind map: {e}')
        return 1

    state = initial_state(args, mind_map)

    if args.export:
        from mindmap_viewer.rendering.export import export_image

        print('=' * 60)
        print(f'Exporting: {mind_map.title}')
        print('=' * 60)
        try:
            out = export_image(mind_map, export_path(args), width=args.width,
                               height=args.height, dpi=args.dpi, state=state)
        except ValueError as e:
            print(f'[ERROR] {e}')
            return 1
        print(f'  Nodes: {len(mind_map.nodes)}')
        print(f'  Saved: {out}')
        return 0

    import matplotlib.pyplot as plt
    from mindmap_viewer.viewer import MindMapViewer

    figure = plt.figure(figsize=(args.width / args.dpi, args.height / args.dpi), dpi=args.dpi)
    viewer = MindMapViewer(mind_map, on_close=lambda: logger.info('Window closed'),
                           figure=figure)
    viewer.state.zoom = state.zoom
    viewer.state.selected = state.selected
    viewer.redraw()
    viewer.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())
