"""
Radial Mind-Map Viewer
======================

Interactive radial mind-map layout, rendering and hit-testing on top of
matplotlib.

Usage:
    from mindmap_viewer import MindMapData, MindMapViewer

    mind_map = MindMapData.from_dict(payload)
    MindMapViewer(mind_map, on_close=lambda: None).show()
"""

from mindmap_viewer.data.model import MindMapData, MindMapNode, MindMapFormatError
from mindmap_viewer.layout.radial import NodeBox, compute_layout

__version__ = '1.0.0'


def __getattr__(name):
    # Lazy: the viewer module imports pyplot.
    if name == 'MindMapViewer':
        from mindmap_viewer.viewer import MindMapViewer
        return MindMapViewer
    raise AttributeError(f"module 'mindmap_viewer' has no attribute '{name}'")


__all__ = [
    'MindMapData',
    'MindMapNode',
    'MindMapFormatError',
    'MindMapViewer',
    'NodeBox',
    'compute_layout',
]
