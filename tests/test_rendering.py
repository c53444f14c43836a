"""
Tests for edge geometry, styles, label typography, the renderer and export.

Tests cover:
    - Bezier control point and arrowhead geometry
    - Node/edge style resolution per interaction state
    - Paint order (deepest first, root last)
    - Label wrapping and truncation
    - Full frame drawing onto an Agg axes
    - PNG exact size and SVG validity
"""

import math
import xml.etree.ElementTree as ET

import numpy as np
import pytest
from matplotlib.figure import Figure
from matplotlib.patches import Polygon
from matplotlib.path import Path as MplPath
from PIL import Image

from mindmap_viewer.data.model import MindMapNode
from mindmap_viewer.interaction.state import ViewState
from mindmap_viewer.layout.radial import NodeBox
from mindmap_viewer.rendering.edges import (
    ARROW_SIZE,
    CONTROL_OFFSET,
    arrowhead,
    control_point,
    edge_path,
)
from mindmap_viewer.rendering.export import export_image
from mindmap_viewer.rendering.renderer import (
    BLUR_TO_SIGMA,
    MindMapRenderer,
    ShadowBlur,
    draw_order,
    gradient_image,
)
from mindmap_viewer.rendering.styles import (
    COLORS,
    EDGE_WIDTH,
    EDGE_WIDTH_HOVER,
    EDGE_WIDTH_SELECTED,
    NODE_CORNER_RADIUS,
    ROOT_CORNER_RADIUS,
    SHADOW_HOVERED,
    SHADOW_ROOT,
    SHADOW_SELECTED,
    edge_style,
    node_style,
)
from mindmap_viewer.rendering.text import (
    BRANCH_FONT,
    DETAIL_FONT,
    ELLIPSIS,
    ROOT_FONT,
    label_font,
    layout_label,
    line_offsets,
    measure_text,
    wrap_label,
)


@pytest.fixture
def canvas_axes():
    """800x600 pixel Axes filling an object-oriented Figure."""
    fig = Figure(figsize=(8, 6), dpi=100)
    return fig.add_axes((0, 0, 1, 1))


# ============================================================
# EDGE GEOMETRY
# ============================================================

class TestEdgeGeometry:

    def test_control_point_perpendicular_offset(self):
        parent = NodeBox(0, 0, 10, 10)
        child = NodeBox(100, 0, 10, 10)
        cx, cy = control_point(parent, child)
        assert cx == pytest.approx(50)
        assert cy == pytest.approx(CONTROL_OFFSET)

    def test_edge_path_is_quadratic(self):
        path = edge_path(NodeBox(0, 0, 1, 1), NodeBox(0, 100, 1, 1))
        assert list(path.codes) == [MplPath.MOVETO, MplPath.CURVE3, MplPath.CURVE3]
        assert tuple(path.vertices[0]) == (0, 0)
        assert tuple(path.vertices[-1]) == (0, 100)

    def test_arrowhead_tip_on_child(self):
        parent = NodeBox(0, 0, 1, 1)
        child = NodeBox(100, 50, 1, 1)
        tip, left, right = arrowhead(parent, child)
        assert tip == (100, 50)
        assert math.dist(tip, left) == pytest.approx(ARROW_SIZE)
        assert math.dist(tip, right) == pytest.approx(ARROW_SIZE)
        # Barbs 60 degrees apart, so the triangle is equilateral
        assert math.dist(left, right) == pytest.approx(ARROW_SIZE)


# ============================================================
# STYLES
# ============================================================

class TestEdgeStyle:

    def test_neutral(self):
        style = edge_style('r', 'a', None, None)
        assert (style.color, style.width, style.highlighted) == (COLORS['edge'], EDGE_WIDTH, False)

    def test_hovered_end(self):
        style = edge_style('r', 'a', 'a', None)
        assert (style.color, style.width, style.highlighted) == (
            COLORS['accent_light'], EDGE_WIDTH_HOVER, True)

    def test_selected_end_wins_over_hover(self):
        style = edge_style('r', 'a', 'a', 'r')
        assert (style.color, style.width, style.highlighted) == (
            COLORS['accent'], EDGE_WIDTH_SELECTED, True)

    def test_unrelated_hover(self):
        assert not edge_style('r', 'a', 'b', None).highlighted


class TestNodeStyle:

    def _style(self, **overrides):
        flags = dict(central=False, hovered=False, selected=False, connected=False)
        flags.update(overrides)
        return node_style('#8b5cf6', **flags)

    def test_plain(self):
        style = self._style()
        assert style.shadow is None
        assert style.corner_radius == NODE_CORNER_RADIUS
        assert len(style.strokes) == 1
        assert style.gradient[0][3] == pytest.approx(0xdd / 255)
        assert style.gradient[1][3] == pytest.approx(0xbb / 255)

    def test_central(self):
        style = self._style(central=True)
        assert style.corner_radius == ROOT_CORNER_RADIUS
        assert style.shadow == SHADOW_ROOT

    def test_selected_opaque_with_double_border(self):
        style = self._style(selected=True, hovered=True)
        assert style.gradient[0][3] == 1.0 and style.gradient[1][3] == 1.0
        assert [w for _, w in style.strokes] == [4, 8]
        assert style.shadow == SHADOW_SELECTED

    def test_hovered(self):
        style = self._style(hovered=True, central=True)
        assert style.gradient[1][3] == pytest.approx(0xcc / 255)
        assert [w for _, w in style.strokes] == [3, 6]
        assert style.shadow == SHADOW_HOVERED

    def test_connected(self):
        style = self._style(connected=True)
        assert style.gradient[1][3] == pytest.approx(0xaa / 255)
        assert [w for _, w in style.strokes] == [3, 6]
        assert style.shadow is None


class TestDrawOrder:

    def test_root_last_deepest_first(self, sample_map):
        order = draw_order(sample_map.nodes)
        assert order[-1].id == 'root'
        levels = [n.level for n in order[:-1]]
        assert levels == sorted(levels, reverse=True)

    def test_stable_within_level(self, sample_map):
        order = [n.id for n in draw_order(sample_map.nodes) if n.level == 1]
        assert order == ['1', '2', '3', '4', '5']


# ============================================================
# LABELS
# ============================================================

class TestLabels:

    def test_fonts_by_level(self):
        assert label_font(MindMapNode('r', 'R', 0)) == ROOT_FONT
        assert label_font(MindMapNode('a', 'A', 1, 'r')) == BRANCH_FONT
        assert label_font(MindMapNode('b', 'B', 2, 'a')) == DETAIL_FONT
        assert label_font(MindMapNode('c', 'C', 3, 'b')) == DETAIL_FONT

    def test_greedy_wrap(self):
        assert wrap_label('one two three four', 10, len) == ['one two', 'three four']

    def test_fits_on_one_line(self):
        assert wrap_label('short', 100, len) == ['short']

    def test_long_word_not_broken(self):
        assert wrap_label('supercalifragilistic', 5, len) == ['supercalifragilistic']

    def test_truncated_to_three_lines(self):
        lines = wrap_label('alpha beta gamma-delta-epsilon-zeta delta', 1, len)
        assert len(lines) == 3
        assert lines[:2] == ['alpha', 'beta']
        assert lines[2] == 'gamma-delta-eps' + ELLIPSIS

    def test_line_offsets_centered(self):
        assert line_offsets(1, 20) == [0]
        assert line_offsets(3, 20) == [-20, 0, 20]

    def test_measure_text(self):
        assert measure_text('', DETAIL_FONT) == 0.0
        short = measure_text('Data', DETAIL_FONT)
        assert 0 < short < measure_text('Data Analysis', DETAIL_FONT)

    def test_layout_label_wraps_long_labels(self):
        node = MindMapNode('x', 'Joins and Group-By Aggregations in practice', 2, 'a')
        lines, font = layout_label(node, 160)
        assert font == DETAIL_FONT
        assert 1 < len(lines) <= 3


# ============================================================
# RENDERER
# ============================================================

class TestRenderer:

    def test_axes_is_pixel_canvas(self, canvas_axes, simple_tree):
        renderer = MindMapRenderer(canvas_axes, simple_tree)
        renderer.draw(ViewState())
        assert renderer.canvas_size() == (800, 600)
        assert canvas_axes.get_xlim() == (0, 800)
        assert canvas_axes.get_ylim() == (600, 0)

    def test_frame_contents(self, canvas_axes, three_level_tree):
        frame = MindMapRenderer(canvas_axes, three_level_tree).draw(ViewState())
        assert (frame.positions['r'].x, frame.positions['r'].y) == (400, 300)
        assert frame.edges == [('r', 'a'), ('r', 'b'), ('a', 'a1'), ('a1', 'a1x'), ('b', 'b1')]
        assert frame.highlighted_edges == []
        assert frame.node_order[0] == 'a1x'
        assert frame.node_order[-1] == 'r'

    def test_one_gradient_per_node(self, canvas_axes, three_level_tree):
        renderer = MindMapRenderer(canvas_axes, three_level_tree)
        renderer.draw(ViewState())
        renderer.draw(ViewState(zoom=1.5))
        assert len(canvas_axes.images) == 6

    def test_hover_highlights_edges_and_shows_level(self, canvas_axes, three_level_tree):
        frame = MindMapRenderer(canvas_axes, three_level_tree).draw(ViewState(hovered='a'))
        assert frame.highlighted_edges == [('r', 'a'), ('a', 'a1')]

        arrows = [p for p in canvas_axes.patches if isinstance(p, Polygon)]
        assert len(arrows) == 2
        assert 'Level 1' in [t.get_text() for t in canvas_axes.texts]

    def test_no_level_caption_for_root(self, canvas_axes, simple_tree):
        MindMapRenderer(canvas_axes, simple_tree).draw(ViewState(hovered='r'))
        assert not any(t.get_text().startswith('Level') for t in canvas_axes.texts)

    def test_orphans_not_drawn(self, canvas_axes, simple_tree):
        simple_tree.nodes.append(MindMapNode('o', 'Orphan', 2, 'missing'))
        frame = MindMapRenderer(canvas_axes, simple_tree).draw(ViewState())
        assert 'o' not in frame.node_order
        assert all('o' not in edge for edge in frame.edges)

    def test_empty_map(self, canvas_axes):
        from mindmap_viewer.data.model import MindMapData
        frame = MindMapRenderer(canvas_axes, MindMapData('Empty', [])).draw(ViewState())
        assert frame.positions == {}
        assert frame.node_order == []

    def test_generator_map_frame(self, canvas_axes, generator_map):
        frame = MindMapRenderer(canvas_axes, generator_map).draw(ViewState())
        assert sorted(frame.node_order) == ['1', '1.1', '2', '3', '4', '5']
        assert frame.positions['1'].y == pytest.approx(0)
        assert frame.edges == [('1', '1.1')]

    def test_shadows_blurred_by_state(self, canvas_axes, simple_tree):
        MindMapRenderer(canvas_axes, simple_tree).draw(ViewState(hovered='a', selected='b'))
        blurs = [p.get_agg_filter() for p in canvas_axes.patches
                 if p.get_agg_filter() is not None]
        sigmas = sorted(b.sigma for b in blurs)
        assert sigmas == [
            SHADOW_ROOT.blur * BLUR_TO_SIGMA,
            SHADOW_HOVERED.blur * BLUR_TO_SIGMA,
            SHADOW_SELECTED.blur * BLUR_TO_SIGMA,
        ]

    def test_shadow_blur_scales_with_zoom(self, canvas_axes, simple_tree):
        MindMapRenderer(canvas_axes, simple_tree).draw(ViewState(zoom=2.0))
        blurs = [p.get_agg_filter() for p in canvas_axes.patches
                 if p.get_agg_filter() is not None]
        assert [b.sigma for b in blurs] == [SHADOW_ROOT.blur * 2.0 * BLUR_TO_SIGMA]

    def test_shadow_blur_filter_softens_edges(self):
        im = np.zeros((20, 20, 4))
        im[8:12, 8:12] = (0.0, 0.0, 0.0, 1.0)
        blur = ShadowBlur(2.0, (0.2, 0.1, 0.9, 0.5))

        out, ox, oy = blur(im, 100)
        pad = blur.pad()
        assert (ox, oy) == (-pad, -pad)
        assert out.shape == (20 + 2 * pad, 20 + 2 * pad, 4)
        assert np.allclose(out[..., :3], (0.2, 0.1, 0.9))

        alpha = out[..., 3]
        assert alpha.max() < 1.0
        # Blur spreads past the original 4x4 square
        assert alpha[pad + 6, pad + 10] > 0
        assert alpha[0, 0] == 0

    def test_blurred_export_renders(self, tmp_dir, simple_tree):
        out = export_image(simple_tree, tmp_dir / 'shadow.png', width=400, height=300,
                           dpi=100, state=ViewState(hovered='a', selected='b'))
        with Image.open(out) as img:
            assert img.size == (400, 300)

    def test_gradient_image_corners(self):
        start = (1.0, 0.0, 0.0, 1.0)
        end = (0.0, 0.0, 1.0, 0.5)
        image = gradient_image(start, end, 200, 50, resolution=16)
        assert image.shape == (16, 16, 4)
        assert np.allclose(image[0, 0], start)
        assert np.allclose(image[-1, -1], end)


# ============================================================
# EXPORT
# ============================================================

class TestExport:

    def test_png_exact_size(self, tmp_dir, sample_map):
        out = export_image(sample_map, tmp_dir / 'map.png', width=1200, height=800, dpi=100)
        assert out.exists()
        with Image.open(out) as img:
            assert img.size == (1200, 800)

    def test_png_with_selection(self, tmp_dir, sample_map):
        state = ViewState(zoom=1.4, selected='2', hovered='2.2')
        out = export_image(sample_map, tmp_dir / 'selected.png', width=640, height=480,
                           dpi=80, state=state)
        with Image.open(out) as img:
            assert img.size == (640, 480)

    def test_svg_valid_xml(self, tmp_dir, simple_tree):
        out = export_image(simple_tree, tmp_dir / 'map.svg', width=800, height=600, dpi=100)
        root = ET.parse(out).getroot()
        assert root.tag.endswith('svg')

    def test_creates_parent_directory(self, tmp_dir, simple_tree):
        out = export_image(simple_tree, tmp_dir / 'nested' / 'deeper' / 'map.png',
                           width=400, height=300, dpi=100)
        assert out.exists()

    def test_unsupported_format(self, tmp_dir, simple_tree):
        with pytest.raises(ValueError, match='Unsupported'):
            export_image(simple_tree, tmp_dir / 'map.jpg')
