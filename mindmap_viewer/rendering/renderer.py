"""
Mind Map Renderer
=================

Draws one frame of a mind map onto a matplotlib Axes that acts as the
canvas: data coordinates equal canvas pixels with the y axis pointing down.

Per frame:
    1. Clear the axes and re-read the canvas size
    2. Build the view transform (pan translation, then zoom scale)
    3. Recompute the radial layout
    4. Draw curved parent -> child edges, highlighted ones with arrowheads
    5. Draw nodes deepest-first with the root last, each as a gradient-filled
       rounded rectangle with border, optional shadow and wrapped label

The renderer holds no layout state between frames.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np
from PIL import Image, ImageFilter
from matplotlib.patches import FancyBboxPatch, PathPatch, Polygon
from matplotlib.transforms import Affine2D

from mindmap_viewer.data.model import MindMapData, MindMapNode
from mindmap_viewer.interaction.state import ViewState
from mindmap_viewer.layout.radial import NodeBox, compute_layout, layout_edges
from mindmap_viewer.rendering.edges import arrowhead, edge_path
from mindmap_viewer.rendering.styles import (
    COLORS,
    NodeStyle,
    edge_style,
    node_style,
)
from mindmap_viewer.rendering.text import (
    CAPTION_FONT,
    layout_label,
    line_offsets,
)

logger = logging.getLogger(__name__)

GRADIENT_RESOLUTION = 64
CAPTION_COLOR = (1.0, 1.0, 1.0, 0.3)
CAPTION_INSET = 8

# Shadow blur values are CSS-style radii, twice the Gaussian sigma
BLUR_TO_SIGMA = 0.5

# Z-order bands
Z_EDGE = 1
Z_ARROW = 2
Z_NODE_BASE = 10


@dataclass
class RenderedFrame:
    """What one draw pass produced; discarded on the next pass."""
    positions: dict[str, NodeBox] = field(default_factory=dict)
    edges: list[tuple[str, str]] = field(default_factory=list)
    highlighted_edges: list[tuple[str, str]] = field(default_factory=list)
    node_order: list[str] = field(default_factory=list)


def draw_order(nodes: Iterable[MindMapNode]) -> list[MindMapNode]:
    """
    Stable order for painting nodes: deepest level first, central nodes last.

    Central nodes (level 0 or no parent) always end up on top.
    """
    return sorted(nodes, key=lambda n: (n.is_central, -n.level))


def gradient_image(start, end, width: float, height: float,
                   resolution: int = GRADIENT_RESOLUTION) -> np.ndarray:
    """
    RGBA image of a linear gradient from the top-left to the bottom-right corner.

    Each pixel's parameter is its projection onto the diagonal vector
    (width, height), so the gradient stays exact for non-square boxes.
    """
    u = np.linspace(0.0, 1.0, resolution)
    uu, vv = np.meshgrid(u, u)  # uu: left->right, vv: top->bottom
    w2, h2 = width * width, height * height
    t = (uu * w2 + vv * h2) / (w2 + h2)

    rgba_start = np.array(start)
    rgba_end = np.array(end)
    return rgba_start + t[..., np.newaxis] * (rgba_end - rgba_start)


class ShadowBlur:
    """
    Artist ``agg_filter`` that turns a flat shape into a soft drop shadow.

    Only the rendered alpha is kept; it is Gaussian-blurred with Pillow and
    recolored with the shadow color. The image is padded by three sigmas so
    the blur can spread past the shape.

    Args:
        sigma: Blur standard deviation in device pixels.
        color: Shadow RGBA; its RGB is applied to every output pixel.
    """

    def __init__(self, sigma: float, color):
        self.sigma = sigma
        self.color = color

    def pad(self) -> int:
        return int(np.ceil(3 * self.sigma))

    def __call__(self, im: np.ndarray, dpi: float):
        pad = self.pad()
        alpha = np.pad(im[..., 3], pad)
        mask = Image.fromarray((np.clip(alpha, 0.0, 1.0) * 255).astype(np.uint8))
        blurred = np.asarray(mask.filter(ImageFilter.GaussianBlur(self.sigma)),
                             dtype=float) / 255

        out = np.empty(blurred.shape + (4,))
        out[..., :3] = self.color[:3]
        out[..., 3] = blurred
        return out, -pad, -pad


class MindMapRenderer:
    """
    Render a MindMapData onto an Axes.

    Args:
        ax: Axes spanning the canvas area; fully owned by the renderer.
        mind_map: The map to draw.
    """

    def __init__(self, ax, mind_map: MindMapData):
        self.ax = ax
        self.mind_map = mind_map

    # ------------------------------------------------------------
    # Canvas geometry
    # ------------------------------------------------------------

    def canvas_size(self) -> tuple[float, float]:
        """Canvas size in pixels, read from the Axes bounding box."""
        bbox = self.ax.bbox
        return bbox.width, bbox.height

    def _px_to_points(self, px: float) -> float:
        return px * 72.0 / self.ax.figure.dpi

    def _prepare_axes(self, width: float, height: float):
        ax = self.ax
        ax.cla()
        ax.set_autoscale_on(False)
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_xticks([])
        ax.set_yticks([])
        for spine in ax.spines.values():
            spine.set_visible(False)
        ax.set_facecolor(COLORS['background'])

    # ------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------

    def draw(self, state: ViewState) -> RenderedFrame:
        """Clear the canvas and draw a full frame for ``state``."""
        width, height = self.canvas_size()
        self._prepare_axes(width, height)

        view = Affine2D().scale(state.zoom).translate(*state.offset)
        transform = view + self.ax.transData

        nodes = self.mind_map.nodes
        positions = compute_layout(nodes, width, height, state.zoom, state.offset)
        frame = RenderedFrame(positions=positions)

        for parent_id, child_id in layout_edges(nodes, positions):
            self._draw_edge(positions[parent_id], positions[child_id],
                            parent_id, child_id, state, transform, frame)

        for node in draw_order(nodes):
            box = positions.get(node.id)
            if box is None:
                continue
            z = Z_NODE_BASE + len(frame.node_order)
            self._draw_node(node, box, state, transform, z)
            frame.node_order.append(node.id)

        logger.debug('Frame drawn: %d nodes, %d edges, zoom=%.2f',
                     len(frame.node_order), len(frame.edges), state.zoom)
        return frame

    # ------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------

    def _draw_edge(self, parent: NodeBox, child: NodeBox, parent_id: str, child_id: str,
                   state: ViewState, transform, frame: RenderedFrame):
        style = edge_style(parent_id, child_id, state.hovered, state.selected)
        frame.edges.append((parent_id, child_id))

        self.ax.add_patch(PathPatch(
            edge_path(parent, child),
            fill=False,
            edgecolor=style.color,
            linewidth=self._px_to_points(style.width * state.zoom),
            capstyle='round',
            transform=transform,
            zorder=Z_EDGE,
        ))

        if style.highlighted:
            frame.highlighted_edges.append((parent_id, child_id))
            self.ax.add_patch(Polygon(
                arrowhead(parent, child),
                closed=True,
                facecolor=COLORS['accent'],
                edgecolor='none',
                transform=transform,
                zorder=Z_ARROW,
            ))

    # ------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------

    def _rounded_box(self, box: NodeBox, radius: float, transform, **kwargs) -> FancyBboxPatch:
        return FancyBboxPatch(
            (box.x - box.width / 2, box.y - box.height / 2), box.width, box.height,
            boxstyle=f'round,pad=0,rounding_size={radius}',
            transform=transform,
            **kwargs,
        )

    def _draw_node(self, node: MindMapNode, box: NodeBox, state: ViewState,
                   transform, z: float):
        hovered = state.hovered == node.id
        selected = state.selected == node.id
        connected = (self.mind_map.is_connected(node, state.hovered)
                     or self.mind_map.is_connected(node, state.selected))
        style = node_style(node.color, central=node.is_central, hovered=hovered,
                           selected=selected, connected=connected)

        self._draw_fill(box, style, transform, state.zoom, z)
        self._draw_border(box, style, transform, state.zoom, z)
        self._draw_label(node, box, transform, state.zoom, z)

        if hovered and not node.is_central:
            self.ax.text(
                box.x, box.y + box.height / 2 - CAPTION_INSET, f'Level {node.level}',
                transform=transform,
                ha='center', va='center',
                fontsize=self._px_to_points(CAPTION_FONT.size * state.zoom),
                color=CAPTION_COLOR,
                clip_on=True,
                zorder=z + 0.5,
            )

    def _draw_fill(self, box: NodeBox, style: NodeStyle, transform, zoom: float, z: float):
        """Gradient image clipped to the rounded rectangle, shadow under it."""
        if style.shadow is not None:
            self._draw_shadow(box, style, transform, zoom, z)

        outline = self._rounded_box(box, style.corner_radius, transform,
                                    facecolor='none', edgecolor='none', zorder=z)
        self.ax.add_patch(outline)

        image = self.ax.imshow(
            gradient_image(*style.gradient, box.width, box.height),
            extent=(box.x - box.width / 2, box.x + box.width / 2,
                    box.y + box.height / 2, box.y - box.height / 2),
            origin='upper',
            aspect='auto',
            interpolation='bilinear',
            zorder=z + 0.1,
        )
        image.set_transform(transform)
        image.set_clip_path(outline)
        image.set_clip_box(self.ax.bbox)

    def _draw_shadow(self, box: NodeBox, style: NodeStyle, transform, zoom: float, z: float):
        """Offset copy of the outline, blurred at raster time."""
        shadow = style.shadow
        offset_box = NodeBox(box.x, box.y + shadow.offset_y, box.width, box.height)
        patch = self._rounded_box(offset_box, style.corner_radius, transform,
                                  facecolor=shadow.color, edgecolor='none',
                                  zorder=z - 0.05)
        patch.set_agg_filter(ShadowBlur(shadow.blur * zoom * BLUR_TO_SIGMA, shadow.color))
        self.ax.add_patch(patch)

    def _draw_border(self, box: NodeBox, style: NodeStyle, transform, zoom: float, z: float):
        for i, (color, width) in enumerate(style.strokes):
            self.ax.add_patch(self._rounded_box(
                box, style.corner_radius, transform,
                fill=False,
                edgecolor=color,
                linewidth=self._px_to_points(width * zoom),
                zorder=z + 0.2 + i * 0.05,
            ))

    def _draw_label(self, node: MindMapNode, box: NodeBox, transform, zoom: float, z: float):
        lines, font = layout_label(node, box.width)
        fontsize = self._px_to_points(font.size * zoom)
        for line, dy in zip(lines, line_offsets(len(lines), font.line_height)):
            self.ax.text(
                box.x, box.y + dy, line,
                transform=transform,
                ha='center', va='center',
                fontsize=fontsize,
                fontweight=font.weight,
                family='sans-serif',
                color=COLORS['text'],
                clip_on=True,
                zorder=z + 0.4,
            )
