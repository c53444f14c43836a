"""
Radial Layout Engine
====================

Computes a position and bounding box for every reachable node, fanned out
radially around the root:

    - Root at the (pan/zoom compensated) canvas center
    - Level-1 branches on a ring of radius 300; a level-1 root is moved
      onto the ring as well, leaving the center empty
    - Level-2 sub-branches fanned around their parent, sector centered on
      the root -> parent direction
    - Level-3 details fanned around their parent, sector centered on the
      grandparent -> parent direction

The result is a pure function of (nodes, canvas size, zoom, offset); drawing
and hit-testing each recompute it.

Levels deeper than 3 are not placed. A node whose parent was not placed is
skipped, along with its whole subtree.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from mindmap_viewer.data.model import MindMapData, MindMapNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeBox:
    """Center and size of a placed node, in logical units."""
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        """Closed axis-aligned bounding-box test."""
        return (self.x - self.width / 2 <= px <= self.x + self.width / 2
                and self.y - self.height / 2 <= py <= self.y + self.height / 2)


class RadialLayout:
    """
    Radial tree layout for levels 0-3.

    Args:
        nodes: Flat node collection (any order).
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        zoom: Current zoom factor.
        offset: Current pan translation in screen pixels.
    """

    ROOT_SIZE = (220, 70)
    BRANCH_SIZE = (190, 55)
    SUB_BRANCH_SIZE = (160, 45)
    LEAF_SIZE = (140, 40)

    R1 = 300            # Ring radius for level-1 branches
    R2 = 180            # Level-2 distance from parent
    R2_CROWDED = 200    # ... when the parent has more than 3 sub-branches
    R3 = 130            # Level-3 distance from parent

    MIN_BRANCH_SLOTS = 4
    BASE_SPREAD = math.pi / 3
    SPREAD_PER_SIBLING = 0.15
    MAX_SPREAD = math.pi * 0.8
    LEAF_SPREAD = math.pi / 2.5

    def __init__(self, nodes: Iterable[MindMapNode], canvas_width: float,
                 canvas_height: float, zoom: float = 1.0,
                 offset: tuple[float, float] = (0.0, 0.0)):
        self.nodes = list(nodes)
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.zoom = zoom
        self.offset = offset
        self.positions: dict[str, NodeBox] = {}

    @property
    def center(self) -> tuple[float, float]:
        """Logical point that lands on the canvas center after pan/zoom."""
        ox, oy = self.offset
        return (self.canvas_width / (2 * self.zoom) - ox / self.zoom,
                self.canvas_height / (2 * self.zoom) - oy / self.zoom)

    def compute(self) -> dict[str, NodeBox]:
        """Compute all node positions."""
        self.positions = {}
        root = self._find_root()
        if root is None:
            return self.positions

        cx, cy = self.center
        self.positions[root.id] = NodeBox(cx, cy, *self.ROOT_SIZE)

        self._place_branches(cx, cy)
        self._place_sub_branches(cx, cy)
        self._place_leaves(cx, cy)

        skipped = [n.id for n in self.nodes if n.id not in self.positions]
        if skipped:
            logger.debug('Layout skipped %d unplaced node(s): %s', len(skipped), skipped)
        return self.positions

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _find_root(self) -> Optional[MindMapNode]:
        return MindMapData(title='', nodes=self.nodes).find_root()

    def _find(self, node_id: Optional[str]) -> Optional[MindMapNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def _siblings(self, node: MindMapNode) -> list[MindMapNode]:
        return [n for n in self.nodes
                if n.parent_id == node.parent_id and n.level == node.level]

    def _sibling_index(self, node: MindMapNode, siblings: list[MindMapNode]) -> int:
        # First id match, so duplicate ids share a slot.
        for i, s in enumerate(siblings):
            if s.id == node.id:
                return i
        return 0

    @staticmethod
    def _fan_angle(reference: float, spread: float, index: int, count: int) -> float:
        """Evenly spaced angle inside [reference - spread/2, reference + spread/2]."""
        start = reference - spread / 2
        increment = spread / (count - 1) if count > 1 else 0
        return start + increment * index

    # ------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------

    def _place_branches(self, cx: float, cy: float):
        """Level 1: evenly around the root, starting straight up."""
        known_ids = {n.id for n in self.nodes}
        branches = [
            n for n in self.nodes
            if n.level == 1
            and (n.parent_id is None or n.parent_id in known_ids)
        ]
        step = 2 * math.pi / max(len(branches), self.MIN_BRANCH_SLOTS)

        for i, branch in enumerate(branches):
            angle = step * i - math.pi / 2
            x = cx + self.R1 * math.cos(angle)
            y = cy + self.R1 * math.sin(angle)
            self.positions[branch.id] = NodeBox(x, y, *self.BRANCH_SIZE)

    def _place_sub_branches(self, cx: float, cy: float):
        """Level 2: fan centered on the root -> parent direction."""
        for node in self.nodes:
            if node.level != 2:
                continue
            parent = self.positions.get(node.parent_id)
            if parent is None:
                continue

            siblings = self._siblings(node)
            count = len(siblings)
            index = self._sibling_index(node, siblings)

            parent_angle = math.atan2(parent.y - cy, parent.x - cx)
            spread = min(self.BASE_SPREAD + (count - 1) * self.SPREAD_PER_SIBLING,
                         self.MAX_SPREAD)
            angle = self._fan_angle(parent_angle, spread, index, count)

            radius = self.R2_CROWDED if count > 3 else self.R2
            x = parent.x + radius * math.cos(angle)
            y = parent.y + radius * math.sin(angle)
            self.positions[node.id] = NodeBox(x, y, *self.SUB_BRANCH_SIZE)

    def _place_leaves(self, cx: float, cy: float):
        """Level 3: fixed-width fan continuing the grandparent -> parent direction."""
        for node in self.nodes:
            if node.level != 3:
                continue
            parent = self.positions.get(node.parent_id)
            if parent is None:
                continue

            siblings = self._siblings(node)
            count = len(siblings)
            index = self._sibling_index(node, siblings)

            parent_node = self._find(node.parent_id)
            grandparent = None
            if parent_node is not None and parent_node.parent_id:
                grandparent = self.positions.get(parent_node.parent_id)

            if grandparent is not None:
                parent_angle = math.atan2(parent.y - grandparent.y, parent.x - grandparent.x)
            else:
                parent_angle = math.atan2(parent.y - cy, parent.x - cx)

            angle = self._fan_angle(parent_angle, self.LEAF_SPREAD, index, count)
            x = parent.x + self.R3 * math.cos(angle)
            y = parent.y + self.R3 * math.sin(angle)
            self.positions[node.id] = NodeBox(x, y, *self.LEAF_SIZE)


def compute_layout(nodes: Iterable[MindMapNode], canvas_width: float, canvas_height: float,
                   zoom: float = 1.0,
                   offset: tuple[float, float] = (0.0, 0.0)) -> dict[str, NodeBox]:
    """Compute the position map for one render or hit-test pass."""
    return RadialLayout(nodes, canvas_width, canvas_height, zoom, offset).compute()


def layout_edges(nodes: Iterable[MindMapNode],
                 positions: dict[str, NodeBox]) -> list[tuple[str, str]]:
    """(parent_id, child_id) pairs where both ends were placed, in node order."""
    return [
        (n.parent_id, n.id) for n in nodes
        if n.parent_id and n.id in positions and n.parent_id in positions
    ]
