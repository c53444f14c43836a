"""
Mind Map Data Model
===================

A mind map is a flat list of labeled nodes that reference their parent by id.
This is the exact shape produced by the course mind-map generator:

    {
        "title": "Course Title",
        "nodes": [
            {"id": "1", "label": "Main Topic", "level": 1,
             "parentId": null, "color": "#633ff3"},
            {"id": "1.1", "label": "Subtopic", "level": 2,
             "parentId": "1", "color": "#8b5cf6"}
        ]
    }

Node order is irrelevant: children are located by scanning for matching
``parentId`` values, so parents do not have to precede their children.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


class MindMapFormatError(ValueError):
    """Raised when a payload does not have the ``{title, nodes}`` shape."""


# ============================================================
# NODE
# ============================================================

@dataclass
class MindMapNode:
    """A single node in the mind map."""
    id: str
    label: str
    level: int = 0
    parent_id: Optional[str] = None
    color: str = '#633ff3'

    def __post_init__(self):
        if self.level < 0:
            raise MindMapFormatError(f"Invalid level {self.level} for node '{self.id}'")

    @property
    def is_central(self) -> bool:
        """Central nodes are drawn on top of everything else."""
        return self.level == 0 or self.parent_id is None

    @classmethod
    def from_dict(cls, raw: dict) -> 'MindMapNode':
        if not isinstance(raw, dict):
            raise MindMapFormatError(f'Node must be an object, got {type(raw).__name__}')
        if 'id' not in raw:
            raise MindMapFormatError('Node is missing required key "id"')

        parent_id = raw.get('parentId')
        try:
            level = int(raw.get('level', 0))
        except (TypeError, ValueError):
            raise MindMapFormatError(
                f"Node '{raw['id']}' has a non-integer level: {raw.get('level')!r}"
            )

        return cls(
            id=str(raw['id']),
            label=str(raw.get('label', '')),
            level=level,
            parent_id=str(parent_id) if parent_id is not None else None,
            color=str(raw.get('color') or '#633ff3'),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'label': self.label,
            'level': self.level,
            'parentId': self.parent_id,
            'color': self.color,
        }


# ============================================================
# MIND MAP
# ============================================================

@dataclass
class MindMapData:
    """
    Title plus the flat node collection.

    Lookups scan ``nodes`` in order, so with duplicate ids the first node
    wins, the same way the layout resolves them.
    """
    title: str
    nodes: list[MindMapNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> 'MindMapData':
        """Build from the JSON-shaped ``{title, nodes}`` object."""
        if not isinstance(raw, dict):
            raise MindMapFormatError(
                f'Mind map must be a JSON object, got {type(raw).__name__}'
            )
        title = raw.get('title')
        nodes = raw.get('nodes')
        if not isinstance(title, str):
            raise MindMapFormatError('Mind map "title" must be a string')
        if not isinstance(nodes, list):
            raise MindMapFormatError('Mind map "nodes" must be a list')

        return cls(title=title, nodes=[MindMapNode.from_dict(n) for n in nodes])

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'nodes': [n.to_dict() for n in self.nodes],
        }

    def find_root(self) -> Optional[MindMapNode]:
        """
        Root = first node with level 0 or no parent.

        Falls back to the first node when no node qualifies; ``None`` only
        for an empty map.
        """
        for node in self.nodes:
            if node.level == 0 or node.parent_id is None:
                return node
        return self.nodes[0] if self.nodes else None

    def get_node(self, node_id: Optional[str]) -> Optional[MindMapNode]:
        if node_id is None:
            return None
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_children(self, parent_id: str) -> list[MindMapNode]:
        """Get child nodes of a given parent, in collection order."""
        return [n for n in self.nodes if n.parent_id == parent_id]

    def get_parent(self, node: MindMapNode) -> Optional[MindMapNode]:
        return self.get_node(node.parent_id)

    def is_connected(self, node: MindMapNode, other_id: Optional[str]) -> bool:
        """True if ``node`` is the parent or a child of node ``other_id``."""
        if other_id is None:
            return False
        for n in self.nodes:
            if n.id == other_id and n.parent_id == node.id:
                return True
            if n.parent_id == other_id and n.id == node.id:
                return True
        return False
