"""Load mind maps from JSON files or strings."""

import json
import logging
from pathlib import Path
from typing import Union

from mindmap_viewer.data.model import MindMapData, MindMapFormatError

logger = logging.getLogger(__name__)


def _unwrap_envelope(raw):
    """Accept the API response ``{"success": true, "data": {"mindMap": {...}}}`` too."""
    if isinstance(raw, dict) and 'nodes' not in raw:
        data = raw.get('data')
        if isinstance(data, dict) and isinstance(data.get('mindMap'), dict):
            return data['mindMap']
    return raw


def parse_mind_map(text: str) -> MindMapData:
    """
    Parse a JSON document into a MindMapData.

    Args:
        text: JSON text holding a ``{title, nodes}`` object.

    Returns:
        The parsed mind map.

    Raises:
        MindMapFormatError: If the text is not JSON or has the wrong shape.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise MindMapFormatError(f'Invalid JSON: {e}') from e

    raw = _unwrap_envelope(raw)

    mind_map = MindMapData.from_dict(raw)
    logger.debug("Parsed mind map '%s' with %d nodes", mind_map.title, len(mind_map.nodes))
    return mind_map


def load_mind_map(path: Union[str, Path]) -> MindMapData:
    """Read and parse a mind map JSON file."""
    path = Path(path)
    mind_map = parse_mind_map(path.read_text(encoding='utf-8'))
    logger.info("Loaded mind map from %s (%d nodes)", path, len(mind_map.nodes))
    return mind_map
