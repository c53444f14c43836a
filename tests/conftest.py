"""
Pytest configuration and fixtures for the mind map viewer tests.

This module provides:
- Headless matplotlib (Agg backend)
- Small hand-built maps with known geometry
- The built-in sample map
- Temporary output directories
"""

import tempfile
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest

from mindmap_viewer.data.model import MindMapData, MindMapNode
from mindmap_viewer.data.samples import build_sample_map


# ============================================================
# MAP FIXTURES
# ============================================================

@pytest.fixture
def simple_tree():
    """
    Root with two level-1 branches.

    On an 800x600 canvas at zoom 1: root (400, 300), 'a' (400, 0), 'b' (700, 300).
    """
    return MindMapData(title='T', nodes=[
        MindMapNode('r', 'Root', 0, None, '#633ff3'),
        MindMapNode('a', 'A', 1, 'r', '#8b5cf6'),
        MindMapNode('b', 'B', 1, 'r', '#8b5cf6'),
    ])


@pytest.fixture
def three_level_tree(simple_tree):
    """simple_tree plus one sub-branch under 'a' and one detail leaf under that."""
    simple_tree.nodes.extend([
        MindMapNode('a1', 'A one', 2, 'a', '#8b5cf6'),
        MindMapNode('a1x', 'A one detail', 3, 'a1', '#a78bfa'),
        MindMapNode('b1', 'B one', 2, 'b', '#8b5cf6'),
    ])
    return simple_tree


@pytest.fixture
def generator_map():
    """
    Map in the course generator's own shape: no level-0 node, main topics
    are level 1 with no parent, subtopics hang off them.
    """
    nodes = [MindMapNode(str(i), f'Topic {i}', 1, None, '#633ff3') for i in range(1, 6)]
    nodes.append(MindMapNode('1.1', 'Topic 1 detail', 2, '1', '#8b5cf6'))
    return MindMapData(title='Generated', nodes=nodes)


@pytest.fixture
def sample_map():
    return build_sample_map()


@pytest.fixture
def simple_payload():
    """JSON-shaped dict as produced by the generator."""
    return {
        'title': 'T',
        'nodes': [
            {'id': 'r', 'label': 'Root', 'level': 0, 'parentId': None, 'color': '#633ff3'},
            {'id': 'a', 'label': 'A', 'level': 1, 'parentId': 'r', 'color': '#8b5cf6'},
            {'id': 'b', 'label': 'B', 'level': 1, 'parentId': 'r', 'color': '#8b5cf6'},
        ],
    }


# ============================================================
# FILESYSTEM / FIGURE FIXTURES
# ============================================================

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture(autouse=True)
def close_figures():
    """Close every pyplot figure a test opened."""
    yield
    plt.close('all')
