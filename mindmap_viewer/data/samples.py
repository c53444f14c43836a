"""
Sample Mind Map
===============

A course-summary mind map in the generator's format, used by the CLI
``--sample`` flag and by the test suite.

Palette follows the generator prompt: #633ff3 for main topics, #8b5cf6 for
subtopics and #a78bfa for details.
"""

from mindmap_viewer.data.model import MindMapData, MindMapNode

LEVEL_COLORS = {
    0: '#633ff3',
    1: '#633ff3',
    2: '#8b5cf6',
    3: '#a78bfa',
}


class _SampleBuilder:
    """Accumulates nodes, deriving level and color from the parent."""

    def __init__(self):
        self.nodes: list[MindMapNode] = []
        self._levels: dict[str, int] = {}

    def add(self, id, label, parent_id=None):
        level = self._levels[parent_id] + 1 if parent_id is not None else 0
        self._levels[id] = level
        self.nodes.append(MindMapNode(
            id=id,
            label=label,
            level=level,
            parent_id=parent_id,
            color=LEVEL_COLORS.get(level, LEVEL_COLORS[3]),
        ))


def build_sample_map() -> MindMapData:
    """Data-analysis course: root, 5 modules, subtopics and a few details."""
    b = _SampleBuilder()
    b.add('root', 'Data Analysis with Python')

    # Module 1
    b.add('1', 'Python Foundations', 'root')
    b.add('1.1', 'Syntax and Types', '1')
    b.add('1.2', 'Control Flow', '1')
    b.add('1.3', 'Functions and Modules', '1')
    b.add('1.3.1', 'Keyword Arguments', '1.3')
    b.add('1.3.2', 'Packaging Basics', '1.3')

    # Module 2
    b.add('2', 'Data Wrangling', 'root')
    b.add('2.1', 'Loading CSV and JSON', '2')
    b.add('2.2', 'Cleaning Missing Values', '2')
    b.add('2.3', 'Joins and Group-By Aggregations', '2')
    b.add('2.4', 'Reshaping with Pivot Tables', '2')
    b.add('2.2.1', 'Imputation Strategies', '2.2')

    # Module 3
    b.add('3', 'Visualization', 'root')
    b.add('3.1', 'Line and Bar Charts', '3')
    b.add('3.2', 'Distributions', '3')
    b.add('3.2.1', 'Histograms', '3.2')
    b.add('3.2.2', 'Box Plots', '3.2')
    b.add('3.2.3', 'Violin Plots', '3.2')

    # Module 4
    b.add('4', 'Statistics Essentials', 'root')
    b.add('4.1', 'Descriptive Statistics', '4')
    b.add('4.2', 'Hypothesis Testing', '4')

    # Module 5
    b.add('5', 'Capstone Project', 'root')
    b.add('5.1', 'Framing an Analytical Question', '5')

    return MindMapData(title='Data Analysis with Python - Mind Map', nodes=b.nodes)
