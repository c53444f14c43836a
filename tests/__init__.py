"""
Mind Map Viewer Test Suite

Test Categories:
- Data model: JSON parsing, lookups, sample map
- Layout: radial placement, orphans, determinism
- Interaction: pan/zoom/hover/selection state and hit-testing
- Rendering: styles, edge geometry, labels, PNG/SVG export
- Viewer: event handling against an Agg figure
- CLI and config: exit codes, settings, logging

Run all tests:
    pytest

Run specific test file:
    pytest tests/test_radial_layout.py
"""

__version__ = "1.0.0"
