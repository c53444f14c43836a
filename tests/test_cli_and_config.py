"""
Tests for the command-line entry point, settings and logging setup.

Tests cover:
    - Headless export through the CLI
    - Exit codes for missing, malformed and unsupported input
    - Initial zoom/selection options
    - Environment-driven settings
    - Context logger formatting and handlers
"""

import json
import logging

import pytest
from PIL import Image

from config.settings import Settings, settings
from mindmap_viewer.utils.log import ContextLogger, get_logger, shorten
from scripts.view_mindmap import build_parser, export_path, initial_state, main


# ============================================================
# CLI
# ============================================================

class TestCli:

    def test_export_sample_png(self, tmp_dir):
        out = tmp_dir / 'sample.png'
        code = main(['--sample', '--export', str(out),
                     '--width', '900', '--height', '600', '--dpi', '100'])
        assert code == 0
        with Image.open(out) as img:
            assert img.size == (900, 600)

    def test_export_file_svg(self, tmp_dir, simple_payload):
        src = tmp_dir / 'map.json'
        src.write_text(json.dumps({'success': True, 'data': {'mindMap': simple_payload}}),
                       encoding='utf-8')
        out = tmp_dir / 'out' / 'map.svg'
        assert main([str(src), '--export', str(out), '--select', 'a']) == 0
        assert out.read_text(encoding='utf-8').lstrip().startswith('<?xml')

    def test_relative_export_lands_in_output_dir(self, tmp_dir):
        out_dir = tmp_dir / 'renders'
        code = main(['--sample', '--export', 'maps/sample.png', '--output-dir', str(out_dir),
                     '--width', '400', '--height', '300'])
        assert code == 0
        assert (out_dir / 'maps' / 'sample.png').exists()

    def test_output_dir_defaults_to_settings(self):
        args = build_parser().parse_args(['--sample', '--export', 'map.svg'])
        assert args.output_dir == settings.OUTPUT_DIR
        assert export_path(args) == settings.OUTPUT_DIR / 'map.svg'

    def test_absolute_export_ignores_output_dir(self, tmp_dir):
        target = tmp_dir / 'abs.png'
        args = build_parser().parse_args(['--sample', '--export', str(target),
                                          '--output-dir', 'elsewhere'])
        assert export_path(args) == target

    def test_missing_file(self, tmp_dir, capsys):
        assert main([str(tmp_dir / 'nope.json'), '--export', str(tmp_dir / 'x.png')]) == 1
        assert 'File not found' in capsys.readouterr().out

    def test_malformed_file(self, tmp_dir, capsys):
        src = tmp_dir / 'bad.json'
        src.write_text('{"title": "T", "nodes": 5}', encoding='utf-8')
        assert main([str(src), '--export', str(tmp_dir / 'x.png')]) == 1
        assert 'Invalid mind map' in capsys.readouterr().out

    def test_unsupported_export_format(self, tmp_dir):
        assert main(['--sample', '--export', str(tmp_dir / 'x.gif')]) == 1

    def test_requires_source(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_path_and_sample_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['map.json', '--sample'])

    def test_initial_state_clamps_zoom(self, sample_map):
        args = build_parser().parse_args(['--sample', '--zoom', '10'])
        assert initial_state(args, sample_map).zoom == 3.0

    def test_initial_state_selection(self, sample_map):
        args = build_parser().parse_args(['--sample', '--select', '3.2'])
        assert initial_state(args, sample_map).selected == '3.2'

    def test_initial_state_unknown_selection(self, sample_map):
        args = build_parser().parse_args(['--sample', '--select', 'nope'])
        assert initial_state(args, sample_map).selected is None


# ============================================================
# SETTINGS
# ============================================================

class TestSettings:

    def test_defaults(self, monkeypatch):
        for key in ('MINDMAP_ENV', 'CANVAS_WIDTH', 'CANVAS_HEIGHT', 'EXPORT_DPI',
                    'LOG_LEVEL', 'LOG_TO_FILE', 'LOG_FILE', 'OUTPUT_DIR'):
            monkeypatch.delenv(key, raising=False)
        s = Settings()
        assert s.ENV == 'development'
        assert s.is_development and not s.is_production and not s.is_test
        assert (s.CANVAS_WIDTH, s.CANVAS_HEIGHT, s.EXPORT_DPI) == (1200, 800, 100)
        assert s.LOG_LEVEL == 'INFO'
        assert s.log_file is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv('MINDMAP_ENV', 'test')
        monkeypatch.setenv('CANVAS_WIDTH', '640')
        monkeypatch.setenv('LOG_LEVEL', 'debug')
        monkeypatch.setenv('LOG_TO_FILE', 'true')
        monkeypatch.setenv('LOG_FILE', 'logs/custom.log')
        s = Settings()
        assert s.is_test
        assert s.CANVAS_WIDTH == 640
        assert s.LOG_LEVEL == 'DEBUG'
        assert s.log_file == 'logs/custom.log'


# ============================================================
# LOGGING
# ============================================================

class TestLogging:

    def test_shorten(self):
        assert shorten('x' * 30) == 'x' * 24 + '...'
        assert shorten('short') == 'short'
        assert shorten(42) == 42

    def test_format_message(self):
        msg = ContextLogger.format_message('Loaded', title='Data Analysis with Python', nodes=24)
        assert msg == 'Loaded | title=Data Analysis with Pytho... | nodes=24'
        assert ContextLogger.format_message('Plain') == 'Plain'

    def test_console_handler_added_once(self):
        get_logger('mindmap_viewer.tests.once')
        logger = get_logger('mindmap_viewer.tests.once')
        consoles = [h for h in logger.logger.handlers if getattr(h, '_mindmap_console', False)]
        assert len(consoles) == 1

    def test_file_handler_writes_context(self, tmp_dir):
        log_file = tmp_dir / 'logs' / 'viewer.log'
        logger = get_logger('mindmap_viewer.tests.file', log_file=str(log_file))
        try:
            logger.info('Viewer opened', nodes=6)
            for handler in logger.logger.handlers:
                handler.flush()
            text = log_file.read_text(encoding='utf-8')
            assert 'mindmap_viewer.tests.file | INFO | Viewer opened | nodes=6' in text
        finally:
            for handler in list(logger.logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    handler.close()
                    logger.logger.removeHandler(handler)
