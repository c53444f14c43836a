"""
Mind Map Viewer - Settings Module
=================================

Usage:
    from config.settings import settings

    width = settings.CANVAS_WIDTH
    if settings.is_test:
        ...

Values come from the environment, optionally seeded from
``config/.env.<MINDMAP_ENV>`` or, failing that, ``.env`` in the project root.
"""

import os
from pathlib import Path
from dotenv import load_dotenv


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes')


class Settings:
    def __init__(self):
        self.ENV = os.getenv('MINDMAP_ENV', 'development')

        # Try config folder first, then root
        config_dir = Path(__file__).parent
        env_file = config_dir / f'.env.{self.ENV}'
        if not env_file.exists():
            env_file = config_dir.parent / '.env'
        if env_file.exists():
            load_dotenv(env_file)

        # Canvas
        self.CANVAS_WIDTH = int(os.getenv('CANVAS_WIDTH', 1200))
        self.CANVAS_HEIGHT = int(os.getenv('CANVAS_HEIGHT', 800))

        # Export
        self.EXPORT_DPI = int(os.getenv('EXPORT_DPI', 100))
        self.OUTPUT_DIR = Path(os.getenv('OUTPUT_DIR', 'data/mindmap'))

        # Logging
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.LOG_TO_FILE = _env_bool('LOG_TO_FILE', 'false')
        self.LOG_FILE = os.getenv('LOG_FILE', 'logs/mindmap_viewer.log')

    @property
    def log_file(self):
        """Log file path when file logging is enabled, else None."""
        return self.LOG_FILE if self.LOG_TO_FILE else None

    @property
    def is_production(self): return self.ENV == 'production'

    @property
    def is_development(self): return self.ENV == 'development'

    @property
    def is_test(self): return self.ENV == 'test'


settings = Settings()
