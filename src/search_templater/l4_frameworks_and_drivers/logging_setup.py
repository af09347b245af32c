"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_file_logging(output_dir: Path, level: str = 'DEBUG') -> Path:
    """Configure file-based logging for the ``templater`` namespace. Returns the log path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    log_path = output_dir / 'templater_debug.log'
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
    root = logging.getLogger('templater')
    root.setLevel(level.upper())
    root.addHandler(handler)
    logging.getLogger('templater.cli').info('Debug logging started → %s', log_path)
    return log_path
