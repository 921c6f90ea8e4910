"""
utils.py - Utility Functions and Helpers
=========================================
File, logging and validation helpers shared by the CLI and I/O modules.
"""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union

from config_covering import CoveringConfig

logger = logging.getLogger(__name__)


# ============================================================================
# FILE OPERATIONS
# ============================================================================

def ensure_directory(path: Union[str, Path]) -> Path:
    """Ensure directory exists, create if necessary."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_json(data: Any, filepath: Union[str, Path], indent: int = 2):
    """Save data to JSON file."""
    filepath = Path(filepath)
    ensure_directory(filepath.parent)

    with open(filepath, 'w') as f:
        json.dump(data, f, indent=indent, default=str)

    logger.debug(f"Saved JSON to {filepath}")


def save_text(text: str, filepath: Union[str, Path]):
    """Save a text document, creating parent directories."""
    filepath = Path(filepath)
    ensure_directory(filepath.parent)
    filepath.write_text(text)
    logger.debug(f"Saved text to {filepath}")


# ============================================================================
# LOGGING
# ============================================================================

def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None):
    """Setup logging configuration."""
    log_config: Dict[str, Any] = CoveringConfig.LOGGING

    level = getattr(logging, log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        log_config['format'],
        datefmt=log_config['date_format']
    )

    handlers = []

    if log_config.get('console_output', True):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if log_file or log_config.get('file'):
        file_path = log_file or log_config['file']
        ensure_directory(Path(file_path).parent)

        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=log_config.get('max_bytes', 10 * 1024 * 1024),
            backupCount=log_config.get('backup_count', 5)
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True
    )

    logger.info(f"Logging configured: level={log_level}")


# ============================================================================
# VALIDATION AND ERROR HANDLING
# ============================================================================

class ValidationError(Exception):
    """Raised when an imported document does not have the expected shape."""
    pass
