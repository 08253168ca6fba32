# utils.py
"""
Utility functions for the constellation animation.

This module provides logging setup and configuration loading, used by the
entry point before any simulation component exists.
"""
import json
import logging
import logging.handlers
import os
from typing import Any, Dict, List

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/constellation.log'

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary optionally containing a "logging" key with
#       "level", "format", and "log_file" sub-keys. A null "log_file"
#       disables file logging.
#   - Side Effects: Configures the root Python logger with a console handler
#     and, unless disabled, a rotating file handler. Creates the log
#     directory if needed.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON object.
#   - Raises: FileNotFoundError, json.JSONDecodeError, or ValueError when
#     the top level is not a JSON object. Each is logged before re-raising.


def _build_handlers(log_file_path) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        # Rotates when the log reaches 1MB, keeps 5 backup logs.
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024*1024, backupCount=5
        ))

    return handlers


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from the "logging" section of the config.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)
    for handler in _build_handlers(log_file_path):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path or 'disabled'}")


def load_config(path: str = 'config.json') -> Dict[str, Any]:
    """Loads the JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    if not isinstance(config, dict):
        msg = f"Configuration in {path} must be a JSON object, got {type(config).__name__}."
        logging.error(msg)
        raise ValueError(msg)

    logging.info("Configuration loaded successfully.")
    return config
