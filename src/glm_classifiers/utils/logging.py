"""Structured logging helpers.

Every module logs through ``get_logger(__name__)`` and formats records with
``json_log`` so each line is one JSON object. The level comes from the
``GLMC_LOG_LEVEL`` environment variable (``GLMC_DEBUG`` forces DEBUG) and can
be changed at runtime with ``set_level``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Any

ROOT_LOGGER_NAME = 'glm_classifiers'


def json_log(message: str, **extra: Any) -> str:
    """Return a JSON-formatted log string."""
    payload = {'ts': time.time(), 'msg': message, **extra}
    return json.dumps(payload, ensure_ascii=False, default=str)


def _default_level() -> int:
    if os.getenv('GLMC_DEBUG'):
        return logging.DEBUG
    name = os.getenv('GLMC_LOG_LEVEL', 'INFO').upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Return a package logger; the handler lives on the package root logger."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(message)s'))
        root.addHandler(handler)
        root.setLevel(_default_level())
        root.propagate = False
    return logging.getLogger(name)


def set_level(level: int | str) -> None:
    """Set the level of every package logger."""
    get_logger(ROOT_LOGGER_NAME).setLevel(level)
