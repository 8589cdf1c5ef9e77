"""Configuration management for the budget dashboard.

This module centralizes configuration values including paths, logging
and display defaults, with environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

# Base project root - assumes this file is in budget_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGET_DASHBOARD_DATA_DIR", _PROJECT_ROOT / "data"))
BUDGETS_DIR = DATA_DIR / "budgets"

# Logging
LOG_LEVEL = os.getenv("BUDGET_DASHBOARD_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Display
CURRENCY_SYMBOL = os.getenv("BUDGET_DASHBOARD_CURRENCY", "$")


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this more than once only updates the level; handlers are
    installed a single time.

    Args:
        level: Logging level name or number. Defaults to ``LOG_LEVEL``.

    Returns:
        The ``budget_dashboard`` package logger.
    """
    logger = logging.getLogger("budget_dashboard")
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    logger.setLevel(resolved)

    if not any(getattr(h, "_budget_dashboard", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._budget_dashboard = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
