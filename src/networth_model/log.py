# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""structlog setup shared by the engines."""

import logging
from typing import Optional

import structlog


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog with a console renderer.

    Args:
        level: Minimum level name (e.g. "INFO"). Defaults to the
               NETWORTH_LOG_LEVEL setting.
    """
    if level is None:
        from .settings import load_settings
        level = load_settings().log_level

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str):
    """Return a structlog logger bound to a module name."""
    return structlog.get_logger(name)
