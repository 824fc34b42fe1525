"""screenlines configuration module.

Settings and logging live together here because logging is configured from
settings. The parser modules (classifier, range assembler, parser facade)
each bind ``logger = get_logger(__name__)`` at import time, long before any
caller has a chance to pick settings. So ``get_logger`` here does not touch
the logging setup until a logger is first requested, and then configures it
once from the global settings (environment, ``.env`` and config files).

Tests and embedding applications that need different logging call
``set_settings`` before importing the parser, or ``reset_settings`` to start
over; the next ``get_logger`` call configures logging again.
"""

from __future__ import annotations

from typing import Any

from screenlines.config.logging import configure_logging
from screenlines.config.logging import get_logger as _get_logger
from screenlines.config.settings import (
    PAIRING_GREEDY,
    PAIRING_NEAREST,
    ScreenLinesSettings,
    clear_settings_cache,
    get_settings,
    set_settings,
)
from screenlines.config.settings import (
    reset_settings as _reset_settings,
)

__all__ = [
    "PAIRING_GREEDY",
    "PAIRING_NEAREST",
    "ScreenLinesSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "get_settings",
    "reset_settings",
    "set_settings",
]

# Set once configure_logging has run for the current settings
_logging_initialized = False
# Module loggers by name; parser modules ask for theirs on import
_logger_cache: dict[str, Any] = {}


def _ensure_logging_configured() -> None:
    global _logging_initialized
    if _logging_initialized:
        return
    configure_logging(get_settings())
    _logging_initialized = True


def get_logger(name: str) -> Any:
    """Return the logger for a module, configuring logging on first use.

    The first call reads the global settings and applies their level, format
    and log file. Later calls only look up the cache, so module level
    ``logger = get_logger(__name__)`` lines cost nothing after the first.

    Args:
        name: Logger name, normally the calling module's ``__name__``

    Returns:
        A structlog logger bound to ``name``
    """
    if name in _logger_cache:
        return _logger_cache[name]

    _ensure_logging_configured()

    logger = _get_logger(name)
    _logger_cache[name] = logger
    return logger


def reset_settings() -> None:
    """Forget settings, cached loggers and the logging setup.

    Loggers already bound by imported modules keep working; only loggers
    requested afterwards trigger a fresh ``configure_logging``.
    """
    global _logging_initialized
    _reset_settings()
    _logging_initialized = False
    _logger_cache.clear()
