from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from autoconfig.core.config.domains.logging import LoggingConfig

LOGGER_NAME = "autoconfig"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED_TARGET: str | None = None
_AUTOCONFIG_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "INFO", log_path: Optional[Path] = None) -> logging.Logger:
    """Attach one formatted handler to the ``autoconfig`` logger.

    Logs go to ``log_path`` when given, otherwise to stderr. Idempotent
    per-process: reconfiguring for the same target only adjusts the level.
    """
    global _CONFIGURED_TARGET, _AUTOCONFIG_HANDLER

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_name(level))

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    if _CONFIGURED_TARGET == target and _AUTOCONFIG_HANDLER is not None:
        _AUTOCONFIG_HANDLER.setLevel(_level_from_name(level))
        return logger

    # Replace the handler installed for a previous target.
    if _AUTOCONFIG_HANDLER is not None:
        logger.removeHandler(_AUTOCONFIG_HANDLER)
        _AUTOCONFIG_HANDLER.close()
        _AUTOCONFIG_HANDLER = None

    handler: logging.Handler
    if log_path:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _AUTOCONFIG_HANDLER = handler
    _CONFIGURED_TARGET = target
    return logger


def configure_logging_from_config(config: "LoggingConfig") -> logging.Logger:
    return configure_logging(level=config.level, log_path=config.path)


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler and restore the default level."""
    global _CONFIGURED_TARGET, _AUTOCONFIG_HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    if _AUTOCONFIG_HANDLER is not None:
        logger.removeHandler(_AUTOCONFIG_HANDLER)
        _AUTOCONFIG_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED_TARGET = None
    _AUTOCONFIG_HANDLER = None


__all__ = ["configure_logging", "configure_logging_from_config", "reset_logging_for_tests", "LOG_FORMAT"]
