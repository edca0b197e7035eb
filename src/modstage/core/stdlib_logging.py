from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_MODSTAGE_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install a single modstage handler on the ``modstage`` logger.

    Writes to ``log_path`` when given, otherwise to stderr (stdout stays
    clean for command output). Idempotent per-process: reconfiguring with
    the same target only updates the level.
    """
    global _MODSTAGE_HANDLER, _CONFIGURED_TARGET

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    logger = logging.getLogger("modstage")
    logger.setLevel(_level_from_name(level))

    if _MODSTAGE_HANDLER is not None and _CONFIGURED_TARGET == target:
        _MODSTAGE_HANDLER.setLevel(_level_from_name(level))
        return

    if _MODSTAGE_HANDLER is not None:
        logger.removeHandler(_MODSTAGE_HANDLER)
        _MODSTAGE_HANDLER.close()
        _MODSTAGE_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _MODSTAGE_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _MODSTAGE_HANDLER, _CONFIGURED_TARGET
    if _MODSTAGE_HANDLER is not None:
        logging.getLogger("modstage").removeHandler(_MODSTAGE_HANDLER)
        _MODSTAGE_HANDLER.close()
    _MODSTAGE_HANDLER = None
    _CONFIGURED_TARGET = None


__all__ = ["configure_logging", "reset_logging_for_tests", "LOG_FORMAT"]
