"""Log file bootstrap for the ``rangeedit`` logger tree, driven by :class:`Settings`."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from ..services.settings import Settings

__all__ = ["setup_logging", "reset_logging", "resolve_level", "default_log_dir"]

PACKAGE_LOGGER = "rangeedit"
LOG_FILENAME = "rangeedit.log"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_installed: list[logging.Handler] = []


def default_log_dir() -> Path:
    return Path.home() / ".rangeedit" / "logs"


def setup_logging(
    settings: Settings | None = None,
    *,
    log_dir: Path | str | None = None,
    console: bool = False,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> Path:
    """Attach a rotating log file to the ``rangeedit`` logger and return its path.

    The level is ``settings.effective_log_level``. The directory is ``log_dir``,
    else ``settings.log_dir``, else ``~/.rangeedit/logs``. Handlers from an
    earlier call are replaced; the root logger is left alone.

    Raises:
        ValueError: the settings name an unknown log level.
    """

    settings = settings or Settings()
    level = resolve_level(settings.effective_log_level)
    target_dir = Path(log_dir or settings.log_dir or default_log_dir()).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / LOG_FILENAME

    reset_logging()
    formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    _installed.append(file_handler)
    if console:
        _installed.append(logging.StreamHandler())

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in _installed:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Logging to %s at %s", log_path, logging.getLevelName(level))
    return log_path


def reset_logging() -> None:
    """Detach and close the handlers installed by :func:`setup_logging`."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    while _installed:
        handler = _installed.pop()
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def resolve_level(level: int | str) -> int:
    """Translate ``"debug"``/``"INFO"``/``10`` style values into a logging level."""

    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value
