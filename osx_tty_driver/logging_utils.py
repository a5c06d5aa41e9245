"""Log setup for the ``osx-tty-driver`` command.

Only the ``osx_tty_driver`` logger is configured; applications embedding
ensure() keep their root logger exactly as they set it up.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

PACKAGE_LOGGER = "osx_tty_driver"
DEFAULT_LOG_PATH = "~/Library/Logs/osx-tty-driver.log"
FALLBACK_LOG_NAME = "osx-tty-driver.log"

_handlers: List[logging.Handler] = []


def _file_handler(path: str) -> logging.FileHandler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf-8")


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    console: bool = True,
) -> str:
    """Send package logs to ``log_path`` and, tersely, to stderr.

    An unwritable log directory falls back to ./osx-tty-driver.log. A second
    call only changes the level. Returns the file actually written.
    """

    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.setLevel(level)
    if _handlers:
        return _handlers[0].baseFilename  # type: ignore[attr-defined]

    path = os.path.expanduser(log_path)
    try:
        fh = _file_handler(path)
    except OSError:
        path = str(Path.cwd() / FALLBACK_LOG_NAME)
        fh = _file_handler(path)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    _handlers.append(fh)

    if console:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        _handlers.append(ch)

    for h in _handlers:
        pkg.addHandler(h)

    pkg.debug("Logging to %s", fh.baseFilename)
    return fh.baseFilename


def reset_logging() -> None:
    """Detach and close whatever configure_logging() added."""

    pkg = logging.getLogger(PACKAGE_LOGGER)
    while _handlers:
        h = _handlers.pop()
        pkg.removeHandler(h)
        h.close()
    pkg.setLevel(logging.NOTSET)
