"""Embedded driver certificate and its temporary on-disk copy.

The certificate ships as ``assets/pty_x86_64.pem`` and is written verbatim to
a fixed temp path for the duration of a trust-store registration.
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

CREDENTIAL_ASSET = "pty_x86_64.pem"
DEFAULT_TEMP_PATH = "/tmp/drv.bin"
TEMP_MODE = 0o600


def _assets_dir() -> Path:
    # osx_tty_driver/credential.py -> osx_tty_driver/assets
    return Path(__file__).resolve().parent / "assets"


def load_credential() -> bytes:
    return (_assets_dir() / CREDENTIAL_ASSET).read_bytes()


def write_private(path: str, data: bytes) -> None:
    """Write ``data`` to a fresh file at ``path``, owner read/write only.

    Whatever already sits at ``path`` (file or symlink) is unlinked first and
    never written through; the new file is created exclusively.
    """
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_NOFOLLOW", 0)
    fd = os.open(path, flags, TEMP_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(data)


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    else:
        logger.debug("Removed temporary credential %s", path)


@contextlib.contextmanager
def materialized_credential(path: str = DEFAULT_TEMP_PATH, data: bytes | None = None) -> Iterator[str]:
    """Yield ``path`` holding the credential; the file is gone once the block exits."""

    payload = load_credential() if data is None else data
    try:
        write_private(path, payload)
        logger.debug("Wrote temporary credential %s (%d bytes)", path, len(payload))
        yield path
    finally:
        _remove(path)
