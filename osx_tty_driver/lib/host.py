from __future__ import annotations

import os
import sys


def current_platform() -> str:
    """Lower-cased platform identifier ("darwin", "linux", "win32", ...)."""
    return sys.platform.lower()


def is_platform(target: str) -> bool:
    return current_platform().lower() == target.lower()


def current_home() -> str:
    """Home directory of the invoking user, from the password database.

    Raises KeyError when the uid has no passwd entry.
    """
    import pwd  # POSIX only

    return pwd.getpwuid(os.getuid()).pw_dir
