from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping

logger = logging.getLogger(__name__)

MARKER_NAME = ".tty_settings"
MARKER_MODE = 0o755
DEFAULT_FLAGS: Dict[str, str] = {"frame_buffer": "yes", "enable": "yes"}


def marker_path(home: str, name: str = MARKER_NAME) -> str:
    return str(Path(home) / name)


def is_installed(path: str) -> bool:
    """Any filesystem entry counts, whatever it holds (even a dangling symlink)."""
    return os.path.lexists(path)


def render_marker(flags: Mapping[str, str]) -> str:
    return "".join(f"{k}={v}\n" for k, v in flags.items())


def write_marker(path: str, flags: Mapping[str, str] = DEFAULT_FLAGS) -> None:
    data = render_marker(flags).encode("utf-8")
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, MARKER_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    logger.info("Wrote settings %s", path)


def read_marker(path: str) -> Dict[str, str]:
    """Parse ``key=value`` lines. Only used for reporting; installs never read it back."""

    out: Dict[str, str] = {}
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        out[k.strip()] = v.strip()
    return out
