"""OSX tty framebuffer driver trust installer.

Core design goals:
- Idempotent: a marker file records that setup already ran
- No-op outside macOS
- The temporary certificate never outlives the call
- Failures are returned to the host, which decides whether to exit
"""

from .config import InstallerConfig
from .installer import EnsureResult, InstallState, Outcome, ensure, ensure_or_abort, installation_state

__all__ = [
    "EnsureResult",
    "InstallState",
    "InstallerConfig",
    "Outcome",
    "ensure",
    "ensure_or_abort",
    "installation_state",
]
