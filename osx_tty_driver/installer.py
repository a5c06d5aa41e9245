"""Ensure the OSX tty framebuffer driver certificate is trusted.

Flow: platform gate -> marker gate -> materialize certificate -> add it to the
system keychain as a trusted root -> write the marker -> remove the temporary
certificate. Every non-darwin host is a silent no-op, as is a host that
already has the marker file.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from .config import InstallerConfig
from .credential import materialized_credential
from .lib import host
from .lib.command import CommandError
from .lib.keychain import add_trusted_cert
from .marker import is_installed, marker_path, write_marker

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    SKIPPED_WRONG_PLATFORM = "skipped-wrong-platform"
    SKIPPED_ALREADY_INSTALLED = "skipped-already-installed"
    INSTALLED = "installed"
    # Trust command logged, not run; marker not written.
    DRY_RUN = "dry-run"
    FAILED = "failed"


class InstallState(enum.Enum):
    NOT_APPLICABLE = "not-applicable"
    NOT_INSTALLED = "not-installed"
    INSTALLED = "installed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class EnsureResult:
    outcome: Outcome
    marker_path: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.FAILED


def settings_path_for(cfg: InstallerConfig) -> str:
    home = cfg.home if cfg.home is not None else host.current_home()
    return marker_path(home, cfg.marker_name)


def installation_state(config: Optional[InstallerConfig] = None) -> InstallState:
    """Where this host is in the install lifecycle; UNKNOWN if the user's home can't be resolved."""

    cfg = config or InstallerConfig()
    if not host.is_platform(cfg.target_platform):
        return InstallState.NOT_APPLICABLE
    try:
        settings_path = settings_path_for(cfg)
    except (KeyError, OSError):
        logger.exception("Cannot resolve the current user")
        return InstallState.UNKNOWN
    if is_installed(settings_path):
        return InstallState.INSTALLED
    return InstallState.NOT_INSTALLED


def _install(cfg: InstallerConfig, settings_path: str) -> None:
    logger.info("OSX tty framebuffer driver installed but not signed, signing it...")
    with materialized_credential(cfg.temp_cert_path) as cert_path:
        add_trusted_cert(
            cert_path,
            keychain=cfg.keychain,
            profile=cfg.cert_profile,
            trust_policy=cfg.trust_policy,
            use_sudo=cfg.use_sudo,
            dry_run=cfg.dry_run,
        )
        if cfg.dry_run:
            logger.info("Would write settings %s", settings_path)
            return
        write_marker(settings_path, cfg.marker_flags)
    logger.info("Driver successfully signed")


def ensure(config: Optional[InstallerConfig] = None) -> EnsureResult:
    """Install the driver certificate once; safe to call on every startup."""

    cfg = config or InstallerConfig()

    if not host.is_platform(cfg.target_platform):
        return EnsureResult(Outcome.SKIPPED_WRONG_PLATFORM)

    try:
        settings_path = settings_path_for(cfg)
    except (KeyError, OSError) as e:
        logger.exception("Cannot resolve the current user")
        return EnsureResult(Outcome.FAILED, reason=f"unknown user: {e}")

    if is_installed(settings_path):
        return EnsureResult(Outcome.SKIPPED_ALREADY_INSTALLED, marker_path=settings_path)

    try:
        _install(cfg, settings_path)
    except CommandError as e:
        logger.exception("Trust-store registration failed")
        return EnsureResult(Outcome.FAILED, marker_path=settings_path, reason=str(e))
    except OSError as e:
        logger.exception("Driver signing failed")
        return EnsureResult(Outcome.FAILED, marker_path=settings_path, reason=str(e))

    if cfg.dry_run:
        return EnsureResult(Outcome.DRY_RUN, marker_path=settings_path)
    return EnsureResult(Outcome.INSTALLED, marker_path=settings_path)


def ensure_or_abort(config: Optional[InstallerConfig] = None) -> EnsureResult:
    """Like ensure(), but a failure terminates the process with status 1."""

    result = ensure(config)
    if result.outcome is Outcome.FAILED:
        raise SystemExit(1)
    return result
