from __future__ import annotations

import logging

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


def trust_command(
    cert_path: str,
    *,
    keychain: str,
    profile: str = "trusted-cert",
    trust_policy: str = "trustRoot",
    use_sudo: bool = True,
) -> list[str]:
    """argv for adding ``cert_path`` to ``keychain`` as a trusted root (admin domain)."""

    argv = ["security", f"add-{profile}", "-d", "-r", trust_policy, "-k", keychain, cert_path]
    if use_sudo:
        argv.insert(0, "sudo")
    return argv


def add_trusted_cert(
    cert_path: str,
    *,
    keychain: str,
    profile: str = "trusted-cert",
    trust_policy: str = "trustRoot",
    use_sudo: bool = True,
    dry_run: bool = False,
) -> CmdResult:
    # Blocks until `security` exits; sudo may prompt on the controlling tty.
    argv = trust_command(
        cert_path,
        keychain=keychain,
        profile=profile,
        trust_policy=trust_policy,
        use_sudo=use_sudo,
    )
    logger.info("Trusting %s in %s (%s)", cert_path, keychain, trust_policy)
    return run_cmd(argv, dry_run=dry_run)
