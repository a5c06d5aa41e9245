from __future__ import annotations

import argparse
import logging
from typing import Optional

from .config import load_config
from .installer import InstallState, Outcome, ensure, installation_state, settings_path_for
from .logging_utils import DEFAULT_LOG_PATH, configure_logging, reset_logging
from .marker import read_marker

logger = logging.getLogger(__name__)


def cmd_ensure(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    if args.dry_run:
        cfg = cfg.replace(dry_run=True)

    result = ensure(cfg)
    logger.info("ensure: %s", result.outcome.value)
    if result.outcome is Outcome.FAILED:
        logger.error("Driver signing failed: %s", result.reason)
        return 1
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    state = installation_state(cfg)
    print(state.value)
    if state is InstallState.UNKNOWN:
        return 1

    if state is InstallState.INSTALLED:
        path = settings_path_for(cfg)
        print(path)
        try:
            for k, v in read_marker(path).items():
                print(f"  {k}={v}")
        except (OSError, UnicodeDecodeError) as e:
            print(f"  (unreadable: {e})")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="osx-tty-driver")
    p.add_argument("--config", default=None, help="YAML file overriding installer defaults")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to log file")
    p.add_argument("-v", "--verbose", action="store_true", help="Log command output")
    sub = p.add_subparsers(dest="command", required=True)

    p_ensure = sub.add_parser("ensure", help="Trust the driver certificate if not done yet")
    p_ensure.add_argument("--dry-run", action="store_true", help="Log the trust command without running it")
    p_ensure.set_defaults(func=cmd_ensure)

    p_status = sub.add_parser("status", help="Show whether the driver certificate was installed")
    p_status.set_defaults(func=cmd_status)

    args = p.parse_args(argv)
    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        return args.func(args)
    except Exception:
        logger.exception("osx-tty-driver failed")
        raise
    finally:
        reset_logging()


if __name__ == "__main__":
    raise SystemExit(main())
