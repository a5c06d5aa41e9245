from __future__ import annotations

import logging
import sys

import pytest

from osx_tty_driver.lib.command import CommandError, fmt_argv, run_cmd
from osx_tty_driver.lib.keychain import add_trusted_cert, trust_command


def test_fmt_argv_quotes():
    assert fmt_argv(["security", "-k", "/Library/My Keychains/x"]) == "security -k '/Library/My Keychains/x'"


def test_run_cmd_success(fake_run_plain):
    fake_run_plain.output = "ok\n"
    res = run_cmd(["true"])
    assert res.returncode == 0
    assert res.output == "ok\n"
    assert fake_run_plain.kwargs["stderr"] is not None


def test_run_cmd_failure_raises(fake_run_plain):
    fake_run_plain.returncode = 3
    fake_run_plain.output = "nope"
    with pytest.raises(CommandError) as exc:
        run_cmd(["false"])
    assert exc.value.returncode == 3
    assert exc.value.argv == ["false"]
    assert "nope" in str(exc.value)


def test_run_cmd_unchecked(fake_run_plain):
    fake_run_plain.returncode = 3
    assert run_cmd(["false"], check=False).returncode == 3


def test_run_cmd_dry_run(fake_run_plain, caplog):
    caplog.set_level(logging.INFO)
    res = run_cmd(["sudo", "security"], dry_run=True)
    assert res.returncode == 0
    assert fake_run_plain.calls == []
    assert "CMD sudo security" in caplog.text


def test_output_only_logged_at_debug(fake_run_plain, caplog):
    fake_run_plain.output = "1 certificate added"
    caplog.set_level(logging.INFO)
    run_cmd(["security"])
    assert "certificate added" not in caplog.text


def test_trust_command_shape():
    assert trust_command("/tmp/drv.bin", keychain="/K") == [
        "sudo", "security", "add-trusted-cert", "-d", "-r", "trustRoot", "-k", "/K", "/tmp/drv.bin",
    ]
    assert trust_command("/c", keychain="/K", use_sudo=False)[0] == "security"


def test_add_trusted_cert_runs(fake_run_plain):
    add_trusted_cert("/c", keychain="/K", use_sudo=False)
    assert fake_run_plain.calls == [["security", "add-trusted-cert", "-d", "-r", "trustRoot", "-k", "/K", "/c"]]


def test_undecodable_output_is_replaced():
    script = "import sys; sys.stdout.buffer.write(b'\\xff\\xfe denied'); sys.exit(1)"
    with pytest.raises(CommandError) as exc:
        run_cmd([sys.executable, "-c", script])
    assert exc.value.returncode == 1
    assert "denied" in exc.value.output
    assert "\ufffd" in exc.value.output


def test_add_trusted_cert_logs_target(fake_run_plain, caplog):
    caplog.set_level(logging.INFO, logger="osx_tty_driver")
    add_trusted_cert("/c", keychain="/K", dry_run=True)
    assert "Trusting /c in /K (trustRoot)" in caplog.text
