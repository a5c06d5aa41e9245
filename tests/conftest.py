"""Shared fixtures: a fake darwin host with a throwaway home and temp dir."""

from __future__ import annotations

import subprocess

import pytest

from osx_tty_driver.config import InstallerConfig
from osx_tty_driver.lib import host


class FakeRun:
    """Stands in for subprocess.run and records every argv it was given."""

    def __init__(self, returncode: int = 0, output: str = ""):
        self.returncode = returncode
        self.output = output
        self.calls: list[list[str]] = []
        self.cert_seen: list[bytes] = []

    def __call__(self, argv, **kwargs):
        self.calls.append(list(argv))
        # The certificate path is always the last argument.
        with open(argv[-1], "rb") as f:
            self.cert_seen.append(f.read())
        return subprocess.CompletedProcess(argv, self.returncode, stdout=self.output, stderr=None)


@pytest.fixture
def darwin(monkeypatch):
    monkeypatch.setattr(host, "current_platform", lambda: "darwin")


@pytest.fixture
def linux(monkeypatch):
    monkeypatch.setattr(host, "current_platform", lambda: "linux")


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr("osx_tty_driver.lib.command.subprocess.run", fake)
    return fake


@pytest.fixture
def home(tmp_path):
    d = tmp_path / "home"
    d.mkdir()
    return d


@pytest.fixture
def cfg(tmp_path, home):
    return InstallerConfig(home=str(home), temp_cert_path=str(tmp_path / "drv.bin"))


class PlainRun:
    def __init__(self):
        self.returncode = 0
        self.output = ""
        self.calls: list[list[str]] = []
        self.kwargs: dict = {}

    def __call__(self, argv, **kwargs):
        self.calls.append(list(argv))
        self.kwargs = kwargs
        return subprocess.CompletedProcess(argv, self.returncode, stdout=self.output, stderr=None)


@pytest.fixture
def fake_run_plain(monkeypatch):
    """subprocess.run replacement that does not touch the filesystem."""
    fake = PlainRun()
    monkeypatch.setattr("osx_tty_driver.lib.command.subprocess.run", fake)
    return fake
