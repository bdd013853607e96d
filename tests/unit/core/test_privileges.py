"""Tests for RealPrivileges on non-Windows platforms and the fail-closed path."""

import ctypes
import sys

import pytest

from dpstctl.core.privileges import RealPrivileges


def test_root_uid_is_elevated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr("os.geteuid", lambda: 0, raising=False)

    assert RealPrivileges().is_elevated() is True


def test_regular_uid_is_not_elevated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr("os.geteuid", lambda: 1000, raising=False)

    assert RealPrivileges().is_elevated() is False


def test_missing_geteuid_fails_closed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delattr("os.geteuid", raising=False)

    assert RealPrivileges().is_elevated() is False


def test_windows_query_failure_fails_closed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "platform", "win32")
    # ctypes.windll does not exist off Windows; removing it covers both platforms
    monkeypatch.delattr(ctypes, "windll", raising=False)

    assert RealPrivileges().is_elevated() is False
