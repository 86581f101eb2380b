from __future__ import annotations

import logging

import pytest

from common.env import env_bool, env_int, env_str
from common.logging import resolve_level, setup_default_logging


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PXF_T_STR", "  hi ")
    monkeypatch.setenv("PXF_T_BLANK", "   ")
    monkeypatch.setenv("PXF_T_INT", "-3")
    monkeypatch.setenv("PXF_T_BOOL", "off")
    assert env_str("PXF_T_STR") == "hi"
    assert env_str("PXF_T_BLANK", "d") == "d"
    assert env_int("PXF_T_INT", 5, min_value=0) == 0
    assert env_int("PXF_T_MISSING", 5) == 5
    assert env_bool("PXF_T_BOOL", True) is False
    assert env_bool("PXF_T_MISSING", True) is True


def test_resolve_level() -> None:
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level(logging.WARNING) == logging.WARNING


def test_setup_default_logging_only_adjusts_level_when_configured(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    monkeypatch.setattr(root, "level", root.level)
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

    setup_default_logging("warning")
    assert root.level == logging.WARNING
    assert calls == []


def test_setup_default_logging_configures_bare_root(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

    setup_default_logging("debug")
    assert calls and calls[0]["level"] == logging.DEBUG
