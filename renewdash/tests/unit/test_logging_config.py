from __future__ import annotations

import logging

import pytest

from renewdash.utils.logging import configure_root, level_name, resolve_env_level


@pytest.fixture(autouse=True)
def _restore_root_level():
    root = logging.getLogger()
    previous = root.level
    yield
    root.setLevel(previous)


def test_explicit_level_variable_wins() -> None:
    assert resolve_env_level({"RENEWDASH_LOG_LEVEL": "warning", "RENEWDASH_DEBUG": "1"}) == logging.WARNING
    assert resolve_env_level({"RENEWDASH_LOG_LEVEL": "15"}) == 15


def test_debug_flag_enables_debug() -> None:
    assert resolve_env_level({"RENEWDASH_DEBUG": "yes"}) == logging.DEBUG
    assert resolve_env_level({"RENEWDASH_DEBUG": "off"}) is None


def test_configure_root_applies_default_without_overrides() -> None:
    effective = configure_root("ERROR", environ={})

    assert effective == logging.ERROR
    assert logging.getLogger().level == logging.ERROR
    assert level_name(effective) == "ERROR"


def test_configure_root_honours_environment() -> None:
    assert configure_root(logging.INFO, environ={"RENEWDASH_DEBUG": "true"}) == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING
