"""
Shared pytest fixtures for test suite.
"""

from typing import Any

import pytest

from wpcontext import logging_config
from wpcontext.environment import StaticEnvironment
from wpcontext.hooks import HookRegistry

REST_URL = "https://example.com/wp-json"


@pytest.fixture
def hooks():
    """A fresh registry per test, standing in for the WordPress plugin API."""
    return HookRegistry()


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path, monkeypatch):
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(logging_config, "LOG_DIR", log_dir)
    return log_dir


@pytest.fixture
def make_environment():
    """
    Returns a factory for a bootstrapped WordPress environment.

    `rest=True` / `login=True` / `activate=True` point the current URL at the
    matching endpoint, the same way a real request would.
    """

    def _create(
        *, rest: bool = False, login: bool = False, activate: bool = False, **facts: Any
    ) -> StaticEnvironment:
        values: dict[str, Any] = {
            "core_loaded": True,
            "permalinks": "/%postname%/",
            "rest_base_url": REST_URL,
            "url": "/",
        }
        if rest:
            values["url"] = "/wp-json/foo"
        if login:
            values["url"] = "/wp-login.php"
        if activate:
            values["url"] = "/wp-activate.php"
            values["multisite"] = True
        values.update(facts)
        return StaticEnvironment(**values)

    return _create
