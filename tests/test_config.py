"""
Tests for settings and the logging level they drive.
"""

import logging

import pytest

from app.config import Environment, Settings
from app.logging_config import resolve_log_level


def test_environment_normalized_from_string():
    assert Settings(environment="PRODUCTION").environment == Environment.PRODUCTION


@pytest.mark.parametrize(
    "debug, configured, explicit, expected",
    [
        (False, "WARNING", None, logging.WARNING),
        (True, "WARNING", None, logging.DEBUG),
        (True, "WARNING", "error", logging.ERROR),
        (False, "nonsense", None, logging.INFO),
    ],
)
def test_resolve_log_level(isolated_settings, monkeypatch, debug, configured, explicit, expected):
    monkeypatch.setattr(isolated_settings, "debug", debug)
    monkeypatch.setattr(isolated_settings, "log_level", configured)

    assert resolve_log_level(explicit) == expected
