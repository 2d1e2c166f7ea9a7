from __future__ import annotations

import importlib
from datetime import time

import pytest

from shift_attendance.config import get_settings_module
from shift_attendance.container import policy_from_settings


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "shift_attendance.config.production"),
        ("PROD", "shift_attendance.config.production"),
        ("testing", "shift_attendance.config.testing"),
        ("development", "shift_attendance.config.development"),
        ("staging", "shift_attendance.config.development"),
    ],
)
def test_settings_module_from_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_policy_built_from_testing_settings():
    settings = importlib.import_module("shift_attendance.config.testing")

    policy = policy_from_settings(settings)

    assert policy.grace_minutes == 5
    assert policy.pending_window_minutes == 60
    assert policy.penalty.every == 3
    assert policy.penalty.allow_negative_balance is True
    assert policy.default_entry_time == time(9, 0)
    assert policy.timezone.key == "Asia/Karachi"
