import importlib

import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("testing", "config.testing"),
        ("test", "config.testing"),
        ("development", "config.development"),
        ("anything-else", "config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_development_is_the_default(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_settings_module() == "config.development"


@pytest.mark.parametrize("module", ["config.development", "config.testing", "config.production"])
def test_settings_modules_define_reconciliation_settings(module):
    settings = importlib.import_module(module)

    assert set(settings.DB_CONFIG) == {"host", "port", "user", "password", "database"}
    assert settings.RECONCILIATION_BATCH_LIMIT > 0
    assert settings.RECONCILIATION_LOOKBACK_DAYS > 0
    assert settings.LOG_LEVEL
