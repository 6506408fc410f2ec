import logging

import pytest

from sqlany_schema.config import DEFAULT_PORT, DatabaseSettings, setup_logger


def test_settings_from_env():
    settings = DatabaseSettings.from_env({
        "SQLANY_HOST": "db.local",
        "SQLANY_PORT": "2639",
        "SQLANY_USER": "DBA",
        "SQLANY_PASSWORD": "p@ss:word",
        "SQLANY_DB": "demo",
    })

    assert settings == DatabaseSettings(host="db.local", user="DBA", password="p@ss:word", database="demo", port=2639)
    assert settings.url.drivername == "sqlalchemy_sqlany"
    assert settings.url.password == "p@ss:word"
    assert settings.url.port == 2639


def test_settings_default_port():
    settings = DatabaseSettings.from_env({
        "SQLANY_HOST": "h", "SQLANY_USER": "u", "SQLANY_PASSWORD": "p", "SQLANY_DB": "d",
    })
    assert settings.port == DEFAULT_PORT


def test_settings_report_missing_keys():
    with pytest.raises(ValueError, match="user, password"):
        DatabaseSettings.from_env({"SQLANY_HOST": "h", "SQLANY_DB": "d"})


def test_setup_logger_installs_single_handler():
    logger = setup_logger("sqlany-test", level="DEBUG")
    again = setup_logger("sqlany-test", level="DEBUG")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
