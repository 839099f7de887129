import logging

import pytest

from huffcodec import settings


@pytest.fixture
def basic_config(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    return calls


def test_level_from_environment(monkeypatch, basic_config):
    monkeypatch.setenv(settings.LOG_LEVEL_ENV, "debug")
    settings.configure_logging()
    assert basic_config == [{"level": "DEBUG", "format": settings.LOG_FORMAT}]


def test_level_defaults_to_info(monkeypatch, basic_config):
    monkeypatch.delenv(settings.LOG_LEVEL_ENV, raising=False)
    settings.configure_logging()
    assert basic_config[0]["level"] == "INFO"


def test_explicit_level_wins(monkeypatch, basic_config):
    monkeypatch.setenv(settings.LOG_LEVEL_ENV, "ERROR")
    settings.configure_logging(logging.WARNING)
    assert basic_config[0]["level"] == logging.WARNING
