"""Tests for environment-driven settings."""

import pytest

from kinship.config import DEFAULT_LOG_LEVEL, get_settings
from kinship.graph import DEFAULT_MAX_DISTANCE


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    # setenv first so teardown also removes anything a .env file loaded
    for name in ("KINSHIP_MAX_DISTANCE", "KINSHIP_LOG_LEVEL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults():
    settings = get_settings()
    assert settings.max_distance == DEFAULT_MAX_DISTANCE
    assert settings.log_level == DEFAULT_LOG_LEVEL


def test_from_environment(monkeypatch):
    monkeypatch.setenv("KINSHIP_MAX_DISTANCE", "3")
    monkeypatch.setenv("KINSHIP_LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.max_distance == 3
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["abc", "-2"])
def test_invalid_distance_falls_back(monkeypatch, raw):
    monkeypatch.setenv("KINSHIP_MAX_DISTANCE", raw)
    assert get_settings().max_distance == DEFAULT_MAX_DISTANCE


def test_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("KINSHIP_MAX_DISTANCE=4\n")
    assert get_settings().max_distance == 4


@pytest.mark.parametrize("raw", ["BASIC_FORMAT", "loud", "   "])
def test_invalid_log_level_falls_back(monkeypatch, raw):
    monkeypatch.setenv("KINSHIP_LOG_LEVEL", raw)
    assert get_settings().log_level == DEFAULT_LOG_LEVEL
