"""Settings loading from the environment."""

import os

import pytest
from pydantic import ValidationError

from staticserve.config import Settings, _build_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    s = Settings()
    assert s.PORT == 8000
    assert s.HOST == "0.0.0.0"
    assert s.ROOT_DIR == "./public"
    assert s.DEFAULT_DOCUMENT == "index.html"
    assert s.CONFINE_TO_ROOT is True


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("CONFINE_TO_ROOT", "false")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    s = _build_settings()
    assert s.PORT == 9000
    assert s.CONFINE_TO_ROOT is False
    assert s.LOG_LEVEL == "debug"


def test_relative_root_pinned_to_working_directory(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ROOT_DIR", "assets")
    s = _build_settings()
    assert s.ROOT_DIR == os.path.join(os.getcwd(), "assets")


def test_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("PORT=8123\nROOT_DIR=/srv/site\n")
    s = _build_settings()
    assert s.PORT == 8123
    assert s.ROOT_DIR == "/srv/site"
    assert s.root_path == "/srv/site"


@pytest.mark.parametrize("value", ["0", "-1"])
def test_chunk_size_must_be_positive(monkeypatch, tmp_path, value):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CHUNK_SIZE", value)
    with pytest.raises(ValidationError):
        Settings()
