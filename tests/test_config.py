"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from cliff.config import Settings, load_settings, resolve_env_file


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in (
        "CLIFF_ENV_FILE",
        "CLIFF_OPENAI_API_KEY",
        "CLIFF_OPENAI_MODEL",
        "CLIFF_SEARCH_PROVIDER",
        "CLIFF_SHELL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.search_provider == "duckduckgo"
    assert settings.planner_temperature == 0.0
    assert settings.shell


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLIFF_OPENAI_MODEL", "local-model")
    monkeypatch.setenv("CLIFF_SHELL", "/bin/bash")
    settings = load_settings()
    assert settings.openai_model == "local-model"
    assert settings.shell == "/bin/bash"


def test_env_file_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("CLIFF_OPENAI_MODEL=from-file\n", encoding="utf-8")
    monkeypatch.setenv("CLIFF_ENV_FILE", str(env_file))

    assert resolve_env_file() == env_file
    assert load_settings().openai_model == "from-file"


def test_default_env_file_in_cwd(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("CLIFF_SEARCH_PROVIDER=tavily\n", encoding="utf-8")
    env_file = resolve_env_file()
    assert env_file is not None
    assert env_file.resolve() == (tmp_path / ".env").resolve()
    assert load_settings().search_provider == "tavily"


def test_no_env_file() -> None:
    assert resolve_env_file() is None


def test_masked_hides_secrets() -> None:
    settings = Settings(openai_api_key="sk-secret", tavily_api_key=None)
    masked = settings.masked()
    assert masked["openai_api_key"] == "Set"
    assert masked["tavily_api_key"] == "Not Set"
    assert "sk-secret" not in str(masked)


def test_invalid_provider_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLIFF_SEARCH_PROVIDER", "bing")
    with pytest.raises(ValueError):
        load_settings()
