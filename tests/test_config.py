from pathlib import Path

import pytest

from durata.config import get_settings, reset_settings


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for name in ("DURATA_CONFIG_FILE", "DURATA_OPTIONS_PATH", "DURATA_RESOURCES_DIR", "DURATA_LOG_PATH"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def test_defaults_point_to_bundled_resources() -> None:
    settings = get_settings()
    assert settings.options_path.name == "duration_en.json"
    assert settings.options_path.exists()
    assert settings.log_path is None
    assert get_settings() is settings


def test_environment_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("DURATA_OPTIONS_PATH", str(tmp_path / "it.json"))
    monkeypatch.setenv("DURATA_LOG_PATH", str(tmp_path / "events.jsonl"))
    settings = get_settings(refresh=True)
    assert settings.options_path == (tmp_path / "it.json").resolve()
    assert settings.log_path == (tmp_path / "events.jsonl").resolve()


def test_config_file_paths_are_relative_to_file(tmp_path: Path) -> None:
    config = tmp_path / "durata.toml"
    config.write_text('[paths]\noptions = "vocab/de.yaml"\nlog = "logs/run.jsonl"\n', encoding="utf-8")
    settings = get_settings(config_file=config)
    assert settings.options_path == (tmp_path / "vocab" / "de.yaml").resolve()
    assert settings.log_path == (tmp_path / "logs" / "run.jsonl").resolve()
    assert settings.as_dict()["log_path"] == str((tmp_path / "logs" / "run.jsonl").resolve())


def test_config_file_from_environment(tmp_path: Path, monkeypatch) -> None:
    config = tmp_path / "durata.yaml"
    config.write_text("paths:\n  options: custom.json\n", encoding="utf-8")
    monkeypatch.setenv("DURATA_CONFIG_FILE", str(config))
    assert get_settings().options_path == (tmp_path / "custom.json").resolve()


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        get_settings(config_file=tmp_path / "nope.toml")
