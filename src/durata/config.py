"""Centralized configuration and resource resolution for durata.

This module exposes :func:`get_settings` returning the canonical locations for
runtime assets such as the duration vocabulary and the structured event log.
Paths can be customized via environment variables or by pointing
``DURATA_CONFIG_FILE`` to a TOML/YAML document.
"""
from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

__all__ = ["Settings", "get_settings", "load_config_file", "reset_settings"]

_PACKAGE_ROOT = Path(__file__).resolve().parent
_CONFIG_CACHE: Optional["Settings"] = None
_CONFIG_SOURCE: Optional[Path] = None


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    resources_dir: Path
    options_path: Path
    log_path: Optional[Path]

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Expose the resolved paths as plain strings (useful for logging)."""

        return {
            "resources_dir": str(self.resources_dir),
            "options_path": str(self.options_path),
            "log_path": str(self.log_path) if self.log_path is not None else None,
        }


def _normalize_path(value: Optional[str | Path], *, base: Optional[Path]) -> Optional[Path]:
    if value is None or value == "":
        return None
    candidate = Path(value).expanduser()
    if not candidate.is_absolute() and base is not None:
        candidate = base / candidate
    return candidate.resolve()


def load_config_file(path: Path) -> Mapping[str, Any]:
    """Read a TOML, YAML or JSON-compatible YAML document into a mapping."""

    if not path.exists():
        raise FileNotFoundError(f"Config file '{path}' does not exist")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        with path.open("rb") as handle:
            return tomllib.load(handle)
    if suffix in {".yaml", ".yml", ".json"}:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
        if loaded is None:
            return {}
        if not isinstance(loaded, Mapping):
            raise ValueError(f"Expected a mapping at {path}, got {type(loaded)!r}")
        return loaded
    raise ValueError(f"Unsupported config file format: '{suffix}'")


def _coalesce_mapping(source: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(source, Mapping):
        return {}
    return source


def _build_settings(config_file: Optional[Path]) -> Settings:
    config_data: Mapping[str, Any] = {}
    config_dir: Optional[Path] = None
    if config_file is not None:
        config_file = _normalize_path(config_file, base=Path.cwd())
        if config_file is not None:
            config_data = load_config_file(config_file)
            config_dir = config_file.parent

    paths_section = _coalesce_mapping(config_data.get("paths"))
    env = os.environ

    resources_dir = _normalize_path(
        env.get("DURATA_RESOURCES_DIR") or paths_section.get("resources"),
        base=config_dir,
    ) or (_PACKAGE_ROOT / "extraction" / "resources").resolve()

    options_path = _normalize_path(
        env.get("DURATA_OPTIONS_PATH") or paths_section.get("options"),
        base=config_dir,
    ) or (resources_dir / "duration_en.json").resolve()

    log_path = _normalize_path(
        env.get("DURATA_LOG_PATH") or paths_section.get("log"),
        base=config_dir,
    )

    return Settings(
        resources_dir=resources_dir,
        options_path=options_path,
        log_path=log_path,
    )


def get_settings(*, refresh: bool = False, config_file: str | Path | None = None) -> Settings:
    """Return the cached :class:`Settings` configuration.

    Parameters
    ----------
    refresh:
        When ``True`` the cached configuration is discarded and recomputed.
    config_file:
        Optional explicit path to the configuration document. When provided the
        returned instance is not cached globally, allowing callers (e.g. tests)
        to override settings temporarily.
    """

    global _CONFIG_CACHE, _CONFIG_SOURCE

    explicit_path = Path(config_file).expanduser() if config_file is not None else None

    if explicit_path is not None:
        return _build_settings(explicit_path)

    env_path = os.getenv("DURATA_CONFIG_FILE")
    source_path = Path(env_path).expanduser() if env_path else None

    if refresh or _CONFIG_CACHE is None or _CONFIG_SOURCE != source_path:
        _CONFIG_CACHE = _build_settings(source_path)
        _CONFIG_SOURCE = source_path

    return _CONFIG_CACHE


def reset_settings() -> None:
    """Clear the cached configuration (mainly useful for tests)."""

    global _CONFIG_CACHE, _CONFIG_SOURCE
    _CONFIG_CACHE = None
    _CONFIG_SOURCE = None
