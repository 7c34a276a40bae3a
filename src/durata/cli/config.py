"""Commands to inspect the resolved durata configuration."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

import typer

from ..config import Settings, get_settings
from .annotate import build_annotator

__all__ = ["app"]

app = typer.Typer(help="Diagnostics for settings and duration vocabularies.", add_completion=False)


def _inventory(settings: Settings) -> Dict[str, Dict[str, object]]:
    inventory: Dict[str, Dict[str, object]] = {}
    for key, value in settings.as_dict().items():
        if value is None:
            inventory[key] = {"path": None, "exists": False, "kind": "unset"}
            continue
        path = Path(value)
        if path.is_dir():
            kind = "directory"
        elif path.is_file():
            kind = "file"
        else:
            kind = "missing"
        inventory[key] = {"path": str(path), "exists": path.exists(), "kind": kind}
    return inventory


@app.command("paths")
def show_paths(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Alternative TOML/YAML configuration used instead of environment variables.",
    ),
    refresh: bool = typer.Option(False, "--refresh", help="Ignore the cached settings and rebuild them."),
) -> None:
    """Print the resolved settings as JSON."""

    settings = get_settings(refresh=refresh, config_file=config_file)
    payload = {
        "config_source": str(config_file) if config_file else "environment",
        "paths": _inventory(settings),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("options")
def show_options(
    options_path: Optional[Path] = typer.Option(
        None, "--options", exists=True, dir_okay=False, help="Vocabulary file to validate"
    ),
) -> None:
    """Validate a vocabulary file and print the options plus lexicon size."""

    annotator = build_annotator(options_path)
    payload = {
        "options": annotator.options.model_dump(mode="json"),
        "word_forms": len(annotator.lexicon),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
