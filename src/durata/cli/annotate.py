"""CLI entrypoints for duration annotation."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from pydantic import ValidationError
from tqdm import tqdm

from ..extraction.annotator import AnnotationUsecase, DurationAnnotator
from ..extraction.options import load_duration_options
from ..utils.logging import configure_json_logger, flush_handlers, generate_trace_id, log_event

__all__ = ["app", "build_annotator"]

app = typer.Typer(help="Duration annotation utilities", add_completion=False)

_OPTIONS_HELP = "Vocabulary file (JSON/TOML/YAML); defaults to the configured or bundled one"


def build_annotator(options_path: Optional[Path]) -> DurationAnnotator:
    """Load options and build an annotator, turning config errors into CLI errors."""

    try:
        options = load_duration_options(options_path)
    except (OSError, ValueError, ValidationError) as exc:
        raise typer.BadParameter(f"Invalid duration options: {exc}", param_hint="--options") from exc
    return DurationAnnotator(options)


@app.command("classify")
def classify_command(
    text: str = typer.Option(..., "--text", help="Text containing the selection"),
    start: int = typer.Option(..., "--start", min=0, help="Selection start (codepoint offset)"),
    end: int = typer.Option(..., "--end", min=0, help="Selection end (codepoint offset, exclusive)"),
    options_path: Optional[Path] = typer.Option(
        None, "--options", exists=True, dir_okay=False, help=_OPTIONS_HELP
    ),
    usecase: AnnotationUsecase = typer.Option(
        AnnotationUsecase.SMART, "--usecase", case_sensitive=False, help="Annotation use case"
    ),
) -> None:
    """Classify the duration overlapping a selection; prints ``null`` when none."""

    annotator = build_annotator(options_path)
    result = annotator.classify_text(text, (start, end), usecase)
    payload = result.model_dump() if result is not None else None
    typer.echo(json.dumps(payload, ensure_ascii=False))


@app.command("find")
def find_command(
    text: str = typer.Option(..., "--text", help="Text to scan"),
    options_path: Optional[Path] = typer.Option(
        None, "--options", exists=True, dir_okay=False, help=_OPTIONS_HELP
    ),
    usecase: AnnotationUsecase = typer.Option(
        AnnotationUsecase.SMART, "--usecase", case_sensitive=False, help="Annotation use case"
    ),
) -> None:
    """Print every duration mention found in ``--text``."""

    annotator = build_annotator(options_path)
    spans = annotator.annotate(text, usecase)
    typer.echo(
        json.dumps(
            [_describe(text, span.model_dump()) for span in spans],
            indent=2,
            ensure_ascii=False,
        )
    )


@app.command("batch")
def batch_command(
    input_path: Path = typer.Option(..., "--input", exists=True, dir_okay=False, help="JSONL with input records"),
    output_path: Path = typer.Option(..., "--output", dir_okay=False, help="Destination JSONL with annotations"),
    text_field: str = typer.Option("text", "--text-field", help="Record field holding the text"),
    options_path: Optional[Path] = typer.Option(
        None, "--options", exists=True, dir_okay=False, help=_OPTIONS_HELP
    ),
    usecase: AnnotationUsecase = typer.Option(
        AnnotationUsecase.RAW, "--usecase", case_sensitive=False, help="Annotation use case"
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", dir_okay=False, help="Optional JSONL log path"),
    fail_fast: bool = typer.Option(False, "--fail-fast/--no-fail-fast", help="Abort on the first invalid record"),
) -> None:
    """Annotate every record of a JSONL file, adding a ``durations`` field."""

    logger = configure_json_logger(log_file)
    trace_id = generate_trace_id()
    log_event(
        logger,
        "annotate.batch.start",
        trace_id=trace_id,
        input=str(input_path),
        output=str(output_path),
        usecase=usecase.value,
    )

    annotator = build_annotator(options_path)

    with input_path.open("r", encoding="utf-8") as src:
        lines = [line for line in src if line.strip()]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    processed = 0
    mentions = 0
    with output_path.open("w", encoding="utf-8") as dst:
        for idx, line in enumerate(tqdm(lines, desc="Annotating durations", unit="doc")):
            try:
                record = json.loads(line)
                text = record.get(text_field) if isinstance(record, dict) else None
                if not isinstance(text, str):
                    raise ValueError(f"record has no string field '{text_field}'")
            except ValueError as exc:
                if fail_fast:
                    flush_handlers(logger)
                    raise
                typer.echo(f"Skipping record {idx}: {exc}", err=True)
                log_event(logger, "annotate.batch.error", trace_id=trace_id, record_idx=idx, error=str(exc))
                continue

            spans = [_describe(text, span.model_dump()) for span in annotator.annotate(text, usecase)]
            record["durations"] = spans
            json.dump(record, dst, ensure_ascii=False)
            dst.write("\n")
            processed += 1
            mentions += len(spans)

    typer.echo(json.dumps({"status": "completed", "documents": processed, "mentions": mentions}, ensure_ascii=False))
    log_event(
        logger,
        "annotate.batch.completed",
        trace_id=trace_id,
        documents=processed,
        mentions=mentions,
    )
    flush_handlers(logger)


def _describe(text: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    start, end = payload["span"]
    classification: List[Dict[str, Any]] = list(payload["classification"])
    return {
        "span": [start, end],
        "text": text[start:end],
        "classification": classification,
    }
