"""CLI command: zyracss build -- compile classes found in files to CSS."""

from __future__ import annotations

import glob
import json
import logging
import sys
from pathlib import Path

import click

from zyracss.config import GenerationOptions
from zyracss.engine import Engine, GenerationResult
from zyracss.errors import ZyraError
from zyracss.parser.extractor import extract_classes

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _resolve_inputs(pattern: str) -> list[Path]:
    """Files named by *pattern*: a path, or a glob (``**`` recurses)."""
    path = Path(pattern)
    if path.is_file():
        return [path]
    return sorted(Path(p) for p in glob.glob(pattern, recursive=True) if Path(p).is_file())


def _classes_from_json(path: Path, text: str) -> list[str]:
    """A JSON input is an array of class strings or ``{"classes": [...]}``."""
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("classes", [])
    if not isinstance(data, list):
        raise click.ClickException(f"{path}: expected a JSON array of class names")
    classes: list[str] = []
    for item in data:
        if isinstance(item, str):
            classes.extend(item.split())
    return classes


def collect_classes(files: list[Path]) -> list[str]:
    """Gather class tokens from every file, first-seen order, no repeats."""
    seen: dict[str, None] = {}
    for path in files:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            try:
                found = _classes_from_json(path, text)
            except json.JSONDecodeError as exc:
                raise click.ClickException(f"{path}: invalid JSON ({exc.msg})") from exc
        else:
            found = extract_classes(text)
        logger.debug("%s: %d classes", path, len(found))
        for token in found:
            seen.setdefault(token, None)
    return list(seen)


def _summary(result: GenerationResult) -> str:
    stats = result.stats
    return (
        f"Summary: {stats.valid_classes} valid, {stats.invalid_classes} invalid, "
        f"{stats.grouped_rules} rule(s) in {stats.processing_time:.2f} ms"
    )


@click.command()
@click.option("-i", "--input", "pattern", required=True, help="File path or glob of inputs")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False), help="Write CSS here")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.option("--minify", is_flag=True, help="Minify the stylesheet")
@click.option("--verbose", is_flag=True, help="Debug logging and per-class failures")
def build(pattern: str, output: str | None, as_json: bool, minify: bool, verbose: bool) -> None:
    """Compile utility classes found in INPUT files into a stylesheet.

    JSON files contribute arrays of class names; any other file is scanned
    for class attributes. Exits with code 1 if no file matched.
    """
    _configure_logging(verbose)

    files = _resolve_inputs(pattern)
    if not files:
        click.echo(f"No files matched: {pattern}", err=True)
        sys.exit(1)

    classes = collect_classes(files)
    with Engine() as engine:
        try:
            result = engine.generate(classes, GenerationOptions(minify=minify))
        except ZyraError as exc:
            click.echo(f"Build failed: {exc}", err=True)
            sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif output:
        Path(output).write_text(result.css, encoding="utf-8")
        click.echo(f"Wrote {output}")
    else:
        click.echo(result.css, nl=False)

    if verbose:
        for item in result.invalid:
            hint = f" (try: {', '.join(item.suggestions)})" if item.suggestions else ""
            click.echo(f"  {item.class_name}: {item.reason}{hint}", err=True)
    if not as_json:
        click.echo(_summary(result), err=True)
