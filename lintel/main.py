from __future__ import annotations

"""
Typer CLI entry point and orchestration of the lint pipeline.

- ``lintel lint PATHS...`` finds sources, lints them with the selected rules
  and prints diagnostics (rich table, or JSON with --json).
- ``lintel rules [CODE]`` lists registered rules or prints one rule's docs.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown

from lintel.config import Config, build_config, get_all_rules, get_rule
from lintel.errors import ConfigurationError, UnsupportedFileError
from lintel.linter import Linter
from lintel.reporting.console import print_results, print_rules
from lintel.traversal import collect_targets

logger = logging.getLogger(__name__)

app = typer.Typer(help="Lintel - lint rules for JavaScript and TypeScript sources.")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def lint(
    paths: List[Path] = typer.Argument(
        ...,
        exists=True,
        readable=True,
        help="Files or directories to lint.",
    ),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Run rules carrying this tag (default: recommended)."),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="Also run this rule code."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-e", help="Never run this rule code."),
    as_json: bool = typer.Option(False, "--json", help="Print diagnostics as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """
    Lint files or every JavaScript/TypeScript file under the given directories.

    Exits with code 1 when any diagnostic is reported.
    """
    _setup_logging(verbose)
    try:
        config: Config = build_config(tags=tag or None, include=include, exclude=exclude)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if not config.rules:
        typer.echo("No rules are enabled in the current configuration.")
        raise typer.Exit(code=1)

    try:
        files = collect_targets(paths)
    except FileNotFoundError as exc:
        raise typer.BadParameter(str(exc)) from exc

    linter = Linter(config)
    results = []
    for path in files:
        try:
            result = linter.lint_file(path)
        except UnsupportedFileError as exc:
            logger.warning("%s", exc)
            continue
        if result is not None:
            results.append(result)

    if as_json:
        payload = [d.model_dump(mode="json") for r in results for d in r.diagnostics]
        typer.echo(json.dumps(payload, indent=2))
    else:
        print_results(results)

    if any(r.diagnostics for r in results):
        raise typer.Exit(code=1)


@app.command()
def rules(
    code: Optional[str] = typer.Argument(None, help="Show the documentation of this rule."),
    as_json: bool = typer.Option(False, "--json", help="Print the rule catalog as JSON."),
) -> None:
    """List available rules, or show one rule's documentation."""
    if code is not None:
        try:
            rule = get_rule(code)
        except ConfigurationError as exc:
            raise typer.BadParameter(str(exc)) from exc
        if as_json:
            typer.echo(json.dumps({"code": rule.code(), "tags": sorted(rule.tags()), "docs": rule.docs()}, indent=2))
        else:
            Console().print(Markdown(rule.docs()))
        return

    catalog = get_all_rules()
    if as_json:
        typer.echo(
            json.dumps(
                [{"code": r.code(), "tags": sorted(r.tags()), "docs": r.docs()} for r in catalog],
                indent=2,
            )
        )
    else:
        print_rules(catalog)


def main() -> None:
    """Entry point for `python -m lintel.main` and the `lintel` script."""
    app()


if __name__ == "__main__":
    main()
