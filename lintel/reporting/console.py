# Rich console output: render lint diagnostics for the terminal.

from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lintel.diagnostics.models import Diagnostic
from lintel.linter import LintResult
from lintel.rules.base import Rule


def _sorted(diagnostics: Sequence[Diagnostic]) -> list[Diagnostic]:
    return sorted(diagnostics, key=lambda d: (d.line, d.col))


def print_results(
    results: Sequence[LintResult],
    console: Optional[Console] = None,
    show_hints: bool = True,
) -> None:
    """
    Print diagnostics grouped by file, one table per file, with hints under
    each row, followed by a summary panel.
    """
    console = console or Console()
    total = sum(len(r.diagnostics) for r in results)

    if total == 0:
        console.print(
            Panel(
                f"[green]No problems found in {len(results)} file(s).[/green]",
                title="Lintel",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        _print_failures(results, console)
        return

    for result in sorted(results, key=lambda r: r.filename):
        if not result.diagnostics:
            continue
        console.print()
        console.print(
            Panel(
                f"[bold cyan]{escape(result.filename)}[/bold cyan]",
                box=box.SIMPLE_HEAD,
                border_style="blue",
                padding=(0, 1),
            )
        )

        table = Table(show_header=True, header_style="bold magenta", box=box.SIMPLE, padding=(0, 1))
        table.add_column("Line", justify="right", style="dim", width=5)
        table.add_column("Col", justify="right", style="dim", width=4)
        table.add_column("Rule", width=22)
        table.add_column("Message", style="white")

        for d in _sorted(result.diagnostics):
            message = Text(d.message)
            if show_hints and d.hint:
                message.append(f"\nhint: {d.hint}", style="dim cyan")
            table.add_row(str(d.line), str(d.col), Text(f"[{d.code}]", style="bold yellow"), message)
        console.print(table)

    _print_failures(results, console)
    _print_summary(results, console)


def _print_failures(results: Sequence[LintResult], console: Console) -> None:
    for result in results:
        for code in result.failed_rules:
            console.print(f"[bold red]error[/bold red]: rule {escape(f'[{code}]')} aborted on {escape(result.filename)}")


def _print_summary(results: Sequence[LintResult], console: Console) -> None:
    by_code: dict[str, int] = {}
    for result in results:
        for d in result.diagnostics:
            by_code[d.code] = by_code.get(d.code, 0) + 1

    total = sum(by_code.values())
    parts = [f"[bold]{total} problem{'s' if total != 1 else ''}[/bold]"]
    parts.extend(f"[yellow]{count}[/yellow] {code}" for code, count in sorted(by_code.items()))

    console.print()
    console.print(Panel(" | ".join(parts), title="Summary", border_style="yellow", box=box.ROUNDED))


def print_rules(rules: Sequence[Rule], console: Optional[Console] = None) -> None:
    """Table of rule codes and their tags."""
    console = console or Console()
    table = Table(title="Available rules", header_style="bold cyan", box=box.ROUNDED)
    table.add_column("Code", style="bold")
    table.add_column("Tags")
    table.add_column("Summary", style="white")
    for rule in rules:
        summary = rule.docs().strip().splitlines()[0] if rule.docs().strip() else ""
        table.add_row(rule.code(), ", ".join(sorted(rule.tags())), summary)
    console.print(table)
