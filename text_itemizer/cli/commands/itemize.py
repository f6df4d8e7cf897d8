"""Itemize command - show the runs of a single line of text."""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from text_itemizer.config import Config
from text_itemizer.exceptions import InvalidTextError
from text_itemizer.shaping import TextRuns, itemize_text, reorder_visual

console = Console()


def runs_as_records(runs: TextRuns) -> list[dict[str, Any]]:
    """Flatten runs into JSON-friendly dicts, in their current order."""
    return [
        {
            "start": run.start,
            "length": run.length,
            "script": run.script,
            "direction": run.direction.value,
            "text": runs.run_text(run),
        }
        for run in runs
    ]


@click.command()
@click.argument("text")
@click.option("--logical", is_flag=True, help="Keep logical order (skip visual reordering)")
@click.option("--json", "as_json", is_flag=True, help="Print runs as JSON")
@click.pass_context
def itemize(ctx: click.Context, text: str, logical: bool, as_json: bool) -> None:
    """Split TEXT into runs of one direction and script."""
    config: Config = ctx.obj.get("config") or Config.load()

    try:
        runs = itemize_text(text)
    except InvalidTextError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    visual = config.visual_order and not logical
    if visual:
        reorder_visual(runs)

    records = runs_as_records(runs)
    if as_json:
        click.echo(json.dumps({"text": text, "visual": visual, "runs": records}, ensure_ascii=False))
        return

    order = "visual" if visual else "logical"
    table = Table(title=f"{len(records)} runs ({order} order)")
    table.add_column("Start", justify="right", style="yellow")
    table.add_column("Length", justify="right", style="yellow")
    table.add_column("Script", style="cyan")
    table.add_column("Direction", style="green")
    table.add_column("Text")

    for record in records:
        table.add_row(
            str(record["start"]),
            str(record["length"]),
            record["script"],
            record["direction"],
            record["text"],
        )

    console.print(table)
    if runs.degraded:
        console.print("[yellow]Warning:[/yellow] bidi analysis failed, output is degraded")
