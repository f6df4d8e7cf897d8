"""Batch command - itemize every line of a text file."""

from __future__ import annotations

import concurrent.futures
import json
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.progress import Progress

from text_itemizer.cli.commands.itemize import runs_as_records
from text_itemizer.config import Config
from text_itemizer.exceptions import InvalidTextError
from text_itemizer.shaping import itemize_text, reorder_visual

console = Console(stderr=True)


def itemize_line(line_no: int, line: str, visual: bool) -> dict[str, Any]:
    """Itemize one line on the calling worker thread's bidi context."""
    runs = itemize_text(line)
    if visual:
        reorder_visual(runs)
    return {
        "line": line_no,
        "text": line,
        "degraded": runs.degraded,
        "runs": runs_as_records(runs),
    }


@click.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output JSON lines file (default: stdout)")
@click.option("-j", "--jobs", type=int, help="Parallel jobs")
@click.option("--logical", is_flag=True, help="Keep logical order (skip visual reordering)")
@click.option("--continue-on-error", is_flag=True, help="Continue processing on errors")
@click.pass_context
def batch(
    ctx: click.Context,
    input_file: Path,
    output: Optional[Path],
    jobs: Optional[int],
    logical: bool,
    continue_on_error: bool,
) -> None:
    """Itemize each non-empty line of INPUT_FILE and write JSON lines."""
    config: Config = ctx.obj.get("config") or Config.load()
    if jobs is None:
        jobs = config.jobs
    if jobs < 1:
        console.print("[red]Error:[/red] --jobs must be at least 1")
        raise SystemExit(1)
    visual = config.visual_order and not logical

    lines = [
        (i, line)
        for i, line in enumerate(input_file.read_text(encoding="utf-8").splitlines(), start=1)
        if line.strip()
    ]
    if not lines:
        console.print("[red]Error:[/red] No lines to itemize")
        raise SystemExit(1)

    results: dict[int, dict[str, Any]] = {}
    error_count = 0
    degraded_count = 0

    with Progress(console=console, transient=True) as progress:
        task = progress.add_task("[green]Itemizing...", total=len(lines))

        with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
            future_to_line = {
                executor.submit(itemize_line, line_no, line, visual): line_no
                for line_no, line in lines
            }

            for future in concurrent.futures.as_completed(future_to_line):
                line_no = future_to_line[future]
                try:
                    record = future.result()
                    results[line_no] = record
                    if record["degraded"]:
                        degraded_count += 1
                except InvalidTextError as e:
                    error_count += 1
                    if not continue_on_error:
                        console.print(f"[red]Error on line {line_no}:[/red] {e}")
                        raise SystemExit(1) from e
                finally:
                    progress.advance(task)

    payload = "\n".join(
        json.dumps(results[line_no], ensure_ascii=False) for line_no in sorted(results)
    )
    if output:
        output.write_text(payload + "\n", encoding="utf-8")
    else:
        click.echo(payload)

    console.print("[bold]Batch complete:[/bold]")
    console.print(f"  [green]Lines:[/green] {len(results)}")
    console.print(f"  [yellow]Degraded:[/yellow] {degraded_count}")
    console.print(f"  [red]Failed:[/red] {error_count}")
    if output:
        console.print(f"  [blue]Output:[/blue] {output}")
