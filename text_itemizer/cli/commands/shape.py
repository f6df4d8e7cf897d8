"""Shape command - shape a line of text with a font file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from text_itemizer.config import Config
from text_itemizer.exceptions import InvalidTextError, ShapingError
from text_itemizer.shaping import create_hb_font, itemize_text, reorder_visual, shape_run
from text_itemizer.shaping.language import language_index

console = Console()


@click.command()
@click.argument("text")
@click.option("--font", "font_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Font file (default: font_path from config)")
@click.option("--face-index", type=int, default=0, help="Face index inside a font collection")
@click.option("--size", type=float, help="Pixel size (default: font_size from config)")
@click.option("--lang", help="Language code, e.g. en, ar, he")
@click.pass_context
def shape(
    ctx: click.Context,
    text: str,
    font_path: Optional[Path],
    face_index: int,
    size: Optional[float],
    lang: Optional[str],
) -> None:
    """Shape TEXT run by run and list the resulting glyphs."""
    config: Config = ctx.obj.get("config") or Config.load()
    font_path = font_path or config.font_path
    if font_path is None:
        console.print("[red]Error:[/red] No font given (use --font or font_path in config)")
        raise SystemExit(1)
    lang = lang or config.language
    if language_index(lang) < 0:
        console.print(f"[red]Error:[/red] Unknown language code {lang!r}")
        raise SystemExit(1)

    try:
        hb_font = create_hb_font(font_path, face_index, size or config.font_size)
        runs = itemize_text(text)
    except (ShapingError, InvalidTextError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    if config.visual_order:
        reorder_visual(runs)

    total_width = 0.0
    for run in runs:
        result = shape_run(hb_font, runs, run, lang)
        total_width += result.width

        table = Table(
            title=f"{runs.run_text(run)!r} [{run.script}, {run.direction.value}]",
            title_justify="left",
        )
        table.add_column("Glyph", justify="right", style="cyan")
        table.add_column("Cluster", justify="right")
        table.add_column("X advance", justify="right", style="yellow")
        table.add_column("X offset", justify="right")
        table.add_column("Y offset", justify="right")
        for glyph in result.glyphs:
            table.add_row(
                str(glyph.glyph_id),
                str(glyph.cluster),
                f"{glyph.x_advance:.2f}",
                f"{glyph.x_offset:.2f}",
                f"{glyph.y_offset:.2f}",
            )
        console.print(table)
        if result.missing_glyph_count:
            console.print(f"[yellow]Missing glyphs:[/yellow] {result.missing_glyph_count}")

    console.print(f"[bold]Width:[/bold] {total_width:.2f}px")
