"""Typer CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from soft_terminal.text.fonts import FontError


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="soft-terminal",
        help="Render terminal cells and ANSI art to images.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    @app.callback()
    def configure(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output")] = False,
    ) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

    def make_backend(cols: int, rows: int, font_size: float, scale: float, font: Optional[Path]):
        from soft_terminal.render.backend import SoftBackend

        try:
            font_data = font.read_bytes() if font else None
        except OSError as e:
            console.print(f"[red]Could not read font {font}: {escape(str(e))}[/]")
            raise typer.Exit(1)
        try:
            return SoftBackend(cols, rows, font_size, font_data, scale)
        except FontError as e:
            console.print(f"[red]{escape(str(e))}[/]")
            raise typer.Exit(1)
        except ValueError as e:
            console.print(f"[red]Invalid option: {escape(str(e))}[/]")
            raise typer.Exit(1)

    @app.command()
    def render(
        source: Annotated[Path, typer.Argument(help="ANSI art or text file")],
        dest: Annotated[Path, typer.Argument(help="Output image (format from extension)")],
        cols: Annotated[int, typer.Option("--cols", "-c", help="Terminal width in cells")] = 80,
        rows: Annotated[int, typer.Option("--rows", "-r", help="Terminal height in cells")] = 25,
        font_size: Annotated[float, typer.Option("--font-size", "-s", help="Font size in pixels")] = 16,
        scale: Annotated[float, typer.Option("--scale", help="Device scale factor (2.0 for high-DPI)")] = 1.0,
        font: Annotated[Optional[Path], typer.Option("--font", "-f", help="Font file (default: system monospace)")] = None,
    ) -> None:
        """Render an ANSI file to an image."""
        from soft_terminal.io.reader import load
        from soft_terminal.io.writer import save_image

        if not source.is_file():
            console.print(f"[red]No such file: {source}[/]")
            raise typer.Exit(1)

        grid = load(source, width=cols, height=rows)
        backend = make_backend(cols, rows, font_size, scale, font)
        backend.draw(grid.cells())
        try:
            save_image(backend, dest)
        except (ValueError, OSError) as e:
            console.print(f"[red]Could not write {dest}: {escape(str(e))}[/]")
            raise typer.Exit(1)

        width, height = backend.get_pixmap_width(), backend.get_pixmap_height()
        console.print(f"[green]Rendered {source} → {dest}[/] ({width}x{height} px)")

    @app.command()
    def metrics(
        cols: Annotated[int, typer.Option("--cols", "-c", help="Terminal width in cells")] = 80,
        rows: Annotated[int, typer.Option("--rows", "-r", help="Terminal height in cells")] = 25,
        font_size: Annotated[float, typer.Option("--font-size", "-s", help="Font size in pixels")] = 16,
        scale: Annotated[float, typer.Option("--scale", help="Device scale factor")] = 1.0,
        font: Annotated[Optional[Path], typer.Option("--font", "-f", help="Font file (default: system monospace)")] = None,
    ) -> None:
        """Show cell and pixmap geometry for a font size and scale."""
        backend = make_backend(cols, rows, font_size, scale, font)
        size = backend.window_size()

        table = Table(title="Terminal geometry", show_header=False)
        table.add_row("Cells", f"{size.columns_rows.width}x{size.columns_rows.height}")
        table.add_row("Font size", f"{backend.font_size:g} px (x{backend.scale_factor:g})")
        table.add_row("Cell (logical)", f"{backend.char_width}x{backend.char_height} px")
        table.add_row("Cell (physical)", f"{backend.metrics.physical_width}x{backend.metrics.physical_height} px")
        table.add_row("Pixmap", f"{size.pixels.width}x{size.pixels.height} px")
        console.print(table)

    return app
