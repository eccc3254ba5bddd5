"""CLI interface for textcanvas."""

import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click

from textcanvas import __version__
from textcanvas.canvas import TextCanvas
from textcanvas.config import TextStyle, load_style, resolve_style
from textcanvas.errors import TextCanvasError
from textcanvas.fonts import register_fonts
from textcanvas.render import ImageSurface, PDFSurface, Surface
from textcanvas.types import OutputFormat

logger = logging.getLogger(__name__)


def style_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the style options shared by every command."""
    options = [
        click.option(
            "--style",
            "style_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="TOML file with style keys (top level or under [style]).",
        ),
        click.option(
            "--fonts-dir",
            type=click.Path(exists=True, file_okay=False, path_type=Path),
            help="Directory of .ttf files to register before rendering.",
        ),
        click.option("--font-family", type=str, help="Font family (e.g. sans-serif, serif, monospace, Lora)."),
        click.option("--font-size", type=float, help="Font size in pixels (default: 16)."),
        click.option("--font-weight", type=str, help="normal, bold, or 100-900."),
        click.option(
            "--font-style",
            type=click.Choice(["normal", "italic", "oblique"], case_sensitive=False),
            help="Font style.",
        ),
        click.option("--line-height", type=float, help="Line height in pixels (default: font size * 1.2)."),
        click.option(
            "--align",
            type=click.Choice(["left", "center", "right"], case_sensitive=False),
            help="Horizontal text alignment.",
        ),
        click.option(
            "--baseline",
            type=click.Choice(["top", "hanging", "middle", "alphabetic", "ideographic", "bottom"], case_sensitive=False),
            help="Text baseline.",
        ),
        click.option("--color", type=str, help="Text color (name, #rrggbb, rgb(...))."),
        click.option("--word-wrap", type=float, help="Maximum line width in pixels. Omit to only break on newlines."),
        click.option(
            "--no-word-wrap",
            is_flag=True,
            help="Only break on newlines, even if the style file sets a word wrap.",
        ),
        click.option("--resolution", type=float, help="Pixel density of the output (default: 1)."),
        click.option(
            "--format",
            "output_format",
            type=click.Choice(["png", "pdf"], case_sensitive=False),
            help="Output format. Defaults to the output file suffix, or png.",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _read_text(text: str) -> str:
    """Read stdin for "-", and turn literal \\n sequences into line breaks."""
    if text == "-":
        return sys.stdin.read()
    return text.replace("\\n", "\n")


def _build_style(style_path: Path | None, overrides: dict[str, Any]) -> TextStyle:
    base = load_style(style_path) if style_path else None
    partial = {key: value for key, value in overrides.items() if value is not None}
    return resolve_style(partial, base=base)


def _make_surface(output_format: OutputFormat) -> Surface:
    return PDFSurface() if output_format == "pdf" else ImageSurface()


def _build_canvas(text: str, options: dict[str, Any], output_format: OutputFormat) -> TextCanvas:
    word_wrap = options["word_wrap"]
    if options["no_word_wrap"]:
        if word_wrap is not None:
            raise click.UsageError("--word-wrap and --no-word-wrap cannot be used together")
        word_wrap = False

    if options["fonts_dir"]:
        register_fonts(options["fonts_dir"])

    style = _build_style(
        options["style_path"],
        {
            "font_family": options["font_family"],
            "font_size": options["font_size"],
            "font_weight": options["font_weight"],
            "font_style": options["font_style"],
            "line_height": options["line_height"],
            "text_align": options["align"],
            "text_baseline": options["baseline"],
            "text_color": options["color"],
            "word_wrap": word_wrap,
        },
    )
    return TextCanvas(
        _read_text(text),
        style,
        options["resolution"],
        surface=_make_surface(output_format),
    )


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def main(verbose: bool) -> None:
    """Lay out text and render it to an image or a PDF page sized to fit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("text")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output file (.png or .pdf).",
)
@style_options
def render(text: str, output: Path, output_format: str | None, **options: Any) -> None:
    """
    Render TEXT to a file.

    TEXT may contain \\n for line breaks; pass - to read it from stdin.

    Examples:
        textcanvas render "Hello\\nWorld" -o hello.png --font-size 32
        textcanvas render - -o notes.pdf --word-wrap 300 < notes.txt
    """
    if output_format is None:
        output_format = "pdf" if output.suffix.lower() == ".pdf" else "png"
    output_format = output_format.lower()

    try:
        canvas = _build_canvas(text, options, output_format)
        canvas.render()
    except TextCanvasError as e:
        raise click.ClickException(str(e)) from e

    surface = canvas.surface
    if isinstance(surface, PDFSurface):
        surface.save(output)
    elif isinstance(surface, ImageSurface):
        surface.save(output, format="PNG")

    result = canvas.layout()
    click.echo(f"✓ Rendered {len(result.lines)} line(s), {result.width}x{result.height}px → {output}")


@main.command()
@click.argument("text")
@style_options
def measure(text: str, output_format: str | None, **options: Any) -> None:
    """
    Print the laid-out lines of TEXT and the size of the block, without rendering.
    """
    try:
        canvas = _build_canvas(text, options, (output_format or "png").lower())
        result = canvas.layout()
    except TextCanvasError as e:
        raise click.ClickException(str(e)) from e

    for line in result.lines:
        click.echo(f"{line.width:9.2f}  {line.text}")
    click.echo(f"Block: {result.width}x{result.height}px ({len(result.lines)} line(s))")


if __name__ == "__main__":
    main()
