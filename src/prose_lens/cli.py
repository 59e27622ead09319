"""Command-line interface for Prose Lens."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from prose_lens import __version__
from prose_lens.core.renderer import DocumentRenderer
from prose_lens.formats import SUPPORTED_EXTENSIONS, DocumentError, get_handler
from prose_lens.formats.txt_handler import TXTHandler
from prose_lens.formatting.classifier import get_classifier
from prose_lens.formatting.ir import ClassifiedLine
from prose_lens.formatting.segmenter import RawMarkupSegmenter

app = typer.Typer(
    name="prose-lens",
    help="Classify chapter prose into dialogue, thoughts, sound effects and narration.",
    add_completion=False,
)
console = Console()

# Colors used when listing categories in the terminal
CATEGORY_COLORS = {
    "dialogue": "bright_white",
    "thought": "magenta",
    "sfx": "yellow",
    "game-badge": "cyan",
    "narration": "white",
    "empty": "dim",
    "scene-break": "blue",
    "spacing": "dim",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Prose Lens v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def styled_tag(tag: str) -> str:
    color = CATEGORY_COLORS.get(tag, "white")
    return f"[{color}]{tag}[/{color}]"


def resolve_output_format(output: Optional[Path], output_format: Optional[str]) -> str:
    """Pick the output extension from --format, then the output path, then JSON."""
    if output_format:
        return output_format if output_format.startswith(".") else f".{output_format}"
    if output is not None and output.suffix:
        return output.suffix
    return ".json"


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Style chapter text automatically.

    Examples:

        prose-lens classify "« Tu es prêt ? »" "Boom!"

        prose-lens segment chapter.html

        prose-lens render chapter.json --format html -o chapter.html
    """
    configure_logging(verbose)


@app.command()
def classify(
    lines: list[str] = typer.Argument(
        ...,
        help="Lines of text to classify",
    ),
) -> None:
    """Classify each LINE and print its category."""
    classifier = get_classifier()

    table = Table("Category", "Line")
    for line in lines:
        category = classifier.classify(line)
        table.add_row(styled_tag(category.value), Text(line))
    console.print(table)


@app.command()
def segment(
    path: Path = typer.Argument(
        ...,
        help="Raw markup (.html) or text (.txt) file",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Split a raw markup file into classified lines and markers."""
    try:
        markup = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {path}: {e}")
        raise typer.Exit(1)

    if path.suffix.lower() == ".txt":
        markup = "<br>".join(markup.splitlines())

    table = Table("#", "Category", "Text")
    for index, item in enumerate(RawMarkupSegmenter().segment(markup), start=1):
        if isinstance(item, ClassifiedLine):
            table.add_row(str(index), styled_tag(item.category.value), Text(item.text))
        else:
            table.add_row(str(index), styled_tag(item.value), "")
    console.print(table)


@app.command()
def render(
    path: Path = typer.Argument(
        ...,
        help="Chapter file to render (.json, .html or .txt)",
        exists=True,
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (default: print to stdout)",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: json, html or txt (default: from --output, else json)",
    ),
    show_tags: bool = typer.Option(
        False,
        "--show-tags",
        "-t",
        help="Prefix each line with its category in txt output",
    ),
) -> None:
    """Render a chapter into styled blocks."""
    try:
        reader = get_handler(path.suffix)()
        writer_class = get_handler(resolve_output_format(output, output_format))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}")
        raise typer.Exit(1)

    writer = TXTHandler(show_tags=show_tags) if writer_class is TXTHandler else writer_class()

    try:
        blocks = reader.read(path)
    except DocumentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    styled = DocumentRenderer().render(blocks)

    if output is None:
        typer.echo(writer.dumps(styled))
        return

    writer.write(styled, output)
    console.print(f"[green]Success:[/green] {output} ({len(styled)} blocks)")


if __name__ == "__main__":
    app()
