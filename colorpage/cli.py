"""
Photo Coloring Converter CLI

Converts photographs into coloring page line art from the command line.
"""

from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from colorpage.config_manager import ConfigManager
from colorpage.errors import InvalidSettingsError
from colorpage.image_processing.svg_export import image_result_to_svg
from colorpage.models import CONFIG_FILE, ComplexityLevel, LineWeight, ProcessingSettings
from colorpage.processor import ImageProcessor

app = typer.Typer(
    name="colorpage",
    help="🎨 Convert photographs into printable coloring page line art.",
    rich_markup_mode="rich",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)

console = Console()
error_console = Console(stderr=True, style="bold red")


class LineWeightChoice(str, Enum):
    """Line weight."""
    thin = "thin"
    medium = "medium"
    thick = "thick"


class ComplexityChoice(str, Enum):
    """Detail level."""
    simple = "simple"
    moderate = "moderate"
    complex = "complex"


def _output_stem(filename: str, used: "set[str]") -> str:
    """File stem for an image's outputs, numbered when an earlier image took it."""
    stem = Path(filename).stem
    candidate = stem
    counter = 2
    while candidate in used:
        candidate = f"{stem}-{counter}"
        counter += 1
    used.add(candidate)
    return candidate


def _settings_table(settings: ProcessingSettings) -> Table:
    table = Table(title="Processing Settings", box=box.ROUNDED)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Edge threshold", f"{settings.edge_threshold:g}")
    table.add_row("Line weight", settings.line_weight.value)
    table.add_row("Complexity", settings.complexity_level.value)
    table.add_row("Blur radius", f"{settings.gaussian_radius:g}")
    table.add_row("Morphology radius", str(settings.morphology_radius))
    table.add_row("Contrast", f"{settings.contrast_factor:g}")
    table.add_row("Brightness", str(settings.brightness_offset))
    table.add_row("Page size", settings.page_size.value)
    table.add_row("Page theme", settings.page_theme.value)
    return table


@app.command()
def convert(
    images: Annotated[list[Path], typer.Argument(help="Input images (PNG, JPG, ...)")],
    out: Annotated[Path, typer.Option("--out", "-o", help="Output directory")] = Path("coloring-pages"),
    edge_threshold: Annotated[Optional[float], typer.Option(help="Sobel magnitude cutoff")] = None,
    line_weight: Annotated[Optional[LineWeightChoice], typer.Option(help="Line weight")] = None,
    complexity: Annotated[Optional[ComplexityChoice], typer.Option(help="Detail level")] = None,
    blur: Annotated[Optional[float], typer.Option(help="Gaussian blur radius in px")] = None,
    morphology_radius: Annotated[Optional[int], typer.Option(help="Morphology window radius")] = None,
    contrast: Annotated[Optional[float], typer.Option(help="Contrast factor")] = None,
    brightness: Annotated[Optional[int], typer.Option(help="Brightness offset")] = None,
    png: Annotated[bool, typer.Option("--png/--no-png", help="Also write the processed PNG")] = True,
    save_settings: Annotated[bool, typer.Option(help="Remember these settings")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Print stage progress")] = False,
    config: Annotated[Path, typer.Option(help="Settings file")] = CONFIG_FILE,
):
    """
    🖍️ Convert photos to coloring pages (SVG preview + processed PNG).
    """
    config_manager = ConfigManager(config)
    overrides = {
        "edge_threshold": edge_threshold,
        "line_weight": LineWeight(line_weight.value) if line_weight else None,
        "complexity_level": ComplexityLevel(complexity.value) if complexity else None,
        "gaussian_radius": blur,
        "morphology_radius": morphology_radius,
        "contrast_factor": contrast,
        "brightness_offset": brightness,
    }
    try:
        settings = replace(
            config_manager.load(),
            **{key: value for key, value in overrides.items() if value is not None},
        )
    except InvalidSettingsError as e:
        error_console.print(f"❌ Invalid settings: {e}")
        raise typer.Exit(2)

    if save_settings:
        saved, error = config_manager.save(settings)
        if not saved:
            error_console.print(f"⚠️ Could not save settings: {error}")

    out.mkdir(parents=True, exist_ok=True)
    processor = ImageProcessor(settings, verbose=verbose)

    with console.status("[bold cyan]Processing images...") as status:
        def on_progress(current: int, total: int, message: str):
            status.update(f"[bold cyan]{message} ({min(current + 1, total)}/{total})")

        batch = processor.process_files(images, progress=on_progress)

    table = Table(title="Coloring Pages", box=box.ROUNDED)
    table.add_column("Image", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Paths", justify="right", style="green")
    table.add_column("Dropped", justify="right", style="yellow")
    table.add_column("Output")

    # Inputs may share a stem (photo.jpg, photo.png, or the same name in two folders)
    used_stems: "set[str]" = set()
    for result in batch.results:
        stem = _output_stem(result.filename, used_stems)
        svg_path = out / f"{stem}-coloring.svg"
        svg_path.write_text(image_result_to_svg(result, settings.line_weight))
        if png:
            result.processed.to_image().save(out / f"{stem}-coloring.png")
        table.add_row(
            result.filename,
            f"{result.width}×{result.height}",
            str(result.path_count),
            str(result.stats.contours_dropped),
            str(svg_path),
        )

    console.print(table)

    if batch.failures:
        failures = "\n".join(
            f"{f.filename}: [bold]{f.error_kind}[/] {f.reason}" for f in batch.failures
        )
        console.print(Panel(failures, title="❌ Failed", border_style="red"))

    console.print(
        f"[bold green]✅ {batch.succeeded} succeeded[/], "
        f"[bold red]{batch.failed} failed[/]"
    )
    if batch.failures:
        raise typer.Exit(1)


@app.command("settings")
def show_settings(
    reset: Annotated[bool, typer.Option("--reset", help="Forget saved settings")] = False,
    config: Annotated[Path, typer.Option(help="Settings file")] = CONFIG_FILE,
):
    """
    ⚙️ Show (or reset) the saved processing settings.
    """
    config_manager = ConfigManager(config)
    if reset:
        ok, error = config_manager.reset()
        if not ok:
            error_console.print(f"❌ Could not reset settings: {error}")
            raise typer.Exit(1)
        console.print("✓ Settings reset to defaults")

    console.print(_settings_table(config_manager.load()))
    console.print(f"[dim]Config file: {config_manager.config_path}[/]")


def main():
    """Entry point for the colorpage console script."""
    app()


if __name__ == "__main__":
    main()
