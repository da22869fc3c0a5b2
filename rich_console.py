"""
Rich console configuration for the satellite tracker.

Provides terminal output with progress bars, panels, and styled logging.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme
from rich.panel import Panel
from rich.table import Table
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TimeElapsedColumn,
)

from satellite_data.data_models import GeoPoint

# Night-sky styling
TRACKER_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "highlight": "bold magenta",
    "muted": "dim",
    "gps": "green",
    "heading": "bold cyan",
    "distance": "bold yellow",
})

# Global console instance
console = Console(theme=TRACKER_THEME)


def setup_rich_logging(verbose: bool = False) -> None:
    """
    Configure logging to use Rich handler.

    Args:
        verbose: Enable DEBUG level logging with full details
    """
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                show_time=verbose,
                show_path=verbose,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
                markup=False,
            )
        ],
        force=True,
    )


def create_animation_progress() -> Progress:
    """
    Create a progress bar for track playback with a live position field.

    Returns:
        Progress instance; tasks take a `status` field
    """
    return Progress(
        SpinnerColumn("dots"),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40, style="cyan", complete_style="green"),
        TaskProgressColumn(),
        TextColumn("[dim]{task.fields[status]}[/]"),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def format_point(point: GeoPoint) -> str:
    """Short signed-decimal rendering, e.g. '40.6492, -73.8952'."""
    return f"{point.latitude:.4f}, {point.longitude:.4f}"


def print_banner(version: str = "1.0.0") -> None:
    """
    Print a styled startup banner.

    Args:
        version: Version string to display
    """
    console.print("\n[bold cyan]  .  *   SATELLITE MAP   *  .[/]")
    console.print("[dim]Orbit track animation and off-screen indicator core[/]")
    console.print(f"[muted]Version {version}[/]\n")


def print_config_summary(
    location: GeoPoint,
    sample_count: int,
    duration_ms: float,
    no_animate: bool = False,
    padding_px: float = 40,
    track_km: Optional[float] = None,
) -> None:
    """
    Print a styled configuration summary panel.

    Args:
        location: Observer / map centre
        sample_count: Number of position samples in the track
        duration_ms: Animation length
        no_animate: Whether interpolation is disabled
        padding_px: Off-screen indicator padding
        track_km: Great-circle length of the track, if known
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Location", f"[gps]{format_point(location)}[/]")
    table.add_row("Samples", f"[highlight]{sample_count}[/]")
    table.add_row("Duration", f"{duration_ms / 1000:.1f}s")
    table.add_row("Mode", "[warning]no-animate[/]" if no_animate else "animated")
    table.add_row("Indicator Padding", f"{padding_px:g}px")
    if track_km is not None:
        table.add_row("Track Length", f"[distance]{track_km:,.0f} km[/]")

    panel = Panel(
        table,
        title="[bold]Configuration[/]",
        border_style="cyan",
        padding=(1, 2),
    )
    console.print(panel)
    console.print()


def print_completion_summary(
    final_position: GeoPoint,
    heading_deg: float,
    frames: int,
    indicator: Optional[str] = None,
) -> None:
    """
    Print a styled completion summary.

    Args:
        final_position: Where the marker came to rest
        heading_deg: Final heading
        frames: Number of frames delivered
        indicator: Off-screen indicator text, or None if the target is visible
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold green")

    table.add_row("Final Position", format_point(final_position))
    table.add_row("Heading", f"{heading_deg:.1f}°")
    table.add_row("Frames", f"{frames:,}")
    table.add_row("Indicator", indicator or "on screen")

    panel = Panel(
        table,
        title="[bold green]Complete[/]",
        border_style="green",
        padding=(1, 2),
    )
    console.print()
    console.print(panel)


def print_error(message: str, hint: Optional[str] = None) -> None:
    """
    Print a styled error message.

    Args:
        message: Error message
        hint: Optional hint for resolution
    """
    console.print(f"\n[error]Error:[/] {message}")
    if hint:
        console.print(f"[muted]Hint: {hint}[/]")
