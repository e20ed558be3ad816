"""Rich console output helpers for the CLI.

Tables for positions, catalog entries, quality, power and validation results,
plus the progress bar used while characters are placed.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from ledlayout.catalog import LEDModule, PowerSupply
from ledlayout.core.engineering import BOMItem, PowerAnalysis
from ledlayout.core.quality import PlacementQuality, QualityGrade
from ledlayout.domain import LEDPosition, PathEditValidationResult, Severity

console = Console()

# Markers shared by every command
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_WARN = "!"  # Warning
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for character placement.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print the banner shown before a command runs.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]LED Layout[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_outline_info(contours: int, arc_length: float, width: float, height: float) -> None:
    console.print(
        f"  {contours} contours {SYM_DOT} {arc_length:,.1f} units long "
        f"{SYM_DOT} {width:,.1f} x {height:,.1f}"
    )


def print_positions(positions: list[LEDPosition], target_count: int) -> None:
    """Print placed positions as a table.

    Args:
        positions: Placed module positions
        target_count: Count placement aimed for
    """
    style = "green" if len(positions) >= target_count else "yellow"
    console.print(f"  [{style}]{len(positions)}[/{style}] of {target_count} modules placed")
    if not positions:
        return

    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("rotation", justify="right")
    for i, position in enumerate(positions, start=1):
        table.add_row(
            str(i),
            f"{position.x:.2f}",
            f"{position.y:.2f}",
            f"{position.rotation:.1f}°",
        )
    console.print(table)


def print_quality(quality: PlacementQuality, grade: QualityGrade) -> None:
    """Print quality metrics and the pass/fail verdict."""
    console.print(
        f"  inside {quality.inside_rate:.0%} {SYM_DOT} "
        f"clearance {quality.min_clearance:.2f} min / {quality.mean_clearance:.2f} mean"
    )
    console.print(
        f"  symmetry {quality.symmetry_mean:.2f} {SYM_DOT} "
        f"spacing {quality.nn_mean:.2f} (cv {quality.nn_cv:.2f})"
    )
    if grade.passed:
        console.print(f"  [green]{SYM_OK} Quality checks passed[/green]")
    else:
        console.print(f"  [yellow]{SYM_WARN} {', '.join(grade.failures)}[/yellow]")


def print_power(power: PowerAnalysis, psu: PowerSupply | None, bom: list[BOMItem]) -> None:
    """Print electrical summary and bill of materials."""
    console.print(
        f"  {power.total_watts:.2f} W {SYM_DOT} {power.total_amps:.2f} A "
        f"{SYM_DOT} max {power.modules_per_circuit} modules per circuit"
    )
    if psu is None:
        console.print(f"  [yellow]{SYM_WARN} No single power supply covers this load[/yellow]")
    for item in bom:
        console.print(f"  {item.quantity:>4} x {item.name} [dim]({item.sku})[/dim]")


def print_validation(result: PathEditValidationResult) -> None:
    """Print a path edit validation outcome."""
    reason = f" ({result.reason.value})" if result.reason is not None else ""
    if result.severity == Severity.OK:
        console.print(f"\n[bold green]{SYM_OK} Edit accepted[/bold green]")
    elif result.severity == Severity.WARN:
        console.print(f"\n[bold yellow]{SYM_WARN} Edit accepted with warning[/bold yellow]{reason}")
    else:
        console.print(f"\n[bold red]{SYM_ERR} Edit rejected[/bold red]{reason}")

    if result.metrics is not None:
        for key, value in result.metrics.to_dict().items():
            formatted = f"{value:.2f}" if isinstance(value, float) else str(value)
            console.print(f"  {key.replace('_', ' '):<24}{formatted}")


def print_modules(modules: tuple[LEDModule, ...], default_id: str) -> None:
    """Print the module catalog."""
    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("SKU")
    table.add_column("Name")
    table.add_column("Per ft", justify="right")
    table.add_column("Watts", justify="right")
    table.add_column("Lumens", justify="right")
    table.add_column("Max run", justify="right")
    for module in modules:
        marker = " *" if module.id == default_id else ""
        table.add_row(
            f"{module.id}{marker}",
            module.name,
            f"{module.installation.modules_per_foot:g}",
            f"{module.watts_per_module:g}",
            f"{module.lumens_per_module:g}",
            str(module.installation.max_run_length or "-"),
        )
    console.print(table)


def print_power_supplies(supplies: tuple[PowerSupply, ...]) -> None:
    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("SKU")
    table.add_column("Name")
    table.add_column("Max W", justify="right")
    table.add_column("Input")
    for psu in supplies:
        table.add_row(psu.id, psu.name, f"{psu.max_watts:g}", psu.input_voltage)
    console.print(table)


def print_text_summary(
    characters: int,
    modules: int,
    errors: int,
    total_time_s: float,
    avg_character_ms: float | None = None,
) -> None:
    """Print summary of a multi-character run."""
    error_style = "red" if errors > 0 else "green"
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    if avg_character_ms is not None:
        console.print(f"  {_format_time(avg_character_ms / 1000)} per character")
    console.print(
        f"  {characters} characters {SYM_DOT} {modules} modules {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def _format_time(seconds: float) -> str:
    """Render a duration as ms, seconds or minutes."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: One-line summary
        details: Extra context printed underneath
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
