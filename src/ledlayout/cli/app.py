"""CLI application entry point for ledlayout.

Commands: place, text, validate and modules. Global options configure logging.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import structlog
import typer

from ledlayout import __version__
from ledlayout.catalog import (
    DEFAULT_MODULE_ID,
    MODULE_CATALOG,
    PSU_CATALOG,
    LEDModule,
    get_module,
)
from ledlayout.cli.output import (
    console,
    create_progress,
    print_error,
    print_header,
    print_modules,
    print_outline_info,
    print_positions,
    print_power,
    print_power_supplies,
    print_quality,
    print_step,
    print_text_summary,
    print_validation,
)
from ledlayout.config import (
    DEFAULT_PIXELS_PER_INCH,
    LedLayoutSettings,
    LoggingConfig,
    Orientation,
    PlacementConfig,
    ProcessingConfig,
    ValidationOptions,
)
from ledlayout.core import (
    LayoutProcessor,
    calculate_power_load,
    evaluate_placement_quality,
    generate_bom,
    grade_placement,
    place_outline,
    recommend_power_supply,
    validate_path_edit,
)
from ledlayout.exceptions import FontError, LedLayoutError, PathDataError
from ledlayout.io import GlyphOutlineSource, parse_path_data, path_bounds
from ledlayout.utils import PlacementLogger, configure_logging

# Root command group
app = typer.Typer(
    name="ledlayout",
    help="Place LED modules inside channel-letter outlines and check outline edits.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Options shared by all commands."""

    settings: LedLayoutSettings
    logger: structlog.stdlib.BoundLogger
    quiet: bool = False


def version_callback(value: bool) -> None:
    """Show the installed ledlayout version."""
    if value:
        console.print(f"[bold blue]LED Layout[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Place LED modules inside channel-letter outlines."""
    settings = LedLayoutSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(settings=settings, logger=logger, quiet=quiet)


def _load_path_data(value: str) -> str:
    """Return path data given inline or as a file path."""
    stripped = value.strip()
    if stripped[:1] in ("M", "m"):
        return stripped
    path = Path(value)
    if not path.is_file():
        raise PathDataError(value, "not path data and no such file")
    return path.read_text(encoding="utf-8").strip()


def _parse_orientation(value: str) -> Orientation:
    try:
        return Orientation(value.lower())
    except ValueError:
        print_error(
            f"Invalid orientation: {value}",
            details="Valid values: horizontal, vertical, auto",
        )
        raise typer.Exit(code=1) from None


def _power_summary(module: LEDModule, count: int) -> dict[str, Any]:
    power = calculate_power_load(count, module)
    psu = recommend_power_supply(power.total_watts)
    return {
        "power": power,
        "psu": psu,
        "bom": generate_bom(module, count, psu),
    }


def _echo_json(data: dict[str, Any]) -> None:
    typer.echo(json.dumps(data, indent=2))


@app.command()
def place(
    ctx: typer.Context,
    path: Annotated[
        str,
        typer.Argument(
            help="SVG path data, or a file containing it",
            show_default=False,
        ),
    ],
    target: Annotated[
        int | None,
        typer.Option(
            "--target",
            "-n",
            help="Module count (default: derived from module density)",
            min=0,
        ),
    ] = None,
    columns: Annotated[
        int,
        typer.Option(
            "--columns",
            "-c",
            help="Parallel module columns (1-5)",
            min=1,
            max=5,
        ),
    ] = 1,
    orientation: Annotated[
        str,
        typer.Option(
            "--orientation",
            "-o",
            help="Module orientation (horizontal|vertical|auto)",
        ),
    ] = "auto",
    module: Annotated[
        str,
        typer.Option(
            "--module",
            "-m",
            help="Module SKU (see 'ledlayout modules')",
        ),
    ] = DEFAULT_MODULE_ID,
    ppi: Annotated[
        float,
        typer.Option(
            "--ppi",
            help="Outline units per inch",
            min=0.001,
        ),
    ] = DEFAULT_PIXELS_PER_INCH,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the result as JSON",
        ),
    ] = False,
) -> None:
    """Place LED modules inside one outline.

    Example:
        ledlayout place "M0 0 H100 V100 H0 Z" --target 4 -o horizontal
    """
    state: CliState = ctx.obj
    orientation_pref = _parse_orientation(orientation)

    try:
        outline = parse_path_data(_load_path_data(path))
        led_module = get_module(module)
        config = PlacementConfig(
            target_module=led_module,
            pixels_per_inch=ppi,
            target_count=target,
            column_count=columns,
            orientation=orientation_pref,
            tuning=state.settings.tuning,
        )
    except LedLayoutError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    report = place_outline(outline, config)
    quality = evaluate_placement_quality(
        outline, report.positions, config.tuning.module_render_length
    )
    grade = grade_placement(quality)
    summary = _power_summary(led_module, len(report.positions))
    state.logger.info(
        "Outline placed",
        modules=len(report.positions),
        target=report.target_count,
        candidates=report.candidate_count,
        chains=report.chain_count,
    )

    if json_output:
        _echo_json({
            "target_count": report.target_count,
            "positions": [p.to_dict() for p in report.positions],
            "quality": quality.to_dict(),
            "quality_passed": grade.passed,
            "quality_failures": grade.failures,
            "power": summary["power"].to_dict(),
            "bom": [item.to_dict() for item in summary["bom"]],
        })
        return

    if state.quiet:
        console.print(f"{len(report.positions)}/{report.target_count}")
        return

    print_header(__version__)
    bbox = outline.bounding_box()
    print_step("Outline")
    print_outline_info(len(outline.contours), outline.arc_length, bbox.width, bbox.height)
    print_step("Placement")
    print_positions(report.positions, report.target_count)
    if report.positions:
        print_step("Quality")
        print_quality(quality, grade)
        print_step("Power")
        print_power(summary["power"], summary["psu"], summary["bom"])


@app.command()
def text(
    ctx: typer.Context,
    content: Annotated[
        str,
        typer.Argument(
            help="Text to lay out, one character at a time",
            show_default=False,
        ),
    ],
    font: Annotated[
        Path,
        typer.Option(
            "--font",
            "-f",
            help="Path to a TTF/OTF font",
            show_default=False,
        ),
    ],
    size: Annotated[
        float,
        typer.Option(
            "--size",
            "-s",
            help="Em size in outline units",
            min=1.0,
        ),
    ] = 200.0,
    target: Annotated[
        int | None,
        typer.Option(
            "--target",
            "-n",
            help="Module count per character (default: derived)",
            min=0,
        ),
    ] = None,
    columns: Annotated[
        int,
        typer.Option("--columns", "-c", help="Parallel module columns (1-5)", min=1, max=5),
    ] = 1,
    orientation: Annotated[
        str,
        typer.Option("--orientation", "-o", help="Module orientation (horizontal|vertical|auto)"),
    ] = "auto",
    module: Annotated[
        str,
        typer.Option("--module", "-m", help="Module SKU"),
    ] = DEFAULT_MODULE_ID,
    ppi: Annotated[
        float,
        typer.Option("--ppi", help="Outline units per inch", min=0.001),
    ] = DEFAULT_PIXELS_PER_INCH,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
) -> None:
    """Place LED modules in every character of a text.

    Example:
        ledlayout text "OPEN" --font Roboto-Black.ttf --size 300
    """
    state: CliState = ctx.obj
    orientation_pref = _parse_orientation(orientation)
    settings = state.settings.model_copy(
        update={"processing": ProcessingConfig(max_workers=workers)}
    )
    show = not (json_output or state.quiet)

    try:
        led_module = get_module(module)
        config = PlacementConfig(
            target_module=led_module,
            pixels_per_inch=ppi,
            target_count=target,
            column_count=columns,
            orientation=orientation_pref,
            tuning=settings.tuning,
        )
        with GlyphOutlineSource(font) as source:
            outlines = [(char, source.outline_for_char(char, size)) for char in content]
    except FontError as e:
        print_error(f"Could not read font: {e}")
        raise typer.Exit(code=1) from None
    except LedLayoutError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    processor = LayoutProcessor(settings, configure=False)
    if show:
        print_header(__version__)
        print_step(f"Placing {len(outlines)} characters")
        with create_progress() as progress:
            task_id = progress.add_task("Placing", total=len(outlines))

            def update_progress(completed: int, *_: object) -> None:
                progress.update(task_id, completed=completed)

            layouts = processor.place_all(outlines, config, progress_callback=update_progress)
    else:
        layouts = processor.place_all(outlines, config)

    stats = processor.stats
    total_modules = sum(len(layout.positions) for layout in layouts)
    summary = _power_summary(led_module, total_modules)

    if json_output:
        _echo_json({
            "characters": [layout.to_dict() for layout in layouts],
            "total_modules": total_modules,
            "power": summary["power"].to_dict(),
            "bom": [item.to_dict() for item in summary["bom"]],
        })
    elif state.quiet:
        total_target = sum(layout.target_count for layout in layouts)
        console.print(f"{total_modules}/{total_target}")
    else:
        for layout in layouts:
            if layout.skipped:
                continue
            print_step(f"'{layout.char_id}'")
            if layout.error is not None:
                print_error(layout.error)
            else:
                print_positions(layout.positions, layout.target_count)
        print_step("Power")
        print_power(summary["power"], summary["psu"], summary["bom"])
        print_text_summary(
            characters=len(layouts),
            modules=total_modules,
            errors=stats.error_count,
            total_time_s=stats.duration_seconds,
            avg_character_ms=stats.avg_character_time_ms,
        )

    if stats.error_count:
        raise typer.Exit(code=1)


@app.command()
def validate(
    ctx: typer.Context,
    previous: Annotated[
        str,
        typer.Argument(help="Current path data, or a file containing it", show_default=False),
    ],
    candidate: Annotated[
        str,
        typer.Argument(help="Proposed path data, or a file containing it", show_default=False),
    ],
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Treat every violation as an error"),
    ] = False,
    keep_bounds: Annotated[
        bool,
        typer.Option(
            "--keep-bounds",
            help="Require the edit to stay within the current outline's bounds",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
) -> None:
    """Check whether a free-hand outline edit is safe to accept.

    Exits with code 1 when the edit is rejected.
    """
    state: CliState = ctx.obj
    try:
        previous_data = _load_path_data(previous)
        candidate_data = _load_path_data(candidate)
    except PathDataError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    options = ValidationOptions(**{**state.settings.validation.model_dump(), "strict": strict})
    base_bbox = path_bounds(previous_data) if keep_bounds else None
    result = validate_path_edit(previous_data, candidate_data, base_bbox, options)

    metrics = result.metrics.to_dict() if result.metrics is not None else {}
    PlacementLogger(state.logger).log_validation(
        result.ok,
        result.severity.value,
        result.reason.value if result.reason is not None else None,
        **metrics,
    )

    if json_output:
        _echo_json(result.to_dict())
    elif state.quiet:
        console.print(result.severity.value)
    else:
        print_validation(result)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def modules(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the catalog as JSON"),
    ] = False,
) -> None:
    """List LED modules and power supplies in the catalog."""
    if json_output:
        _echo_json({
            "modules": [m.model_dump() for m in MODULE_CATALOG],
            "power_supplies": [p.model_dump() for p in PSU_CATALOG],
        })
        return

    print_step("LED modules")
    print_modules(MODULE_CATALOG, DEFAULT_MODULE_ID)
    print_step("Power supplies")
    print_power_supplies(PSU_CATALOG)


def cli() -> None:
    """Run the ledlayout command group."""
    app()


def main() -> None:
    """Same as cli(), kept for `python -m ledlayout.cli.app`."""
    cli()


if __name__ == "__main__":
    cli()
