"""CLI application entry point for approxoffset.

This module provides the main CLI interface using Typer.
"""

import os
from fractions import Fraction
from pathlib import Path
from typing import Annotated

import typer

from approxoffset import __version__
from approxoffset.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_header,
    print_input_info,
    print_offset_info,
    print_polygon_line,
    print_processing_info,
    print_step,
    print_success,
)
from approxoffset.config import (
    ApproximationConfig,
    LoggingConfig,
    OffsetConfig,
    OffsetSettings,
    ProcessingConfig,
)
from approxoffset.core import OffsetProcessor
from approxoffset.exceptions import (
    ApproxOffsetError,
    CurveSaveError,
    PolygonFormatError,
    PolygonLoadError,
)
from approxoffset.io import CurveWriter, PolygonReader

# Create the Typer app
app = typer.Typer(
    name="approxoffset",
    help="Approximate polygon offsets as labeled cycles of segments and circular arcs.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Approxoffset[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def offset(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to input JSON polygon file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-offset.json)",
        ),
    ] = None,
    radius: Annotated[
        str,
        typer.Option(
            "--radius",
            "-r",
            help="Offset radius as an exact number (e.g. 1, 0.5, 1/3)",
        ),
    ] = "1",
    epsilon: Annotated[
        float,
        typer.Option(
            "--epsilon",
            "-e",
            help="Approximation error bound, scaled by the radius when r > 1",
            min=0.0,
        ),
    ] = 0.01,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    serial: Annotated[
        bool,
        typer.Option(
            "--serial",
            help="Compute all cycles in this process",
        ),
    ] = False,
    list_polygons: Annotated[
        bool,
        typer.Option(
            "--list-polygons",
            help="List the polygons of the input file and exit",
        ),
    ] = False,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
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
    """Offset every polygon of a JSON file by a radius.

    Each polygon yields one convolution cycle of line segments and x-monotone
    circular arcs, labeled with direction, cycle id, index and a last flag.

    Example:
        approxoffset shapes.json --radius 1 --epsilon 0.01

    This will create shapes-offset.json with one cycle per polygon.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_file.exists():
        print_error(
            f"Input file not found: {input_file}",
            details=f"The file '{input_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_file.is_file():
        print_error(
            f"Input path is not a file: {input_file}",
            details="Please provide a path to a JSON polygon file.",
        )
        raise typer.Exit(code=1)

    try:
        offset_config = OffsetConfig(radius=radius)
    except ValueError:
        print_error(
            f"Invalid radius: {radius}",
            details="The radius must be a positive number such as 1, 0.5 or 1/3.",
        )
        raise typer.Exit(code=1)

    try:
        approximation_config = ApproximationConfig(epsilon=epsilon)
    except ValueError:
        print_error(
            f"Invalid epsilon: {epsilon}",
            details="The approximation error bound must be greater than 0.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = OffsetSettings(
        approximation=approximation_config,
        offset=offset_config,
        processing=ProcessingConfig(
            max_workers=workers,
            parallel=not serial,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level.upper(),
        ),
    )

    try:
        if list_polygons:
            _handle_list_polygons(input_file, quiet)
            raise typer.Exit(code=0)

        if not quiet:
            print_step("Loading polygons")

        with PolygonReader(input_file) as reader:
            polygons = list(reader.iter_polygons())

        if not quiet:
            print_input_info(
                input_path=str(input_file),
                polygon_count=len(polygons),
                vertex_count=sum(len(p) for p in polygons),
            )

        if not polygons:
            if not quiet:
                console.print("\nNo polygons found. Nothing to process.")
            raise typer.Exit(code=0)

        if not quiet:
            actual_workers = 1 if serial else (workers if workers else os.cpu_count() or 1)
            print_step("Offsetting")
            print_offset_info(str(Fraction(offset_config.radius)), epsilon)
            print_processing_info(actual_workers, is_auto=(workers is None and not serial))

        actual_output_path = output if output is not None else CurveWriter.get_offset_path(input_file)

        processor = OffsetProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Offsetting {len(polygons)} polygons",
                        total=len(polygons),
                    )

                    def update_progress(
                        completed: int, *_: object
                    ) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.process(
                        input_path=input_file,
                        output_path=actual_output_path,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(
                    input_path=input_file,
                    output_path=actual_output_path,
                    max_workers=workers,
                )
        except KeyboardInterrupt:
            if not quiet:
                partial = processor.stats
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=partial.processed_count if partial else 0,
                    cancelled=partial.cancelled_count if partial else 0,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                file_size=_format_file_size(actual_output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                curves=stats.curves_emitted,
                errors=stats.error_count,
                avg_time_ms=stats.avg_cycle_time_ms,
                min_time_ms=stats.min_cycle_time_ms,
                max_time_ms=stats.max_cycle_time_ms,
            )

        if stats.error_count > 0:
            raise typer.Exit(code=2)

    except (PolygonLoadError, PolygonFormatError) as e:
        print_error(f"Could not load polygons: {e}")
        raise typer.Exit(code=1)
    except CurveSaveError as e:
        print_error(f"Could not save curves: {e.reason}")
        raise typer.Exit(code=1)
    except ApproxOffsetError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_list_polygons(input_file: Path, quiet: bool) -> None:
    """Handle --list-polygons mode.

    Args:
        input_file: Path to polygon file
        quiet: Suppress headings
    """
    if not quiet:
        print_step("Loading polygons")

    with PolygonReader(input_file) as reader:
        polygons = list(reader.iter_polygons())

    if not quiet:
        console.print(f"\n[bold]{len(polygons)} polygons[/bold]\n")

    for polygon in polygons:
        print_polygon_line(polygon.name, len(polygon), polygon.orientation().name)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
