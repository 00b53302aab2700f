"""Parallel processing orchestration for multi-polygon offsetting.

Independent polygons share no state beyond their cycle ids, so their
convolution cycles can be computed in separate worker processes. Each cycle
itself is computed sequentially inside one worker.

Key components:
- offset_contour: Top-level picklable function for parallel execution
- OffsetProcessor: Main orchestrator class for polygon file processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from fractions import Fraction
from pathlib import Path
from typing import Any

from approxoffset.config import ApproximationConfig, OffsetSettings
from approxoffset.core.cycle import PolygonOffsetter
from approxoffset.domain import LabeledCurve, Polygon
from approxoffset.io import CurveWriter, PolygonReader
from approxoffset.utils import ProcessingLogger, ProcessingStats, configure_logging

ProgressCallback = Callable[[int, int, str, bool], None]


def offset_contour(
    polygon_dict: dict[str, Any],
    config_dict: dict[str, Any],
    radius: str,
    cycle_id: int,
) -> dict[str, Any]:
    """Compute the convolution cycle of a single polygon.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the polygon, runs the offset and returns serialized curves.

    Args:
        polygon_dict: Serialized polygon (from Polygon.to_dict())
        config_dict: Serialized approximation configuration
        radius: Offset radius as an exact number string
        cycle_id: Cycle id to stamp on every curve

    Returns:
        Dictionary containing either:
        - Success: {"cycle_id": int, "curves": [curve_dict, ...], "duration_ms": float}
        - Error: {"error": str, "error_type": str, "polygon_name": str,
                  "cycle_id": int, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        polygon = Polygon.from_dict(polygon_dict)
        config = ApproximationConfig(**config_dict)

        offsetter = PolygonOffsetter(
            epsilon=config.epsilon,
            max_iterations=config.max_iterations,
            max_scaled_length=config.max_scaled_length,
            max_denominator_bits=config.max_denominator_bits,
        )
        curves = offsetter.offset_polygon(polygon, Fraction(radius), cycle_id=cycle_id)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "cycle_id": cycle_id,
            "curves": [curve.to_dict() for curve in curves],
            "duration_ms": duration_ms,
        }

    except Exception as e:
        # No partial cycle is returned on failure
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "polygon_name": polygon_dict.get("name", "unknown"),
            "cycle_id": cycle_id,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class OffsetProcessor:
    """Orchestrates offsetting of every polygon in a file.

    Manages the complete workflow:
    1. Load polygon file
    2. Skip polygons that cannot be offset (fewer than 3 vertices)
    3. Assign consecutive cycle ids and compute cycles, in parallel or serially
    4. Collect results and update statistics
    5. Save the labeled curves

    The statistics of the latest run stay on `stats`, so callers can report
    partial counts after a cancelled run.

    Example:
        settings = OffsetSettings()
        processor = OffsetProcessor(settings)
        stats = processor.process(
            input_path=Path("shapes.json"),
            output_path=Path("shapes-offset.json"),
            max_workers=4
        )
    """

    def __init__(self, config: OffsetSettings) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Settings with approximation, offset and processing config
        """
        self.config = config
        self.stats: ProcessingStats | None = None
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )

    def process(
        self,
        input_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> ProcessingStats:
        """Offset every polygon of a file and save the resulting cycles.

        Args:
            input_path: Path to input polygon file
            output_path: Path for the curve file (auto-generated if None)
            max_workers: Maximum worker processes (None = config / auto)
            progress_callback: Optional callback(completed, total, polygon_name, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If the polygon file does not exist
            PolygonLoadError: If the file cannot be parsed
            PolygonFormatError: If the file does not describe polygons
            CurveSaveError: If the output cannot be written
            KeyboardInterrupt: If processing is cancelled by user
        """
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        self.stats = stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if output_path is None:
            output_path = CurveWriter.get_offset_path(input_path)

        self.logger.info(
            "Starting offset processing",
            input=str(input_path),
            output=str(output_path),
            radius=self.config.offset.radius,
            epsilon=self.config.approximation.epsilon,
            max_workers=max_workers,
        )

        reader = PolygonReader(input_path)
        reader.load()

        try:
            polygons: list[Polygon] = []
            for polygon in reader.iter_polygons():
                if len(polygon) < 3:
                    processing_logger.log_cycle_skipped(
                        polygon.name, f"{len(polygon)} vertices"
                    )
                    continue
                polygons.append(polygon)

            self.logger.info(
                "Polygons loaded",
                total=reader.polygon_count,
                to_process=len(polygons),
                skipped=stats.skipped_count,
            )
        finally:
            reader.close()

        cycles = self.compute_cycles(
            polygons,
            processing_logger=processing_logger,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

        writer = CurveWriter(
            output_path,
            radius=self.config.offset.exact_radius(),
            epsilon=self.config.approximation.epsilon,
        )
        for cycle_id in sorted(cycles):
            name, curves = cycles[cycle_id]
            writer.add_cycle(cycle_id, name, curves)
        writer.save()

        self.logger.info("Curves saved", output=str(output_path), cycles=writer.cycle_count)

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            curves=stats.curves_emitted,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def compute_cycles(
        self,
        polygons: list[Polygon],
        processing_logger: ProcessingLogger | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> dict[int, tuple[str, list[LabeledCurve]]]:
        """Compute one convolution cycle per polygon.

        Polygons receive cycle ids 0, 1, 2, ... in list order. Failed cycles
        are logged and left out of the result entirely.

        Args:
            polygons: Polygons to offset
            processing_logger: Logger collecting statistics (new one if None)
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, polygon_name, success)

        Returns:
            Mapping of cycle id to (polygon name, labeled curves)
        """
        if processing_logger is None:
            processing_logger = ProcessingLogger(self.logger)

        if not polygons:
            self.logger.info("No polygons to process")
            return {}

        config_dict = self.config.approximation.model_dump()
        radius = self.config.offset.radius
        tasks = {
            cycle_id: polygon.to_dict() for cycle_id, polygon in enumerate(polygons)
        }
        for cycle_id, polygon in enumerate(polygons):
            processing_logger.log_cycle_start(polygon.name, cycle_id, len(polygon))

        if self.config.processing.parallel and len(tasks) > 1:
            results = self._run_parallel(
                tasks, config_dict, radius, max_workers, processing_logger, progress_callback
            )
        else:
            results = self._run_serial(
                tasks, config_dict, radius, processing_logger, progress_callback
            )
        return results

    def _run_serial(
        self,
        tasks: dict[int, dict[str, Any]],
        config_dict: dict[str, Any],
        radius: str,
        processing_logger: ProcessingLogger,
        progress_callback: ProgressCallback | None,
    ) -> dict[int, tuple[str, list[LabeledCurve]]]:
        cycles: dict[int, tuple[str, list[LabeledCurve]]] = {}
        total = len(tasks)
        completed = 0

        try:
            for cycle_id, polygon_dict in tasks.items():
                result = offset_contour(polygon_dict, config_dict, radius, cycle_id)
                success = self._collect(result, polygon_dict, processing_logger, cycles)
                completed += 1
                if progress_callback is not None:
                    progress_callback(completed, total, polygon_dict["name"], success)
        except KeyboardInterrupt:
            self.logger.info("Cancellation requested by user")
            processing_logger.stats.was_cancelled = True
            processing_logger.stats.cancelled_count = total - completed
            raise

        return cycles

    def _run_parallel(
        self,
        tasks: dict[int, dict[str, Any]],
        config_dict: dict[str, Any],
        radius: str,
        max_workers: int | None,
        processing_logger: ProcessingLogger,
        progress_callback: ProgressCallback | None,
    ) -> dict[int, tuple[str, list[LabeledCurve]]]:
        cycles: dict[int, tuple[str, list[LabeledCurve]]] = {}
        stats = processing_logger.stats

        self.logger.info(
            "Starting parallel processing",
            cycle_count=len(tasks),
            max_workers=max_workers,
        )

        total = len(tasks)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for cycle_id, polygon_dict in tasks.items():
                future = executor.submit(
                    offset_contour,
                    polygon_dict,
                    config_dict,
                    radius,
                    cycle_id,
                )
                pending_futures[future] = cycle_id

            try:
                for future in as_completed(pending_futures):
                    cycle_id = pending_futures.pop(future)
                    polygon_dict = tasks[cycle_id]
                    success = False

                    try:
                        result = future.result()
                        success = self._collect(result, polygon_dict, processing_logger, cycles)
                    except Exception as e:
                        # Executor-level error
                        processing_logger.log_cycle_error(
                            polygon_name=polygon_dict["name"],
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, polygon_dict["name"], success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return cycles

    @staticmethod
    def _collect(
        result: dict[str, Any],
        polygon_dict: dict[str, Any],
        processing_logger: ProcessingLogger,
        cycles: dict[int, tuple[str, list[LabeledCurve]]],
    ) -> bool:
        name = polygon_dict["name"]

        if "error" in result:
            processing_logger.log_cycle_error(
                polygon_name=result.get("polygon_name", name),
                error=Exception(result["error"]),
                traceback=result.get("traceback"),
                error_type=result.get("error_type"),
            )
            return False

        curves = [LabeledCurve.from_dict(c) for c in result["curves"]]
        cycles[result["cycle_id"]] = (name, curves)
        processing_logger.log_cycle_complete(
            polygon_name=name,
            cycle_id=result["cycle_id"],
            curve_count=len(curves),
            duration_ms=result.get("duration_ms", 0.0),
        )
        return True
