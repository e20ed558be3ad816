"""Parallel placement orchestration for multi-character layouts.

Characters are independent, so each one is placed in its own worker process.

Key components:
- place_character: Top-level picklable function for parallel execution
- LayoutProcessor: Orchestrator that fans characters out and collects results
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

import structlog

from ledlayout.config import LedLayoutSettings, PlacementConfig
from ledlayout.core.placement import place_outline
from ledlayout.domain import LEDPosition, Outline
from ledlayout.exceptions import CharacterPlacementError
from ledlayout.utils import PlacementLogger, PlacementStats, configure_logging


def place_character(
    char_id: str,
    outline_dict: dict[str, Any],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Place modules for a single character.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the outline and configuration, runs placement and returns
    the result.

    Args:
        char_id: Identifier of the character (used in error reports)
        outline_dict: Serialized outline (from Outline.to_dict())
        config_dict: Serialized placement configuration

    Returns:
        Dictionary containing either:
        - Success: {"positions": [...], "target_count": int, "duration_ms": float}
        - Error: {"error": str, "char_id": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        outline = Outline.from_dict(outline_dict)
        config = PlacementConfig.model_validate(config_dict)
        report = place_outline(outline, config)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "positions": [p.to_dict() for p in report.positions],
            "target_count": report.target_count,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "char_id": char_id,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


@dataclass
class CharacterLayout:
    """Placement result for one character of a batch.

    Attributes:
        char_id: Character identifier as given to the processor
        positions: Placed modules (empty when skipped or failed)
        target_count: Module count placement aimed for
        skipped: True if the character had no outline to fill
        error: Error message when placement failed
    """

    char_id: str
    positions: list[LEDPosition] = field(default_factory=list)
    target_count: int = 0
    skipped: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise CharacterPlacementError if placement failed."""
        if self.error is not None:
            raise CharacterPlacementError(self.char_id, self.error)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "char": self.char_id,
            "target_count": self.target_count,
            "positions": [p.to_dict() for p in self.positions],
        }
        if self.skipped:
            data["skipped"] = True
        if self.error is not None:
            data["error"] = self.error
        return data


class LayoutProcessor:
    """Places modules for many characters, in parallel when allowed.

    Example:
        processor = LayoutProcessor(get_default_settings())
        layouts = processor.place_all(
            [("A", outline_a), ("B", outline_b)],
            config,
            max_workers=4,
        )
    """

    def __init__(self, settings: LedLayoutSettings, configure: bool = True) -> None:
        """Initialize the processor.

        Args:
            settings: Application settings (processing and logging sections)
            configure: Install logging handlers from the settings; pass False
                when the caller has already configured logging
        """
        self.settings = settings
        if configure:
            self.logger = configure_logging(
                log_file=settings.logging.log_file,
                console_level=settings.logging.log_level,
                file_level=settings.logging.file_log_level,
            )
        else:
            self.logger = structlog.get_logger("ledlayout")
        self.placement_logger = PlacementLogger(self.logger)

    @property
    def stats(self) -> PlacementStats:
        return self.placement_logger.stats

    def place_all(
        self,
        outlines: list[tuple[str, Outline]],
        config: PlacementConfig,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> list[CharacterLayout]:
        """Place modules in every outline.

        Args:
            outlines: (char_id, outline) pairs; ids need not be unique
            config: Placement configuration shared by all characters
            max_workers: Worker processes (None = settings, 1 = run inline)
            progress_callback: Optional callback(completed, total, char_id, success)

        Returns:
            One CharacterLayout per input pair, in input order
        """
        stats = self.stats
        stats.start_time = time.time()
        if max_workers is None:
            max_workers = self.settings.processing.max_workers

        layouts: list[CharacterLayout | None] = [None] * len(outlines)
        tasks: dict[int, tuple[str, dict[str, Any]]] = {}
        for index, (char_id, outline) in enumerate(outlines):
            if outline.is_empty():
                self.placement_logger.log_character_skipped(char_id, "empty outline")
                layouts[index] = CharacterLayout(char_id=char_id, skipped=True)
            else:
                tasks[index] = (char_id, outline.to_dict())

        config_dict = config.model_dump(mode="json")
        self.logger.info(
            "Starting placement",
            characters=len(outlines),
            to_place=len(tasks),
            max_workers=max_workers,
        )

        total = len(tasks)
        completed = 0
        if max_workers == 1:
            for index, (char_id, outline_dict) in tasks.items():
                self.placement_logger.log_character_start(char_id)
                result = place_character(char_id, outline_dict, config_dict)
                layouts[index] = self._collect(char_id, result)
                completed += 1
                if progress_callback is not None:
                    progress_callback(completed, total, char_id, layouts[index].ok)
        elif tasks:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                pending = {
                    executor.submit(place_character, char_id, outline_dict, config_dict): index
                    for index, (char_id, outline_dict) in tasks.items()
                }
                try:
                    for future in as_completed(pending):
                        index = pending.pop(future)
                        char_id = tasks[index][0]
                        try:
                            layouts[index] = self._collect(char_id, future.result())
                        except Exception as e:
                            # Executor-level error
                            self.placement_logger.log_character_error(
                                char_id, e, traceback.format_exc()
                            )
                            layouts[index] = CharacterLayout(char_id=char_id, error=str(e))

                        completed += 1
                        if progress_callback is not None:
                            progress_callback(completed, total, char_id, layouts[index].ok)

                except KeyboardInterrupt:
                    self.logger.info("Cancellation requested by user")
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise

        stats.end_time = time.time()
        self.logger.info(
            "Placement complete",
            placed=stats.placed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            modules=stats.modules_placed,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return [layout for layout in layouts if layout is not None]

    def _collect(self, char_id: str, result: dict[str, Any]) -> CharacterLayout:
        if "error" in result:
            self.placement_logger.log_character_error(
                char_id,
                Exception(result["error"]),
                result.get("traceback"),
            )
            return CharacterLayout(char_id=char_id, error=result["error"])

        positions = [LEDPosition.from_dict(p) for p in result["positions"]]
        self.placement_logger.log_character_complete(
            char_id,
            modules_placed=len(positions),
            target_count=result["target_count"],
            duration_ms=result.get("duration_ms", 0.0),
        )
        return CharacterLayout(
            char_id=char_id,
            positions=positions,
            target_count=result["target_count"],
        )
