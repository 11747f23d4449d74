from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from villain_timeline.core.context import RunContext
from villain_timeline.core.exceptions import (
    PipelineError,
    ProcessingError,
    TimelineError,
    ValidationError,
)
from villain_timeline.exporter import read_json, serialize_processed_data, write_json
from villain_timeline.merge import build_combined_output, merge_datasets
from villain_timeline.processing import check_processed, process_villain_data
from villain_timeline.series import SeriesName
from villain_timeline.taxonomy import default_registry
from villain_timeline.validation import validate_raw_series, validate_serialized_dataset

COMBINED_FILE = "villains.json"
DEFAULT_INPUTS_PATTERN = "villains.*.json"
WIKI_PATH_MARKER = "/wiki/"


def series_slug(series: str, base_url: str = "") -> str:
    """File slug for a series: the wiki page name when the base URL has one."""
    if WIKI_PATH_MARKER in (base_url or ""):
        return base_url.split(WIKI_PATH_MARKER, 1)[1].replace("_{issue}", "")
    return SeriesName(series).to_slug()


class Pipeline:
    """
    Orchestrates the process and merge runs.
    No business logic lives here.
    """

    def __init__(self, context: RunContext):
        self.ctx = context
        self.log = context.logger

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _data_dir(self) -> Path:
        if self.ctx.data_dir:
            return Path(self.ctx.data_dir)
        return self.ctx.config.data_dir

    def _registry(self):
        if self.ctx.registry is None:
            self.ctx.registry = default_registry()
        return self.ctx.registry

    def _warn(self, message: str) -> None:
        self.log.warning(message)
        self.ctx.warnings.append(message)

    def _resolve_process_input(self, series: Optional[str]) -> Path:
        if self.ctx.input_paths:
            return Path(self.ctx.input_paths[0])
        if series:
            return self._data_dir() / f"raw.{SeriesName(series).to_slug()}.json"
        raise ValidationError.missing_required("input path or series")

    # ------------------------------------------------------------------
    # process
    # ------------------------------------------------------------------

    def run_process(self, series: Optional[str] = None) -> Dict[str, Any]:
        """raw.<Slug>.json -> villains.<Slug>.json"""
        self.log.info("Process run starting")

        try:
            input_path = self._resolve_process_input(series)
            self.log.info("Reading raw data from %s", input_path)

            raw = validate_raw_series(read_json(input_path))
            processed = process_villain_data(raw, self._registry())

            if self.ctx.validate:
                check_processed(processed)

            serialized = serialize_processed_data(processed)

            output_path = (
                Path(self.ctx.output_path)
                if self.ctx.output_path
                else self._data_dir() / f"villains.{series_slug(raw.series, raw.base_url)}.json"
            )
            write_json(serialized, output_path)

            self.ctx.output_path = str(output_path)
            self.ctx.stats = dict(serialized["stats"])
            self.log.info("Process run completed: %s", output_path)
            return serialized

        except TimelineError:
            self.log.exception("Process run failed")
            raise
        except Exception as exc:
            self.log.exception("Process run failed")
            raise PipelineError(str(exc)) from exc

    # ------------------------------------------------------------------
    # merge
    # ------------------------------------------------------------------

    def discover_inputs(self) -> List[Path]:
        pattern = self.ctx.config.merge.get("inputs_pattern") or DEFAULT_INPUTS_PATTERN
        data_dir = self._data_dir()
        if not data_dir.exists():
            return []
        return sorted(p for p in data_dir.glob(pattern) if p.name != COMBINED_FILE)

    def load_datasets(self, paths: List[Path]) -> List[Dict[str, Any]]:
        """Load and check every input; unreadable or malformed files are skipped."""
        datasets: List[Dict[str, Any]] = []
        for path in paths:
            try:
                datasets.append(validate_serialized_dataset(read_json(path), source=str(path)))
                self.log.info("Loaded %s", path.name)
            except TimelineError as exc:
                self._warn(f"Skipping {path.name}: {exc.message}")
        return datasets

    def run_merge(self) -> Dict[str, Any]:
        """villains.*.json -> villains.json"""
        self.log.info("Merge run starting")

        try:
            paths = (
                [Path(p) for p in self.ctx.input_paths]
                if self.ctx.input_paths
                else self.discover_inputs()
            )
            self.log.info("Found %d series datasets", len(paths))

            datasets = self.load_datasets(paths)
            if not datasets:
                raise ProcessingError.no_datasets()

            merged = merge_datasets(datasets)
            self.ctx.warnings.extend(merged.warnings)

            series_name = self.ctx.config.merge.get("series_name") or "Combined"
            combined = build_combined_output(merged, series_name)

            output_path = (
                Path(self.ctx.output_path)
                if self.ctx.output_path
                else self._data_dir() / COMBINED_FILE
            )
            write_json(combined, output_path)

            self.ctx.output_path = str(output_path)
            self.ctx.stats = dict(combined["stats"])
            self.log.info("Merge run completed: %s", output_path)
            return combined

        except TimelineError:
            self.log.exception("Merge run failed")
            raise
        except Exception as exc:
            self.log.exception("Merge run failed")
            raise PipelineError(str(exc)) from exc
