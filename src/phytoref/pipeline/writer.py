"""Persist pipeline results for the indicator and reporting collaborators.

Writes, under ``output.base_dir``:

- ``aggregated_biomass.txt``: Aggregated Cells, tab-separated, sorted by date
- ``yearly_stats_all_taxa.txt`` / ``yearly_stats_selected_taxa.txt``
- ``reference_periods.json``: both stability windows and run metadata
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, TYPE_CHECKING

from phytoref import __version__

if TYPE_CHECKING:
    from phytoref.schemas import InternalConfig
    from phytoref.pipeline.processor import PipelineResult, PopulationResult

__all__ = ['ResultWriter']

logger = logging.getLogger(__name__)


class ResultWriter:
    """Write a PipelineResult to delimited text and JSON files."""

    CELLS_FILENAME = "aggregated_biomass.txt"
    YEARLY_FILENAME = "yearly_stats_{population}.txt"
    SUMMARY_FILENAME = "reference_periods.json"

    def __init__(self, config: "InternalConfig", output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir or config.output.base_dir).expanduser()
        self.float_format = config.output.float_format

    def write(self, result: "PipelineResult") -> Dict[str, Path]:
        """Write all outputs; returns the written paths keyed by product."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        paths = {}

        cells = result.cells.copy()
        cells["date"] = cells["date"].dt.strftime("%Y-%m-%d")
        paths["cells"] = self.output_dir / self.CELLS_FILENAME
        cells.to_csv(paths["cells"], sep="\t", index=False, float_format=self.float_format)

        for pop in (result.full, result.grouped):
            path = self.output_dir / self.YEARLY_FILENAME.format(population=pop.name)
            pop.yearly.to_csv(path, sep="\t", index=False, float_format=self.float_format, na_rep="NA")
            paths[f"yearly_{pop.name}"] = path

        paths["summary"] = self.output_dir / self.SUMMARY_FILENAME
        with paths["summary"].open("w", encoding="utf-8") as handle:
            json.dump(self.summary(result), handle, indent=2)

        for name, path in paths.items():
            logger.info("Wrote %s: %s", name, path)
        return paths

    @staticmethod
    def summary(result: "PipelineResult") -> dict:
        """JSON-serialisable run summary."""
        return {
            "version": __version__,
            "parameter": result.parameter,
            "unit": result.unit,
            "enabled_groups": list(result.enabled_groups),
            "test_years": list(result.test_years),
            "reference_years": list(result.reference_years),
            "n_cells": int(len(result.cells)),
            "n_visits": int(len(result.visits)),
            "reference_periods": {
                pop.name: _window_entry(pop) for pop in (result.full, result.grouped)
            },
        }


def _window_entry(pop: "PopulationResult") -> dict:
    if pop.window is None:
        return {"start_year": None, "end_year": None, "error": str(pop.error)}
    return {
        "start_year": pop.window.start_year,
        "end_year": pop.window.end_year,
        "center_year": pop.window.center_year,
        "rolling_sd": pop.window.rolling_sd,
    }
