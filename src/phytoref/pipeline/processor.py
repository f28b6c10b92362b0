"""Biomass reference-period processing pipeline.

Runs a record table through classification, filtering, aggregation, yearly
statistics and stability window detection, and collects everything the
output collaborators need in one PipelineResult.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, TYPE_CHECKING

import pandas as pd

from phytoref.biomass.records import TaxonGroup
from phytoref.biomass.classifier import TaxonClassifier
from phytoref.biomass.sample_filter import SampleFilter
from phytoref.biomass.aggregation import BiomassAggregator
from phytoref.biomass.yearly_stats import yearly_statistics
from phytoref.biomass.stability import StabilityWindow, detect_stability_window
from phytoref.contracts import (
    InsufficientYearsError,
    assert_sample_records,
    assert_aggregated_cells,
    assert_yearly_statistics,
)

if TYPE_CHECKING:
    from phytoref.schemas import InternalConfig

__all__ = ['ReferencePeriodProcessor', 'PipelineResult', 'PopulationResult']

logger = logging.getLogger(__name__)

FULL = "all_taxa"
GROUPED = "selected_taxa"


@dataclass
class PopulationResult:
    """Yearly statistics and stability window of one population."""
    name: str
    yearly: pd.DataFrame
    window: Optional[StabilityWindow] = None
    error: Optional[InsufficientYearsError] = None


@dataclass
class PipelineResult:
    """Everything a pipeline run produces.

    ``cells`` is always present once aggregation succeeded. A window is None
    when its population spans too few years; the matching
    InsufficientYearsError is kept in ``window_errors``.
    """
    cells: pd.DataFrame
    visits: pd.DataFrame
    unit: str
    parameter: str
    enabled_groups: list
    full: PopulationResult
    grouped: PopulationResult
    test_years: tuple = ()
    reference_years: tuple = ()

    @property
    def full_window(self) -> Optional[StabilityWindow]:
        return self.full.window

    @property
    def grouped_window(self) -> Optional[StabilityWindow]:
        return self.grouped.window

    @property
    def window_errors(self) -> Dict[str, InsufficientYearsError]:
        return {
            pop.name: pop.error
            for pop in (self.full, self.grouped)
            if pop.error is not None
        }


class ReferencePeriodProcessor:
    """Two-population biomass pipeline.

    **Processing Pipeline:**

    1. **Classify & Filter** (once): surface records of the configured
       parameter form the full population; records of enabled taxon groups
       form the grouped population.

    2. **Full-population path**: per-visit sums of all taxa, yearly
       statistics at visit granularity, stability window.

    3. **Grouped path**: per-visit group sums, Selected totals, monthly
       means (the Aggregated Cells), yearly statistics over the group cells
       (Selected excluded), stability window.

    Configuration errors and empty populations abort the run. A population
    with too few years only loses its window.

    Example usage::

        processor = ReferencePeriodProcessor(config)
        result = processor.run(records)
        result.cells            # station/date/year/month/taxa/biomass
        result.grouped_window   # StabilityWindow or None
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.window_years = config.stability.window_years
        self.classifier = TaxonClassifier(config)
        self.sample_filter = SampleFilter(config, self.classifier)
        self.aggregator = BiomassAggregator()

        logger.info(
            "ReferencePeriodProcessor initialized: parameter=%s, groups=%s, window=%d years",
            config.selection.measurement_parameter,
            config.selection.enabled_groups,
            self.window_years,
        )

    def run(self, records: pd.DataFrame) -> PipelineResult:
        """Process a record table.

        Raises
        ------
        ContractViolation
            If the record table lacks required columns.
        EmptyPopulationError
            If the full or grouped population is empty.
        """
        assert_sample_records(records)

        full, grouped = self.sample_filter.split(records)
        unit = self.sample_filter.unit_label(grouped)

        visits, full_result = self.run_full_population(full)
        cells, grouped_result = self.run_grouped_population(grouped)

        return PipelineResult(
            cells=cells,
            visits=visits,
            unit=unit,
            parameter=self.config.selection.measurement_parameter,
            enabled_groups=list(self.config.selection.enabled_groups),
            full=full_result,
            grouped=grouped_result,
            test_years=self.config.indicator.test_years,
            reference_years=self.config.indicator.reference_years,
        )

    def run_full_population(self, full: pd.DataFrame) -> tuple[pd.DataFrame, PopulationResult]:
        """Visit sums -> yearly statistics -> window, for all taxa."""
        visits = self.aggregator.visit_sums(full)
        return visits, self._population_statistics(FULL, visits)

    def run_grouped_population(self, grouped: pd.DataFrame) -> tuple[pd.DataFrame, PopulationResult]:
        """Aggregated Cells -> yearly statistics (without Selected) -> window."""
        cells = self.aggregator.aggregate(grouped)
        assert_aggregated_cells(cells)

        group_cells = cells.loc[cells["taxa"] != TaxonGroup.SELECTED.value]
        return cells, self._population_statistics(GROUPED, group_cells)

    def _population_statistics(self, name: str, values: pd.DataFrame) -> PopulationResult:
        yearly = yearly_statistics(values, "biomass", self.window_years, label=name)
        assert_yearly_statistics(yearly)

        result = PopulationResult(name=name, yearly=yearly)
        try:
            result.window = detect_stability_window(yearly, self.window_years, population=name)
        except InsufficientYearsError as e:
            logger.error("%s", e)
            result.error = e
        return result
