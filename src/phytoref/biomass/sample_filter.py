"""Restrict the record stream to surface samples of one measurement parameter.

Produces the two populations the pipeline works on:

- full population: every surface record of the configured parameter,
  regardless of taxon
- grouped population: the subset of the full population that the
  TaxonClassifier assigns to an enabled group, with a ``taxa`` column
"""

import logging
from typing import TYPE_CHECKING, Optional

import pandas as pd

from phytoref.biomass.classifier import TaxonClassifier
from phytoref.contracts.failure import EmptyPopulationError
from phytoref.schemas.param import normalize_parameter_name

if TYPE_CHECKING:
    from phytoref.schemas import InternalConfig

__all__ = ['SampleFilter', 'SURFACE_DEPTH_M']

logger = logging.getLogger(__name__)

SURFACE_DEPTH_M = 0.0


class SampleFilter:
    """Split a record table into the full and grouped populations.

    Parameters
    ----------
    config : InternalConfig
        Runtime configuration (measurement parameter and group toggles).
    classifier : TaxonClassifier, optional
        Classifier to use; built from ``config`` when omitted.
    """

    def __init__(self, config: "InternalConfig", classifier: Optional[TaxonClassifier] = None):
        self.parameter = config.selection.measurement_parameter
        self.enabled_groups = config.selection.enabled_groups
        self.classifier = classifier or TaxonClassifier(config)

    def full_population(self, records: pd.DataFrame) -> pd.DataFrame:
        """Surface records of the configured parameter, all taxa.

        Raises
        ------
        EmptyPopulationError
            If no record passes the depth and parameter filter.
        """
        parameter = records["parameter"].map(normalize_parameter_name)
        mask = (parameter == self.parameter) & (records["depth_min"] == SURFACE_DEPTH_M)
        full = records.loc[mask].copy()

        logger.info(
            "Full population: %d of %d records (parameter=%s, depth_min == %g)",
            len(full), len(records), self.parameter, SURFACE_DEPTH_M,
        )
        if full.empty:
            raise EmptyPopulationError(
                "full",
                f"no surface records with parameter '{self.parameter}' "
                f"(parameters present: {sorted(parameter.dropna().unique().tolist())})",
            )
        return full

    def grouped_population(self, full: pd.DataFrame) -> pd.DataFrame:
        """Records of ``full`` that belong to an enabled taxon group.

        Raises
        ------
        EmptyPopulationError
            If none of the records matches an enabled group.
        """
        taxa = self.classifier.classify_frame(full)
        grouped = full.loc[taxa.notna()].copy()
        grouped["taxa"] = taxa[taxa.notna()]

        logger.info(
            "Grouped population: %d of %d records (%s)",
            len(grouped), len(full),
            ", ".join(f"{k}={v}" for k, v in grouped["taxa"].value_counts().sort_index().items()),
        )
        if grouped.empty:
            raise EmptyPopulationError(
                "grouped",
                f"no records of the enabled groups {self.enabled_groups} "
                f"for parameter '{self.parameter}'",
            )
        return grouped

    def split(self, records: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Return ``(full, grouped)`` populations."""
        full = self.full_population(records)
        return full, self.grouped_population(full)

    @staticmethod
    def unit_label(population: pd.DataFrame) -> str:
        """Unit of measure of a population.

        The unit is assumed uniform; a warning is logged when it is not and
        the most frequent unit is returned.

        Raises
        ------
        EmptyPopulationError
            If the population is empty.
        """
        units = population["unit"].dropna().astype(str).str.strip()
        if units.empty:
            raise EmptyPopulationError("grouped", "no unit label available")
        counts = units.value_counts()
        if len(counts) > 1:
            logger.warning("Mixed units in population: %s", counts.to_dict())
        return str(counts.index[0])
