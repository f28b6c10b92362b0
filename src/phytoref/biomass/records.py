"""Column layouts and taxon group labels shared by all biomass stages."""

from enum import Enum

__all__ = [
    'TaxonGroup',
    'RANK_COLUMNS',
    'RECORD_COLUMNS',
    'REQUIRED_RECORD_COLUMNS',
    'VISIT_COLUMNS',
    'CELL_COLUMNS',
    'YEARLY_COLUMNS',
]


class TaxonGroup(str, Enum):
    """Phytoplankton groups tracked by the pipeline.

    ``SELECTED`` is synthesized by the aggregator and never produced by the
    classifier.
    """
    DIATOMS = "Diatoms"
    DINOFLAGELLATES = "Dinoflagellates"
    CYANOBACTERIA = "Cyanobacteria"
    MESODINIUM_RUBRUM = "Mesodinium rubrum"
    SELECTED = "Selected"

    def __str__(self) -> str:
        return self.value


RANK_COLUMNS = ["phylum", "class", "order", "family", "genus", "species"]

RECORD_COLUMNS = [
    "year",
    "station",
    "date",
    "month",
    *RANK_COLUMNS,
    "scientific_name",
    "trophic_type",
    "depth_min",
    "parameter",
    "value",
    "unit",
]

# Columns the classifier, filter and aggregator actually read
REQUIRED_RECORD_COLUMNS = [
    "year",
    "station",
    "date",
    "month",
    "phylum",
    "scientific_name",
    "trophic_type",
    "depth_min",
    "parameter",
    "value",
    "unit",
]

VISIT_COLUMNS = ["year", "station", "date", "biomass"]

CELL_COLUMNS = ["station", "date", "year", "month", "taxa", "biomass"]

YEARLY_COLUMNS = ["year", "n", "mean", "sd", "rolling_mean", "rolling_sd"]
