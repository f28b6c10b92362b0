"""Phytoplankton biomass processing modules.

- records: Column layouts and TaxonGroup labels
- loader: Read canonical record tables
- classifier: Taxon group assignment
- sample_filter: Surface/parameter selection, full and grouped populations
- aggregation: Visit sums, Selected totals, monthly means
- yearly_stats: Yearly mean/SD and centered moving averages
- stability: Reference-period (stability window) detection
"""

from phytoref.biomass.records import TaxonGroup
from phytoref.biomass.loader import RecordLoader
from phytoref.biomass.classifier import TaxonClassifier
from phytoref.biomass.sample_filter import SampleFilter
from phytoref.biomass.aggregation import BiomassAggregator
from phytoref.biomass.yearly_stats import yearly_statistics, centered_moving_average
from phytoref.biomass.stability import StabilityWindow, detect_stability_window

__all__ = [
    "TaxonGroup",
    "RecordLoader",
    "TaxonClassifier",
    "SampleFilter",
    "BiomassAggregator",
    "yearly_statistics",
    "centered_moving_average",
    "StabilityWindow",
    "detect_stability_window",
]
