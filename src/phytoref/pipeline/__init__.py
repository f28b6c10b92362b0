"""Pipeline modules.

- processor: Two-population biomass pipeline
- writer: Result persistence
"""

from phytoref.pipeline.processor import ReferencePeriodProcessor, PipelineResult, PopulationResult
from phytoref.pipeline.writer import ResultWriter

__all__ = [
    "ReferencePeriodProcessor",
    "PipelineResult",
    "PopulationResult",
    "ResultWriter",
]
