"""`Phytoref` - Phytoplankton biomass reference-period detection.

Subpackages:
- biomass: Taxon classification, filtering, aggregation, yearly statistics, stability windows
- pipeline: Processor and results writer
- schemas: Pydantic configuration
- contracts: Stage invariants and error types
- cli: Pipeline runner
"""

__version__ = "0.1.0"
