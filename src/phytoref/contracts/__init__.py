"""Pipeline contracts: fail-fast enforcement of stage invariants.

This package enforces structural guarantees between pipeline stages and
defines the exception types the pipeline raises.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Algorithms handle science edge cases (missing statistics)
"""

from phytoref.contracts.failure import (
    ContractViolation,
    PhytorefError,
    ConfigurationError,
    EmptyPopulationError,
    InsufficientYearsError,
)
from phytoref.contracts.base import require
from phytoref.contracts.records import assert_sample_records
from phytoref.contracts.aggregation import assert_aggregated_cells
from phytoref.contracts.statistics import assert_yearly_statistics

__all__ = [
    "ContractViolation",
    "PhytorefError",
    "ConfigurationError",
    "EmptyPopulationError",
    "InsufficientYearsError",
    "require",
    "assert_sample_records",
    "assert_aggregated_cells",
    "assert_yearly_statistics",
]
