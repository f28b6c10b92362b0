"""Centralized failure types for the phytoref pipeline.

Contracts fail fast, loud, and once. Pipeline-level failures that the caller
is expected to handle (bad configuration, empty populations, too few years)
have their own exception types so the runner can report them precisely.
"""


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic or a malformed input table, not a
    recoverable science edge case. It means a stage did not produce (or did
    not receive) the invariants it promised.

    Key distinction:
    - ConfigurationError: User/config error (raised during resolution)
    - ContractViolation: Structural problem between stages
    - PhytorefError subclasses: Data-driven conditions the caller must handle
    """
    pass


class PhytorefError(Exception):
    """Base class for data-driven pipeline failures."""


class ConfigurationError(PhytorefError, ValueError):
    """Invalid configuration (unsupported parameter, no taxon group enabled, ...).

    Raised before any aggregation happens.
    """


class EmptyPopulationError(PhytorefError):
    """The sample filter produced no records for a population.

    Without records the unit of measure and every downstream statistic are
    undefined, so the run is aborted instead of writing an empty table.
    """

    def __init__(self, population: str, detail: str):
        self.population = population
        super().__init__(f"No records in {population} population: {detail}")


class InsufficientYearsError(PhytorefError):
    """Too few distinct years to compute a centered moving average.

    Fatal for stability window detection only; aggregated tables remain valid.
    """

    def __init__(self, population: str, years: list, window_years: int):
        self.population = population
        self.years = list(years)
        self.window_years = window_years
        super().__init__(
            f"Stability window for {population} population needs at least "
            f"{window_years} distinct years with a defined rolling SD; "
            f"available years: {self.years}"
        )
