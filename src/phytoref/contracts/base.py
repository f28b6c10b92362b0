"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
It enforces structural invariants between pipeline stages.
"""

from phytoref.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a pipeline contract.

    This is called at stage boundaries to verify the preceding stage
    produced the guaranteed invariants. It is fail-fast: no recovery,
    no fallback, no silence.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require("station" in df.columns, "Records contract: missing 'station' column")
    >>> require(len(df) > 0, "Aggregation contract: at least one cell expected")
    """
    if not condition:
        raise ContractViolation(message)
