"""Aggregation stage contract.

Enforces the guarantee that after monthly aggregation the cell table has the
output columns, one row per (station, year, month, taxa), and that every
"Selected" cell equals the sum of the group cells sharing its key.
"""

import numpy as np
import pandas as pd
from phytoref.contracts.base import require
from phytoref.biomass.records import CELL_COLUMNS, TaxonGroup


def assert_aggregated_cells(df: pd.DataFrame, rtol: float = 1e-9) -> None:
    """Enforce aggregation stage contract.

    Called after BiomassAggregator.aggregate(). Verifies structure and the
    Selected-sum invariant. We do NOT validate the ecological meaning of the
    values, only that the roll-up is internally consistent.

    Parameters
    ----------
    df : pd.DataFrame
        Aggregated cell table

    rtol : float, optional
        Relative tolerance for the Selected-sum comparison.

    Raises
    ------
    ContractViolation
        If structural requirements or the sum invariant are violated
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Aggregation contract violated: output is {type(df)}, expected DataFrame"
    )

    for col in CELL_COLUMNS:
        require(
            col in df.columns,
            f"Aggregation contract violated: missing required column '{col}'"
        )

    if len(df) == 0:
        return

    key = ["station", "year", "month", "taxa"]
    require(
        not df.duplicated(subset=key).any(),
        "Aggregation contract violated: duplicate (station, year, month, taxa) cells"
    )

    selected = TaxonGroup.SELECTED.value
    is_selected = df["taxa"] == selected
    group_sum = (
        df.loc[~is_selected]
        .groupby(["station", "year", "month"])["biomass"]
        .sum()
    )
    selected_value = df.loc[is_selected].set_index(["station", "year", "month"])["biomass"]

    require(
        group_sum.index.sort_values().equals(selected_value.index.sort_values()),
        "Aggregation contract violated: Selected cells do not cover the same "
        "(station, year, month) keys as the group cells"
    )

    aligned = selected_value.reindex(group_sum.index)
    mismatch = ~np.isclose(aligned.to_numpy(), group_sum.to_numpy(), rtol=rtol, atol=0.0)
    require(
        not mismatch.any(),
        f"Aggregation contract violated: Selected != sum of groups for "
        f"{int(mismatch.sum())} station-month(s), first: {group_sum.index[mismatch][:1].tolist()}"
    )
