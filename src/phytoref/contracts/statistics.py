"""Yearly statistics contract.

Enforces that a yearly statistics table is ordered by year, has one row per
year, and never reports a standard deviation where it is undefined.
"""

import pandas as pd
from phytoref.contracts.base import require
from phytoref.biomass.records import YEARLY_COLUMNS


def assert_yearly_statistics(df: pd.DataFrame) -> None:
    """Enforce yearly statistics contract.

    Raises
    ------
    ContractViolation
        If columns are missing, years are unsorted or duplicated, or a year
        with fewer than two values carries a standard deviation.
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Statistics contract violated: output is {type(df)}, expected DataFrame"
    )

    for col in YEARLY_COLUMNS:
        require(
            col in df.columns,
            f"Statistics contract violated: missing required column '{col}'"
        )

    require(
        df["year"].is_monotonic_increasing and df["year"].is_unique,
        "Statistics contract violated: years must be unique and ascending"
    )

    single = df["n"] < 2
    require(
        df.loc[single, "sd"].isna().all(),
        "Statistics contract violated: sd must be missing for years with n < 2"
    )
