"""Record table contract.

Enforces the shape of the sample record table handed over by the ingestion
collaborator before any classification happens.
"""

import pandas as pd
from phytoref.contracts.base import require
from phytoref.biomass.records import REQUIRED_RECORD_COLUMNS

_NON_NULL_COLUMNS = ["year", "station", "date", "month", "value"]

def assert_sample_records(df: pd.DataFrame) -> None:
    """Enforce the sample record contract.

    Parameters
    ----------
    df : pd.DataFrame
        Record table from the loader or an external ingestion step.

    Raises
    ------
    ContractViolation
        If required columns are missing, a visit key or value is null,
        dates are not datetimes, or values are negative.
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Records contract violated: input is {type(df)}, expected DataFrame"
    )

    for col in REQUIRED_RECORD_COLUMNS:
        require(
            col in df.columns,
            f"Records contract violated: missing required column '{col}'"
        )

    if len(df) == 0:
        return

    # Grouping drops null keys and sum() treats NaN as zero
    for col in _NON_NULL_COLUMNS:
        missing = int(df[col].isna().sum())
        require(
            missing == 0,
            f"Records contract violated: {missing} row(s) with missing '{col}'"
        )

    require(
        pd.api.types.is_datetime64_any_dtype(df["date"]),
        f"Records contract violated: 'date' has dtype {df['date'].dtype}, expected datetime64"
    )
    require(
        df["month"].between(1, 12).all(),
        "Records contract violated: 'month' must be within 1..12"
    )
    require(
        pd.api.types.is_numeric_dtype(df["value"]),
        f"Records contract violated: 'value' has dtype {df['value'].dtype}, expected numeric"
    )
    negative = int((df["value"] < 0).sum())
    require(
        negative == 0,
        f"Records contract violated: {negative} negative value(s)"
    )
