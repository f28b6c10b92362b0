"""Per-year mean and standard deviation with centered moving averages.

The builder is population-agnostic: it is fed per-visit sums for the full
population and monthly cells (without ``Selected``) for the grouped
population.
"""

import logging

import numpy as np
import pandas as pd

from phytoref.biomass.records import YEARLY_COLUMNS

__all__ = ['yearly_statistics', 'centered_moving_average']

logger = logging.getLogger(__name__)


def centered_moving_average(values: pd.Series, window: int = 5) -> pd.Series:
    """Positional centered moving average.

    Parameters
    ----------
    values : pd.Series
        Values already ordered by year.
    window : int
        Odd window length; the radius is ``window // 2``.

    Returns
    -------
    pd.Series
        Same index as ``values``. The first and last ``window // 2`` positions
        are always NaN. Elsewhere the mean of the non-missing values inside
        the window; NaN only if every value in the window is missing.
    """
    radius = window // 2
    rolled = values.rolling(window=window, center=True, min_periods=1).mean()
    if len(rolled) <= 2 * radius:
        return pd.Series(np.nan, index=values.index, dtype=float)
    rolled.iloc[:radius] = np.nan
    rolled.iloc[len(rolled) - radius:] = np.nan
    return rolled


def yearly_statistics(
    population: pd.DataFrame,
    value_col: str = "biomass",
    window: int = 5,
    label: str = "population",
) -> pd.DataFrame:
    """Mean and sample standard deviation per year, plus rolling averages.

    Parameters
    ----------
    population : pd.DataFrame
        Must contain ``year`` and ``value_col``.
    value_col : str
        Column holding the values.
    window : int
        Moving average window length (odd).
    label : str
        Population name used in log messages.

    Returns
    -------
    pd.DataFrame
        ``year, n, mean, sd, rolling_mean, rolling_sd`` with one row per
        distinct year in ascending order. ``sd`` uses ``n - 1`` and is NaN
        for years with a single value.
    """
    stats = (
        population.groupby("year")[value_col]
        .agg(n="count", mean="mean", sd="std")
        .reset_index()
        .sort_values("year", kind="mergesort")
        .reset_index(drop=True)
    )
    stats["year"] = stats["year"].astype(int)
    stats["sd"] = stats["sd"].where(stats["n"] >= 2)

    missing = stats.loc[stats["sd"].isna(), "year"].tolist()
    if missing:
        logger.warning(
            "%s: standard deviation undefined (fewer than 2 values) for years %s",
            label, missing,
        )

    stats["rolling_mean"] = centered_moving_average(stats["mean"], window)
    stats["rolling_sd"] = centered_moving_average(stats["sd"], window)

    logger.info(
        "%s: yearly statistics for %d years (%s-%s)",
        label, len(stats),
        stats["year"].min() if len(stats) else None,
        stats["year"].max() if len(stats) else None,
    )
    return stats[YEARLY_COLUMNS]
