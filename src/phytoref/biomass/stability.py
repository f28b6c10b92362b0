"""Locate the most stable multi-year period in a yearly statistics table.

The stability window is centered on the year where the moving average of the
yearly standard deviation is smallest. When several years share the minimum
the earliest one is used, so repeated runs on the same data always return the
same window.

The moving average runs over consecutive rows of the table (one per year with
data), while the reported window is ``center_year +/- window // 2`` in calendar
years. The two coincide when the years are contiguous; when the table has gaps
the window can name years that were never averaged, and a warning lists them.
"""

import logging
from dataclasses import asdict, dataclass

import pandas as pd

from phytoref.contracts.failure import InsufficientYearsError

__all__ = ['StabilityWindow', 'detect_stability_window']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StabilityWindow:
    """Candidate reference period."""
    population: str
    center_year: int
    start_year: int
    end_year: int
    rolling_sd: float

    @property
    def years(self) -> list[int]:
        return list(range(self.start_year, self.end_year + 1))

    def to_dict(self) -> dict:
        return asdict(self)


def detect_stability_window(
    yearly: pd.DataFrame,
    window: int = 5,
    population: str = "population",
) -> StabilityWindow:
    """Find the window centered on the minimum of ``rolling_sd``.

    Parameters
    ----------
    yearly : pd.DataFrame
        Output of ``yearly_statistics``; needs ``year`` and ``rolling_sd``.
    window : int
        Window length used for the rolling average (odd).
    population : str
        Label stored on the result and used in errors.

    Returns
    -------
    StabilityWindow

    Raises
    ------
    InsufficientYearsError
        If fewer than ``window`` distinct years exist, or if ``rolling_sd``
        is missing everywhere.
    """
    radius = window // 2
    ordered = yearly.sort_values("year", kind="mergesort").reset_index(drop=True)
    years = ordered["year"].astype(int).tolist()

    if ordered["year"].nunique() < window:
        raise InsufficientYearsError(population, years, window)

    rolling_sd = ordered["rolling_sd"].astype(float)
    valid = rolling_sd.dropna()
    if valid.empty:
        raise InsufficientYearsError(population, years, window)

    minimum = valid.min()
    tied = ordered.loc[rolling_sd == minimum, "year"].astype(int).tolist()
    if len(tied) > 1:
        logger.info(
            "%s: rolling SD minimum %.6g shared by years %s; using %d",
            population, minimum, tied, tied[0],
        )

    center = tied[0]
    result = StabilityWindow(
        population=population,
        center_year=center,
        start_year=center - radius,
        end_year=center + radius,
        rolling_sd=float(minimum),
    )
    logger.info(
        "%s: stability window %d-%d (center %d, rolling SD %.6g)",
        population, result.start_year, result.end_year, center, minimum,
    )

    absent = sorted(set(result.years) - set(years))
    if absent:
        logger.warning(
            "%s: stability window %d-%d includes years without data %s",
            population, result.start_year, result.end_year, absent,
        )
    return result
