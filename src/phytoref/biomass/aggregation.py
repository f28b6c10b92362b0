# src/phytoref/biomass/aggregation.py
"""Roll irregular biomass samples up to station-month cells.

Two aggregation paths exist and they work at different
granularities:

**Grouped path** (records with a taxon group):

1. Sample-level sum: ``(year, station, date, taxa)`` -> sum of ``value``.
   Several species of the same group on the same visit become one figure.
2. Selected total: per ``(year, station, date)`` the step-1 biomass summed
   across groups, labelled ``Selected`` and appended.
3. Monthly mean: ``(station, year, month, taxa)`` -> mean over the visits of
   that station-month.

**Full path** (all surface records): sum of ``value`` per
``(year, station, date)``; no monthly averaging.

Within a station-month, a group seen on some visits but not others counts
as zero biomass on the visits where it was not recorded. Every group is
therefore averaged over the same visits as ``Selected``, which keeps
Selected equal to the sum of the group cells.
"""

import logging

import pandas as pd

from phytoref.biomass.records import CELL_COLUMNS, VISIT_COLUMNS, TaxonGroup

__all__ = ['BiomassAggregator']

logger = logging.getLogger(__name__)

_VISIT_KEY = ["year", "station", "date"]
_MONTH_KEY = ["station", "year", "month"]


class BiomassAggregator:
    """Grouped reductions from sample records to Aggregated Cells.

    The aggregator holds no configuration: which groups are present is
    decided upstream by the SampleFilter.

    Examples
    --------
    >>> aggregator = BiomassAggregator()
    >>> cells = aggregator.aggregate(grouped_population)
    >>> visits = aggregator.visit_sums(full_population)
    """

    def sample_sums(self, grouped: pd.DataFrame) -> pd.DataFrame:
        """Sum ``value`` per visit and taxon group.

        Returns
        -------
        pd.DataFrame
            Columns ``year, station, date, month, taxa, biomass``; one row per
            visit and group, including zero rows for groups that appear in the
            station-month but were not recorded on that visit.
        """
        sums = (
            grouped.groupby(_VISIT_KEY + ["month", "taxa"], as_index=False, observed=True)["value"]
            .sum()
            .rename(columns={"value": "biomass"})
        )

        # Complete visits x groups within each station-month
        visits = sums[_VISIT_KEY + ["month"]].drop_duplicates()
        groups = sums[_MONTH_KEY + ["taxa"]].drop_duplicates()
        grid = visits.merge(groups, on=_MONTH_KEY, how="inner")
        completed = grid.merge(sums, on=_VISIT_KEY + ["month", "taxa"], how="left")

        filled = int(completed["biomass"].isna().sum())
        if filled:
            logger.debug("Filled %d absent visit/group combinations with zero biomass", filled)
        completed["biomass"] = completed["biomass"].fillna(0.0)

        return completed.sort_values(_VISIT_KEY + ["taxa"]).reset_index(drop=True)

    def with_selected_total(self, sums: pd.DataFrame) -> pd.DataFrame:
        """Append the per-visit ``Selected`` total to sample-level sums."""
        selected = (
            sums.groupby(_VISIT_KEY + ["month"], as_index=False)["biomass"]
            .sum()
            .assign(taxa=TaxonGroup.SELECTED.value)
        )
        return pd.concat([sums, selected[sums.columns]], ignore_index=True)

    def monthly_means(self, rows: pd.DataFrame) -> pd.DataFrame:
        """Mean biomass per ``(station, year, month, taxa)``.

        ``date`` of a cell is the first visit date of its station-month.
        Applying this to a table that already has one row per station-month
        and group returns it unchanged.

        Returns
        -------
        pd.DataFrame
            Aggregated Cells with ``CELL_COLUMNS``, sorted by date.
        """
        cells = (
            rows.groupby(_MONTH_KEY + ["taxa"], as_index=False)
            .agg(date=("date", "min"), biomass=("biomass", "mean"))
        )
        cells = cells[CELL_COLUMNS]
        return cells.sort_values(["date", "station", "taxa"], kind="mergesort").reset_index(drop=True)

    def aggregate(self, grouped: pd.DataFrame) -> pd.DataFrame:
        """Run the full grouped path: sample sums, Selected total, monthly mean."""
        sums = self.sample_sums(grouped)
        rows = self.with_selected_total(sums)
        cells = self.monthly_means(rows)

        logger.info(
            "Aggregated %d grouped records into %d cells (%d stations, %d station-months)",
            len(grouped), len(cells), cells["station"].nunique(),
            len(cells.drop_duplicates(_MONTH_KEY)),
        )
        return cells

    def visit_sums(self, full: pd.DataFrame) -> pd.DataFrame:
        """Full path: total ``value`` per ``(year, station, date)``."""
        visits = (
            full.groupby(_VISIT_KEY, as_index=False)["value"]
            .sum()
            .rename(columns={"value": "biomass"})
        )
        logger.info("Summed %d full-population records into %d visits", len(full), len(visits))
        return visits[VISIT_COLUMNS].sort_values(_VISIT_KEY).reset_index(drop=True)
