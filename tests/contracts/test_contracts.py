"""Tests for pipeline contracts.

These tests verify that contracts are enforced at stage boundaries.
They test contract violations directly, without defensive logic downstream.
"""

import numpy as np
import pandas as pd
import pytest

pytestmark = pytest.mark.unit

from phytoref.contracts import (
    ContractViolation,
    require,
    assert_sample_records,
    assert_aggregated_cells,
    assert_yearly_statistics,
)


def _cells(selected=7.0):
    date = pd.Timestamp("2005-06-01")
    return pd.DataFrame([
        {"station": "A", "date": date, "year": 2005, "month": 6, "taxa": "Diatoms", "biomass": 5.0},
        {"station": "A", "date": date, "year": 2005, "month": 6, "taxa": "Cyanobacteria", "biomass": 2.0},
        {"station": "A", "date": date, "year": 2005, "month": 6, "taxa": "Selected", "biomass": selected},
    ])


class TestRequire:
    """Test the enforcement primitive."""

    def test_require_passes(self):
        require(True, "never raised")

    def test_require_raises_with_message(self):
        with pytest.raises(ContractViolation, match="broken"):
            require(False, "broken")


class TestRecordsContract:
    """Test sample record contract."""

    def test_records_contract_passes(self, make_records):
        assert_sample_records(make_records([{"taxon": "diatom"}]))

    def test_records_contract_fails_without_column(self, make_records):
        df = make_records([{"taxon": "diatom"}]).drop(columns=["trophic_type"])
        with pytest.raises(ContractViolation, match="missing required column 'trophic_type'"):
            assert_sample_records(df)

    def test_records_contract_fails_with_string_dates(self, make_records):
        df = make_records([{"taxon": "diatom"}])
        df["date"] = df["date"].dt.strftime("%Y-%m-%d")
        with pytest.raises(ContractViolation, match="datetime64"):
            assert_sample_records(df)

    def test_records_contract_fails_with_negative_values(self, make_records):
        df = make_records([{"taxon": "diatom", "value": -1.0}])
        with pytest.raises(ContractViolation, match="negative"):
            assert_sample_records(df)

    def test_records_contract_rejects_non_dataframe(self):
        with pytest.raises(ContractViolation, match="expected DataFrame"):
            assert_sample_records([{"year": 2000}])

    def test_records_contract_fails_with_null_station(self, make_records):
        df = make_records([{"taxon": "diatom"}, {"taxon": "cyano"}])
        df.loc[0, "station"] = None
        with pytest.raises(ContractViolation, match="1 row\\(s\\) with missing 'station'"):
            assert_sample_records(df)

    def test_records_contract_fails_with_nan_value(self, make_records):
        df = make_records([{"taxon": "diatom"}, {"taxon": "cyano"}])
        df.loc[1, "value"] = np.nan
        with pytest.raises(ContractViolation, match="missing 'value'"):
            assert_sample_records(df)

    def test_records_contract_allows_null_taxonomy(self, make_records):
        df = make_records([{"taxon": "diatom"}])
        assert df.loc[0, "genus"] is None
        assert_sample_records(df)


class TestAggregationContract:
    """Test aggregation stage contract."""

    def test_aggregation_contract_passes(self):
        assert_aggregated_cells(_cells())

    def test_aggregation_contract_passes_empty(self):
        assert_aggregated_cells(_cells().iloc[0:0])

    def test_aggregation_contract_fails_on_wrong_selected(self):
        with pytest.raises(ContractViolation, match="Selected != sum"):
            assert_aggregated_cells(_cells(selected=8.0))

    def test_aggregation_contract_fails_without_selected(self):
        df = _cells().iloc[:2]
        with pytest.raises(ContractViolation, match="same"):
            assert_aggregated_cells(df)

    def test_aggregation_contract_fails_on_duplicates(self):
        df = pd.concat([_cells(), _cells().iloc[:1]], ignore_index=True)
        with pytest.raises(ContractViolation, match="duplicate"):
            assert_aggregated_cells(df)

    def test_aggregation_contract_fails_without_biomass(self):
        with pytest.raises(ContractViolation, match="'biomass'"):
            assert_aggregated_cells(_cells().drop(columns=["biomass"]))


class TestStatisticsContract:
    """Test yearly statistics contract."""

    def _stats(self, years=(2000, 2001), n=(2, 3), sd=(1.0, 2.0)):
        return pd.DataFrame({
            "year": list(years),
            "n": list(n),
            "mean": 1.0,
            "sd": list(sd),
            "rolling_mean": np.nan,
            "rolling_sd": np.nan,
        })

    def test_statistics_contract_passes(self):
        assert_yearly_statistics(self._stats())

    def test_statistics_contract_fails_unsorted(self):
        with pytest.raises(ContractViolation, match="ascending"):
            assert_yearly_statistics(self._stats(years=(2001, 2000)))

    def test_statistics_contract_fails_on_sd_for_single_value(self):
        with pytest.raises(ContractViolation, match="n < 2"):
            assert_yearly_statistics(self._stats(n=(1, 3), sd=(0.0, 2.0)))


class TestInvariantTables:
    """The documented invariants cover every stage exactly once."""

    def test_every_stage_has_a_requirement(self):
        from phytoref.contracts.invariants import PIPELINE_INVARIANTS, STAGE_REQUIREMENTS

        assert set(PIPELINE_INVARIANTS) == set(STAGE_REQUIREMENTS)
        assert set(STAGE_REQUIREMENTS.values()) <= {"REQUIRED", "OPTIONAL"}
        assert STAGE_REQUIREMENTS["stability_window"] == "OPTIONAL"
