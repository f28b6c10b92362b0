"""Tests for ResultWriter output files."""

import json

import pandas as pd
import pytest

from phytoref import __version__
from phytoref.pipeline import ResultWriter

pytestmark = pytest.mark.unit


def test_write_creates_all_products(internal_config, pipeline_result, tmp_path):
    paths = ResultWriter(internal_config, output_dir=tmp_path / "out").write(pipeline_result)

    assert set(paths) == {"cells", "yearly_all_taxa", "yearly_selected_taxa", "summary"}
    for path in paths.values():
        assert path.exists()
        assert path.parent == tmp_path / "out"


def test_cells_file_is_tab_separated_with_iso_dates(internal_config, pipeline_result, tmp_path):
    paths = ResultWriter(internal_config, output_dir=tmp_path).write(pipeline_result)

    cells = pd.read_csv(paths["cells"], sep="\t", dtype={"date": str})
    assert list(cells.columns) == ["station", "date", "year", "month", "taxa", "biomass"]
    assert len(cells) == len(pipeline_result.cells)
    assert cells["date"].str.match(r"^\d{4}-\d{2}-\d{2}$").all()


def test_yearly_file_writes_missing_as_na(internal_config, processor, multi_year_records, tmp_path):
    result = processor.run(multi_year_records.loc[multi_year_records["year"] < 2003])
    paths = ResultWriter(internal_config, output_dir=tmp_path).write(result)

    text = paths["yearly_selected_taxa"].read_text()
    assert text.splitlines()[0].split("\t") == ["year", "n", "mean", "sd", "rolling_mean", "rolling_sd"]
    assert "\tNA" in text


def test_summary_contents(internal_config, pipeline_result, tmp_path):
    paths = ResultWriter(internal_config, output_dir=tmp_path).write(pipeline_result)

    summary = json.loads(paths["summary"].read_text())
    assert summary["version"] == __version__
    assert summary["parameter"] == "carbon_concentration"
    assert summary["unit"] == "ugC/l"
    assert summary["n_cells"] == 160
    assert summary["n_visits"] == 48

    grouped = summary["reference_periods"]["selected_taxa"]
    window = pipeline_result.grouped_window
    assert grouped["start_year"] == window.start_year
    assert grouped["end_year"] == window.end_year
    assert grouped["rolling_sd"] == pytest.approx(window.rolling_sd)


def test_summary_records_window_errors(processor, multi_year_records):
    result = processor.run(multi_year_records.loc[multi_year_records["year"] < 2003])

    entry = ResultWriter.summary(result)["reference_periods"]["all_taxa"]
    assert entry["start_year"] is None
    assert entry["end_year"] is None
    assert "all_taxa" in entry["error"]
