"""End-to-end tests for the reference-period runner."""

import json
import logging

import pytest

from phytoref.cli import run_reference
from phytoref.cli.run_reference import (
    build_config,
    load_user_config_dict,
    run_reference_pipeline,
    setup_logging,
)
from phytoref.contracts import ConfigurationError

pytestmark = pytest.mark.integ


@pytest.fixture
def records_file(multi_year_records, tmp_path):
    path = tmp_path / "records.txt"
    frame = multi_year_records.copy()
    frame["date"] = frame["date"].dt.strftime("%Y-%m-%d")
    frame.to_csv(path, sep="\t", index=False)
    return path


@pytest.fixture
def user_config_file(tmp_path):
    path = tmp_path / "user_config.py"
    path.write_text(
        "CONFIG = {\n"
        "    'PARAMETER': 'Carbon concentration',\n"
        "    'INCLUDE_MESODINIUM_RUBRUM': False,\n"
        "    'TEST_YEARS': range(2005, 2008),\n"
        "}\n"
    )
    return path


@pytest.fixture
def quiet_logging(monkeypatch):
    monkeypatch.setattr(run_reference, "setup_logging", lambda config, log_dir=None: None)


def test_load_user_config_dict(user_config_file):
    config = load_user_config_dict(str(user_config_file))
    assert config["INCLUDE_MESODINIUM_RUBRUM"] is False


def test_load_user_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_user_config_dict(str(tmp_path / "absent.py"))


def test_load_user_config_without_dict(tmp_path):
    path = tmp_path / "empty_config.py"
    path.write_text("VALUE = 1\n")
    with pytest.raises(ValueError, match="No CONFIG dict"):
        load_user_config_dict(str(path))


def test_build_config_precedence(user_config_file):
    config = build_config(
        str(user_config_file),
        {"measurement_parameter": "abundance", "base_dir": None},
        verbose=True,
    )

    assert config.selection.measurement_parameter == "abundance"
    assert config.selection.include_mesodinium_rubrum is False
    assert config.indicator.test_years == (2005, 2006, 2007)
    assert config.logging.level == "DEBUG"
    assert config.output.base_dir == "output"


def test_build_config_rejects_bad_parameter():
    with pytest.raises(ConfigurationError):
        build_config(None, {"measurement_parameter": "chlorophyll"})


def test_setup_logging_writes_log_file(internal_config, tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        log_path = setup_logging(internal_config, log_dir=tmp_path)
        logging.getLogger("phytoref.test").info("hello from the test")
        for handler in root.handlers:
            handler.flush()
        assert log_path == tmp_path / "phytoref.log"
        assert "hello from the test" in log_path.read_text()
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_pipeline_end_to_end(records_file, user_config_file, tmp_path, quiet_logging, capsys):
    out_dir = tmp_path / "results"
    result = run_reference_pipeline(
        str(records_file),
        user_config_path=str(user_config_file),
        cli_args={"base_dir": str(out_dir)},
    )

    assert "Mesodinium rubrum" not in set(result.cells["taxa"])
    assert result.grouped_window is not None
    assert result.full_window is not None

    summary = json.loads((out_dir / "reference_periods.json").read_text())
    assert summary["enabled_groups"] == ["diatoms", "cyanobacteria", "dinoflagellates"]
    assert summary["test_years"] == [2005, 2006, 2007]
    assert summary["reference_periods"]["selected_taxa"]["start_year"] == result.grouped_window.start_year
    assert (out_dir / "aggregated_biomass.txt").exists()

    printed = capsys.readouterr().out
    assert "Phytoplankton Biomass Reference Period" in printed
    assert "selected_taxa" in printed
