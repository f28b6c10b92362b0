import pytest

from phytoref.schemas import CLIConfig

pytestmark = pytest.mark.unit


def test_empty_cli_has_no_overrides():
    assert CLIConfig().to_internal_overrides() == {}


def test_cli_overrides_structure():
    cli = CLIConfig(measurement_parameter="Biovolume concentration", base_dir="/out", log_level="DEBUG")

    assert cli.to_internal_overrides() == {
        "selection": {"measurement_parameter": "biovolume_concentration"},
        "output": {"base_dir": "/out"},
        "logging": {"level": "DEBUG"},
    }


def test_cli_rejects_unknown_fields():
    with pytest.raises(Exception):
        CLIConfig.model_validate({"station": "BY31"})


def test_cli_rejects_bad_log_level():
    with pytest.raises(Exception):
        CLIConfig(log_level="LOUD")
