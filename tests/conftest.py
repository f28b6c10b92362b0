"""Root-level pytest fixtures for the phytoref test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture, plus a factory for small record tables.
"""

import pytest
import pandas as pd

from phytoref.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_no_cyanobacteria(make_config):
    ...     config = make_config(include_cyanobacteria=False)
    ...     assert not config.selection.include_cyanobacteria
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Record Fixtures
# =============================================================================

TAXA = {
    "diatom": {"phylum": "Bacillariophyta", "scientific_name": "Skeletonema marinoi", "trophic_type": "AU"},
    "diatom2": {"phylum": "Bacillariophyta", "scientific_name": "Chaetoceros", "trophic_type": "AU"},
    "cyano": {"phylum": "Cyanobacteria", "scientific_name": "Aphanizomenon flosaquae", "trophic_type": "AU"},
    "dino_au": {"phylum": "Dinoflagellata", "scientific_name": "Tripos muelleri", "trophic_type": "AU"},
    "dino_mx": {"phylum": "Dinoflagellata", "scientific_name": "Dinophysis acuminata", "trophic_type": "MX"},
    "dino_ht": {"phylum": "Dinoflagellata", "scientific_name": "Protoperidinium", "trophic_type": "HT"},
    "meso": {"phylum": "Ciliophora", "scientific_name": "Mesodinium rubrum", "trophic_type": "MX"},
    "other": {"phylum": "Chlorophyta", "scientific_name": "Monoraphidium", "trophic_type": "AU"},
}


def record(taxon="diatom", date="2005-06-10", value=1.0, station="BY31",
           depth_min=0.0, parameter="Carbon concentration", unit="ugC/l"):
    """One sample record row as a dict."""
    ts = pd.Timestamp(date)
    row = {
        "year": ts.year,
        "station": station,
        "date": ts,
        "month": ts.month,
        "phylum": None,
        "class": None,
        "order": None,
        "family": None,
        "genus": None,
        "species": None,
        "scientific_name": None,
        "trophic_type": None,
        "depth_min": depth_min,
        "parameter": parameter,
        "value": float(value),
        "unit": unit,
    }
    row.update(TAXA[taxon])
    return row


@pytest.fixture
def make_records():
    """Factory building a record DataFrame from ``record()`` keyword dicts.

    Examples
    --------
    >>> df = make_records([{"taxon": "diatom", "value": 2.0}, {"taxon": "cyano"}])
    """
    def _make(rows):
        frame = pd.DataFrame([record(**row) for row in rows])
        frame["date"] = pd.to_datetime(frame["date"])
        return frame

    return _make


@pytest.fixture
def multi_year_records(make_records):
    """Two stations, 2000-2007, two visits in June and one in August per year.

    Every visit carries all four groups plus one unclassified taxon.
    """
    rows = []
    for year in range(2000, 2008):
        for station in ("BY31", "BY15"):
            for day, month in ((5, 6), (20, 6), (12, 8)):
                date = f"{year}-{month:02d}-{day:02d}"
                scale = 1.0 + (year - 2000) * 0.1 + (day / 100.0)
                for taxon, base in (("diatom", 10.0), ("diatom2", 3.0), ("cyano", 4.0),
                                    ("dino_au", 2.0), ("meso", 1.0), ("other", 7.0)):
                    rows.append({"taxon": taxon, "date": date, "station": station,
                                 "value": base * scale})
    return make_records(rows)
