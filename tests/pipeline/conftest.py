"""Fixtures for pipeline tests."""

import pytest

from phytoref.pipeline import ReferencePeriodProcessor


@pytest.fixture
def processor(internal_config):
    return ReferencePeriodProcessor(internal_config)


@pytest.fixture
def pipeline_result(processor, multi_year_records):
    """Result of a full run over the eight-year fixture."""
    return processor.run(multi_year_records)
