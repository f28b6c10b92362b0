"""ParamConfig: Expert defaults for the phytoref pipeline.

This module defines the complete default configuration. ALL pipeline
parameters must have defaults here. No runtime code should define fallback
values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal
from pydantic import Field, field_validator
from phytoref.schemas.base import PhytorefBaseModel


MeasurementParameter = Literal[
    "abundance",
    "carbon_concentration",
    "biovolume_concentration",
]


def normalize_parameter_name(value: str) -> str:
    """Normalize a measurement parameter label.

    ``"Carbon concentration"``, ``"carbon-concentration"`` and
    ``"CARBON_CONCENTRATION"`` all become ``"carbon_concentration"``.
    The same normalization is applied to the ``parameter`` column of the
    record table before filtering.
    """
    return "_".join(str(value).strip().lower().replace("-", " ").split())


# =============================================================================
# Nested Configuration Models
# =============================================================================

class SelectionConfig(PhytorefBaseModel):
    """Which records and taxon groups enter the grouped population."""
    measurement_parameter: MeasurementParameter = "carbon_concentration"
    include_diatoms: bool = True
    include_dinoflagellates: bool = True
    include_cyanobacteria: bool = True
    include_mesodinium_rubrum: bool = True

    @field_validator("measurement_parameter", mode="before")
    @classmethod
    def normalize_parameter(cls, v):
        """Accept spaced, hyphenated or uppercase parameter names."""
        if isinstance(v, str):
            return normalize_parameter_name(v)
        return v


class TaxonomyConfig(PhytorefBaseModel):
    """Taxon names used by the classifier."""
    diatom_phylum: str = "Bacillariophyta"
    cyanobacteria_phylum: str = "Cyanobacteria"
    dinoflagellate_phylum: str = "Dinoflagellata"
    mesodinium_species: str = "Mesodinium rubrum"
    # AU = autotrophic, MX = mixotrophic
    dinoflagellate_trophic_types: list[str] = Field(default_factory=lambda: ["AU", "MX"])


class StabilityConfig(PhytorefBaseModel):
    """Moving-average window for reference-period detection."""
    window_years: int = Field(5, ge=3, description="Centered window length in years")

    @field_validator("window_years")
    @classmethod
    def window_must_be_odd(cls, v):
        """A centered window needs an odd length."""
        if v % 2 == 0:
            raise ValueError(f"window_years must be odd, got {v}")
        return v


class IndicatorConfig(PhytorefBaseModel):
    """Year sets handed to the downstream indicator calculation."""
    test_years: list[int] = Field(default_factory=list)
    reference_years: list[int] = Field(default_factory=list)


class ReaderConfig(PhytorefBaseModel):
    """Delimited record table reader configuration."""
    delimiter: str = "\t"
    encoding: str = "utf-8"

    model_config = PhytorefBaseModel.model_config.copy()
    model_config.update({"str_strip_whitespace": False})  # keep "\t"


class OutputConfig(PhytorefBaseModel):
    """Output file configuration."""
    base_dir: str = "output"
    float_format: str = "%.6g"


class LoggingConfig(PhytorefBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(PhytorefBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all pipeline parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    taxonomy: TaxonomyConfig = Field(default_factory=TaxonomyConfig)
    stability: StabilityConfig = Field(default_factory=StabilityConfig)
    indicator: IndicatorConfig = Field(default_factory=IndicatorConfig)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
