"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

from typing import Literal
from pydantic import ConfigDict, Field, field_validator, model_validator
from phytoref.schemas.base import PhytorefBaseModel
from phytoref.schemas.param import MeasurementParameter


_FROZEN = ConfigDict(
    extra='forbid',
    validate_assignment=True,
    use_enum_values=True,
    str_strip_whitespace=True,
    frozen=True,
)


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalSelectionConfig(PhytorefBaseModel):
    """Runtime record selection and group toggles."""
    measurement_parameter: MeasurementParameter
    include_diatoms: bool
    include_dinoflagellates: bool
    include_cyanobacteria: bool
    include_mesodinium_rubrum: bool

    model_config = _FROZEN

    @model_validator(mode="after")
    def at_least_one_group(self):
        """An empty group selection leaves nothing to aggregate."""
        if not self.enabled_groups:
            raise ValueError(
                "At least one taxon group must be enabled "
                "(include_diatoms, include_dinoflagellates, "
                "include_cyanobacteria, include_mesodinium_rubrum are all False)"
            )
        return self

    @property
    def enabled_groups(self) -> list[str]:
        """Names of the enabled toggles, in classifier precedence order."""
        flags = [
            ("diatoms", self.include_diatoms),
            ("cyanobacteria", self.include_cyanobacteria),
            ("mesodinium_rubrum", self.include_mesodinium_rubrum),
            ("dinoflagellates", self.include_dinoflagellates),
        ]
        return [name for name, enabled in flags if enabled]


class InternalTaxonomyConfig(PhytorefBaseModel):
    """Runtime taxon names."""
    diatom_phylum: str
    cyanobacteria_phylum: str
    dinoflagellate_phylum: str
    mesodinium_species: str
    dinoflagellate_trophic_types: tuple[str, ...]

    model_config = _FROZEN


class InternalStabilityConfig(PhytorefBaseModel):
    """Runtime stability window settings."""
    window_years: int = Field(ge=3)

    model_config = _FROZEN

    @field_validator("window_years")
    @classmethod
    def window_must_be_odd(cls, v):
        """Overrides merged after ParamConfig validation must stay centered."""
        if v % 2 == 0:
            raise ValueError(f"window_years must be odd, got {v}")
        return v

    @property
    def radius(self) -> int:
        return self.window_years // 2


class InternalIndicatorConfig(PhytorefBaseModel):
    """Runtime indicator year sets (passed through to outputs)."""
    test_years: tuple[int, ...]
    reference_years: tuple[int, ...]

    model_config = _FROZEN

    @field_validator("test_years", "reference_years", mode="before")
    @classmethod
    def sort_years(cls, v):
        """Store year sets sorted and deduplicated."""
        return tuple(sorted(set(v)))


class InternalReaderConfig(PhytorefBaseModel):
    """Runtime reader configuration."""
    delimiter: str
    encoding: str

    model_config = ConfigDict(**{**_FROZEN, "str_strip_whitespace": False})


class InternalOutputConfig(PhytorefBaseModel):
    """Runtime output configuration."""
    base_dir: str
    float_format: str

    model_config = _FROZEN


class InternalLoggingConfig(PhytorefBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    model_config = _FROZEN


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(PhytorefBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that processing code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.parameter = config.selection.measurement_parameter  # NOT .get()
            self.window_years = config.stability.window_years

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    selection: InternalSelectionConfig
    taxonomy: InternalTaxonomyConfig
    stability: InternalStabilityConfig
    indicator: InternalIndicatorConfig
    reader: InternalReaderConfig
    output: InternalOutputConfig
    logging: InternalLoggingConfig

    model_config = _FROZEN
