"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., PARAMETER → measurement_parameter,
INCLUDE_DIATOMS → include_diatoms).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Unknown keys are ignored so that
older config files keep working.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from phytoref.schemas.base import PhytorefBaseModel
from phytoref.schemas.param import normalize_parameter_name


class UserSelectionConfig(PhytorefBaseModel):
    """User-facing selection config."""
    measurement_parameter: Optional[str] = None
    include_diatoms: Optional[bool] = None
    include_dinoflagellates: Optional[bool] = None
    include_cyanobacteria: Optional[bool] = None
    include_mesodinium_rubrum: Optional[bool] = None

    @field_validator("measurement_parameter", mode="before")
    @classmethod
    def normalize_parameter(cls, v):
        if isinstance(v, str):
            return normalize_parameter_name(v)
        return v


class UserTaxonomyConfig(PhytorefBaseModel):
    """User-facing taxonomy config."""
    diatom_phylum: Optional[str] = None
    cyanobacteria_phylum: Optional[str] = None
    dinoflagellate_phylum: Optional[str] = None
    mesodinium_species: Optional[str] = None
    dinoflagellate_trophic_types: Optional[list[str]] = None

    @field_validator("dinoflagellate_trophic_types", mode="before")
    @classmethod
    def upper_trophic_codes(cls, v):
        """Trophic type codes are compared uppercase."""
        if v is not None:
            return [str(code).strip().upper() for code in v]
        return v


class UserConfig(PhytorefBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(
            measurement_parameter="biovolume concentration",
            include_cyanobacteria=False,
            base_dir="/data/phytoref",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Selection (flat aliases)
    measurement_parameter: Optional[str] = Field(None, alias="PARAMETER")
    include_diatoms: Optional[bool] = Field(None, alias="INCLUDE_DIATOMS")
    include_dinoflagellates: Optional[bool] = Field(None, alias="INCLUDE_DINOFLAGELLATES")
    include_cyanobacteria: Optional[bool] = Field(None, alias="INCLUDE_CYANOBACTERIA")
    include_mesodinium_rubrum: Optional[bool] = Field(None, alias="INCLUDE_MESODINIUM_RUBRUM")

    # Indicator years
    test_years: Optional[list[int]] = Field(None, alias="TEST_YEARS")
    reference_years: Optional[list[int]] = Field(None, alias="REFERENCE_YEARS")

    # Stability window
    window_years: Optional[int] = Field(None, alias="WINDOW_YEARS")

    # Reader / output
    delimiter: Optional[str] = Field(None, alias="DELIMITER")
    encoding: Optional[str] = Field(None, alias="ENCODING")
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    selection: Optional[UserSelectionConfig] = None
    taxonomy: Optional[UserTaxonomyConfig] = None

    model_config = PhytorefBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({
        "populate_by_name": True,
        "extra": "ignore",
        "str_strip_whitespace": False,
    })

    @field_validator("measurement_parameter", mode="before")
    @classmethod
    def normalize_parameter(cls, v):
        """Accept 'Carbon concentration', 'carbon-concentration', etc."""
        if isinstance(v, str):
            return normalize_parameter_name(v)
        return v

    @field_validator("test_years", "reference_years", mode="before")
    @classmethod
    def accept_year_ranges(cls, v):
        """Accept a ``range`` or a single year in place of a list."""
        if isinstance(v, range):
            return list(v)
        if isinstance(v, int):
            return [v]
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        # Selection section
        selection = {}
        for key in (
            "measurement_parameter",
            "include_diatoms",
            "include_dinoflagellates",
            "include_cyanobacteria",
            "include_mesodinium_rubrum",
        ):
            value = getattr(self, key)
            if value is not None:
                selection[key] = value

        # Merge with explicit selection config
        if self.selection is not None:
            selection.update(self.selection.model_dump(exclude_none=True))

        if selection:
            overrides["selection"] = selection

        if self.taxonomy is not None:
            taxonomy = self.taxonomy.model_dump(exclude_none=True)
            if taxonomy:
                overrides["taxonomy"] = taxonomy

        indicator = {}
        if self.test_years is not None:
            indicator["test_years"] = self.test_years
        if self.reference_years is not None:
            indicator["reference_years"] = self.reference_years
        if indicator:
            overrides["indicator"] = indicator

        if self.window_years is not None:
            overrides["stability"] = {"window_years": self.window_years}

        reader = {}
        if self.delimiter is not None:
            reader["delimiter"] = self.delimiter
        if self.encoding is not None:
            reader["encoding"] = self.encoding
        if reader:
            overrides["reader"] = reader

        if self.base_dir is not None:
            overrides["output"] = {"base_dir": str(self.base_dir)}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
