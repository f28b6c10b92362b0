"""CLIConfig: Command-line operational overrides.

Minimal configuration for operational parameters that commonly change
between runs: measurement parameter, output directory, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import field_validator
from phytoref.schemas.base import PhytorefBaseModel
from phytoref.schemas.param import normalize_parameter_name


class CLIConfig(PhytorefBaseModel):
    """Command-line configuration overrides.

    Operational-only settings that override user and param configs.
    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(
            measurement_parameter="abundance",
            base_dir="/scratch/phytoref_output",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    measurement_parameter: Optional[str] = None
    base_dir: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("measurement_parameter", mode="before")
    @classmethod
    def normalize_parameter(cls, v):
        if isinstance(v, str):
            return normalize_parameter_name(v)
        return v

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.measurement_parameter is not None:
            overrides["selection"] = {"measurement_parameter": self.measurement_parameter}

        if self.base_dir is not None:
            overrides["output"] = {"base_dir": str(self.base_dir)}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
