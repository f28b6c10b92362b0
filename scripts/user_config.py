"""Phytoref User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the pipeline behavior. Expert defaults are in src/phytoref/schemas/param.py

Usage:
    python scripts/run_reference_pipeline.py records.txt --config scripts/user_config.py
"""

CONFIG = {
    # ========================================================================
    # MEASUREMENT PARAMETER
    # ========================================================================
    # "Abundance", "Carbon concentration" or "Biovolume concentration"
    "PARAMETER": "Carbon concentration",

    # ========================================================================
    # TAXON GROUPS (summed into "Selected")
    # ========================================================================
    "INCLUDE_DIATOMS": True,
    "INCLUDE_DINOFLAGELLATES": True,   # autotrophic and mixotrophic only
    "INCLUDE_CYANOBACTERIA": True,
    "INCLUDE_MESODINIUM_RUBRUM": True,

    # ========================================================================
    # INDICATOR YEARS (passed through to the indicator calculation)
    # ========================================================================
    "TEST_YEARS": range(2016, 2021),
    "REFERENCE_YEARS": range(2001, 2006),

    # ========================================================================
    # INPUT / OUTPUT
    # ========================================================================
    "DELIMITER": "\t",
    "ENCODING": "utf-8",
    "BASE_DIR": "./output",
    "LOG_LEVEL": "INFO",
}
