"""Core reference-period pipeline execution logic.

This module contains the actual pipeline runner, separated from argument parsing.
Scripts are thin wrappers; this is the real implementation.
"""

import json
import logging
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any

from phytoref.biomass.loader import RecordLoader
from phytoref.pipeline.processor import ReferencePeriodProcessor, PipelineResult
from phytoref.pipeline.writer import ResultWriter
from phytoref.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig, InternalConfig


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def setup_logging(config: InternalConfig, log_dir: Optional[Path] = None) -> Path:
    """Configure the root logger with console and file handlers.

    Returns the log file path.
    """
    log_level = getattr(logging, config.logging.level, logging.INFO)
    log_dir = Path(log_dir or config.output.base_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "phytoref.log"

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    fh = logging.FileHandler(log_path)
    fh.setLevel(log_level)
    fh.setFormatter(formatter)
    root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.info("Logging: level=%s, file=%s", config.logging.level, log_path)
    return log_path


def build_config(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> InternalConfig:
    """Resolve Param < User < CLI into an InternalConfig."""
    param_cfg = ParamConfig()

    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))
    else:
        user_cfg = UserConfig()

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"

    # Filter None values
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    return resolve_config(param_cfg, user_cfg, cli_cfg)


def run_reference_pipeline(
    records_path: str,
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> PipelineResult:
    """Execute the biomass reference-period pipeline.

    This is the core pipeline execution function. It:
    1. Loads and resolves configuration (Param < User < CLI)
    2. Configures logging
    3. Reads the record table
    4. Runs both population pipelines
    5. Writes aggregated cells, yearly statistics and windows

    Parameters
    ----------
    records_path : str
        Tab-separated (by default) record table in the canonical layout.
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict).
    cli_args : dict, optional
        CLI overrides. Keys: measurement_parameter, base_dir, log_level.
    verbose : bool, optional
        If True, enable DEBUG logging and print the resolved config.

    Returns
    -------
    PipelineResult

    Raises
    ------
    ConfigurationError
        If configuration validation fails.
    EmptyPopulationError
        If no records survive filtering.
    """
    config = build_config(user_config_path, cli_args, verbose)
    setup_logging(config)

    print(f"\n{'='*60}")
    print("Phytoplankton Biomass Reference Period")
    print('='*60)
    print(f"Config:    {user_config_path or '(defaults)'}")
    print(f"Records:   {records_path}")
    print(f"Parameter: {config.selection.measurement_parameter}")
    print(f"Groups:    {', '.join(config.selection.enabled_groups)}")
    print(f"Output:    {config.output.base_dir}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('='*60)

    records = RecordLoader(config).load(records_path)
    result = ReferencePeriodProcessor(config).run(records)
    ResultWriter(config).write(result)

    for pop in (result.full, result.grouped):
        if pop.window is not None:
            print(f"{pop.name:>14}: {pop.window.start_year}-{pop.window.end_year}")
        else:
            print(f"{pop.name:>14}: no window ({pop.error})")

    return result
