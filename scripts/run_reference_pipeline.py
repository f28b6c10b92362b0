#!/usr/bin/env python3
"""Phytoplankton biomass reference-period pipeline runner.

Usage:
    python scripts/run_reference_pipeline.py records.txt
    python scripts/run_reference_pipeline.py records.txt --config scripts/user_config.py
    python scripts/run_reference_pipeline.py records.txt --parameter "Biovolume concentration"

Note: User config in scripts/user_config.py, expert defaults in phytoref.schemas.param
"""

import sys
import argparse
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from phytoref.cli import run_reference_pipeline
from phytoref.contracts import PhytorefError


def main():
    parser = argparse.ArgumentParser(
        description="Aggregate phytoplankton biomass and detect stable reference periods"
    )
    parser.add_argument("records", help="Record table (tab-separated by default)")
    parser.add_argument("-c", "--config", help="Path to user config file")
    parser.add_argument(
        "--parameter",
        help="Measurement parameter: abundance, carbon_concentration, biovolume_concentration",
    )
    parser.add_argument("--base-dir", help="Output directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    try:
        run_reference_pipeline(
            args.records,
            user_config_path=args.config,
            cli_args={
                "measurement_parameter": args.parameter,
                "base_dir": args.base_dir,
            },
            verbose=args.verbose,
        )
    except PhytorefError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
