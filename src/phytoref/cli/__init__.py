"""Command-line interface modules for the phytoref pipeline.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from phytoref.cli.run_reference import run_reference_pipeline

__all__ = ['run_reference_pipeline']
