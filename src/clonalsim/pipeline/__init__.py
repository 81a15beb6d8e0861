"""Top level for the simulation pipeline."""

from .pipeline import (
    sample_tree,
    simulate_lineage_trees,
    write_frequency_table,
    write_subclones,
)
from .setup_utilities import parse_config, setup, validate_parameters

__all__ = [
    "parse_config",
    "sample_tree",
    "setup",
    "simulate_lineage_trees",
    "validate_parameters",
    "write_frequency_table",
    "write_subclones",
]
