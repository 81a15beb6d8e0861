"""Top level for tools."""

from .allele_frequencies import (
    compute_frequency_table,
    compute_variant_allele_frequencies,
    get_binary_profiles,
    get_frequency_columns,
)
from .sequencing_noise import (
    add_sequencing_noise,
    add_sequencing_noise_to_table,
    sample_observed_frequencies,
)

__all__ = [
    "add_sequencing_noise",
    "add_sequencing_noise_to_table",
    "compute_frequency_table",
    "compute_variant_allele_frequencies",
    "get_binary_profiles",
    "get_frequency_columns",
    "sample_observed_frequencies",
]
