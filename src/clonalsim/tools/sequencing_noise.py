"""
Simulates sequencing of tumor samples: converts true variant allele
frequencies into frequencies observed with finite read depth and base-calling
errors.
"""
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from clonalsim.data import SNV
from clonalsim.mixins import VariantAlleleFrequencyError
from clonalsim.tools.allele_frequencies import NORMAL_SAMPLE_COLUMN


def _check_noise_parameters(coverage: int, sequencing_error: float) -> None:
    if coverage < 1:
        raise VariantAlleleFrequencyError("Coverage must be at least 1.")
    if sequencing_error < 0 or sequencing_error > 1:
        raise VariantAlleleFrequencyError(
            "Sequencing error must be in [0, 1]."
        )


def sample_observed_frequencies(
    frequencies: np.ndarray,
    coverage: int,
    sequencing_error: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draws observed frequencies for an array of true frequencies.

    For each true frequency f, the number of reads carrying the variant is
    drawn from Binomial(coverage, f). Each variant read is then called
    correctly with probability 1 - `sequencing_error`, and each reference read
    is miscalled as the variant with probability `sequencing_error` / 3 (one
    of the three other bases). Every entry is drawn independently.

    Args:
        frequencies: True frequencies in [0, 1]
        coverage: Number of reads covering each locus
        sequencing_error: Per-base sequencing error rate
        rng: Random number generator

    Returns:
        The observed frequencies, with the shape of `frequencies`.
    """
    frequencies = np.clip(np.asarray(frequencies, dtype=float), 0.0, 1.0)
    n_variant_reads = rng.binomial(coverage, frequencies)
    n_reference_reads = coverage - n_variant_reads
    n_called_variant = rng.binomial(
        n_variant_reads, 1 - sequencing_error
    ) + rng.binomial(n_reference_reads, sequencing_error / 3)
    return n_called_variant / coverage


def add_sequencing_noise(
    frequencies: Dict[SNV, float],
    coverage: int,
    sequencing_error: float,
    random_seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Dict[SNV, float]:
    """Perturbs the true VAFs of one sample with read sampling noise.

    Args:
        frequencies: True VAF of each SNV
        coverage: Number of reads covering each locus
        sequencing_error: Per-base sequencing error rate
        random_seed: A seed for reproducibility
        rng: A random number generator to use instead of seeding a new one

    Returns:
        The observed VAF of each SNV.

    Raises:
        VariantAlleleFrequencyError if the coverage or error rate is invalid.
    """
    _check_noise_parameters(coverage, sequencing_error)
    rng = rng if rng is not None else np.random.default_rng(random_seed)

    snvs = list(frequencies)
    observed = sample_observed_frequencies(
        np.array([frequencies[snv] for snv in snvs], dtype=float),
        coverage,
        sequencing_error,
        rng,
    )
    return {snv: float(f) for snv, f in zip(snvs, observed)}


def add_sequencing_noise_to_table(
    table: pd.DataFrame,
    coverage: int,
    sequencing_error: float,
    sample_columns: Optional[List[str]] = None,
    random_seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> pd.DataFrame:
    """Perturbs a multi-sample frequency table with read sampling noise.

    The normal sample column is left untouched.

    Args:
        table: A frequency table from `compute_frequency_table`
        coverage: Number of reads covering each locus
        sequencing_error: Per-base sequencing error rate
        sample_columns: Columns to perturb. Defaults to all "sample<i>"
            columns
        random_seed: A seed for reproducibility
        rng: A random number generator to use instead of seeding a new one

    Returns:
        A new table with observed frequencies.

    Raises:
        VariantAlleleFrequencyError if the coverage or error rate is invalid.
    """
    _check_noise_parameters(coverage, sequencing_error)
    rng = rng if rng is not None else np.random.default_rng(random_seed)

    if sample_columns is None:
        sample_columns = [
            c
            for c in table.columns
            if c.startswith("sample") and c != NORMAL_SAMPLE_COLUMN
        ]

    noisy_table = table.copy()
    if len(noisy_table) == 0 or len(sample_columns) == 0:
        return noisy_table
    noisy_table[sample_columns] = sample_observed_frequencies(
        table[sample_columns].to_numpy(dtype=float),
        coverage,
        sequencing_error,
        rng,
    )
    return noisy_table
