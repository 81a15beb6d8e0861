"""
Computes the true variant allele frequencies (VAFs) of the SNVs in tumor
samples drawn from a LineageTree.

Two modes are available. Without CNVs every cell is diploid, so the VAF of an
SNV is the fraction of sampled cells carrying it divided by two. With CNVs,
the number of reference and variant copies of each SNV locus is tracked per
population, depending on whether each overlapping CNV was acquired before or
after the SNV and on which haplotype.
"""
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from clonalsim.data import CNV, SNV, CellPopulation, LineageTree, TumorSample
from clonalsim.data.Mutation import overlaps
from clonalsim.mixins import VariantAlleleFrequencyError

FREQUENCY_TABLE_INFO_COLUMNS = ["chrom", "pos", "desc"]
NORMAL_SAMPLE_COLUMN = "normal"


def compute_variant_allele_frequencies(
    tree: LineageTree, sample: TumorSample, cnv_aware: bool = True
) -> Dict[SNV, float]:
    """Computes the true VAF of every SNV present in a sample.

    SNVs not carried by any sampled population are not reported. In CNV-aware
    mode, the number of distinct SNVs whose locus is gained by a CNV in any
    sampled population is stored in `sample.n_cnv_affected_snvs`.

    Args:
        tree: The LineageTree the sample was drawn from
        sample: The TumorSample
        cnv_aware: Whether to account for the copy-number changes caused by
            CNVs. Should be False only for trees simulated without CNVs

    Returns:
        A dictionary mapping each SNV to its VAF in [0, 1].

    Raises:
        VariantAlleleFrequencyError if the sample holds no allele copies for
            an SNV.
    """
    populations = [
        (tree.get_population(node), count)
        for node, count in sample.population_counts.items()
    ]
    if cnv_aware:
        variant_copies, total_copies, affected_snvs = _count_copies_with_cnvs(
            populations, sample.n_normal_cells
        )
        sample.n_cnv_affected_snvs = len(affected_snvs)
    else:
        variant_copies, total_copies = _count_diploid_copies(
            populations, sample.n_normal_cells
        )

    frequencies = {}
    for snv, n_variant in variant_copies.items():
        if total_copies[snv] == 0:
            raise VariantAlleleFrequencyError(
                f"No allele copies of {snv.name} in the sample."
            )
        frequencies[snv] = n_variant / total_copies[snv]
    return frequencies


def _count_diploid_copies(
    populations: List[Tuple[CellPopulation, int]], n_normal_cells: int
) -> Tuple[Dict[SNV, int], Dict[SNV, int]]:
    variant_copies = {}
    n_cells = n_normal_cells
    for population, count in populations:
        for mutation in population.mutations:
            if isinstance(mutation, SNV):
                variant_copies[mutation] = variant_copies.get(mutation, 0) + count
        n_cells += count
    total_copies = {snv: 2 * n_cells for snv in variant_copies}
    return variant_copies, total_copies


def _count_copies_with_cnvs(
    populations: List[Tuple[CellPopulation, int]], n_normal_cells: int
) -> Tuple[Dict[SNV, int], Dict[SNV, int], set]:
    variant_copies = {}
    total_copies = {}
    affected_snvs = set()

    # populations carrying the SNV
    for population, count in populations:
        mutations = population.mutations
        for i, snv in enumerate(mutations):
            if not isinstance(snv, SNV):
                continue
            reference_gains = 0
            variant_gains = 0
            for j, cnv in enumerate(mutations):
                if not isinstance(cnv, CNV) or not overlaps(snv, cnv):
                    continue
                affected_snvs.add(snv)
                if j < i:
                    # gained before the SNV arose, so the copy is reference
                    reference_gains += 1
                elif cnv.haplotype == snv.haplotype:
                    variant_gains += 1
                else:
                    reference_gains += 1
            total_copies[snv] = total_copies.get(snv, 0) + count * (
                reference_gains + variant_gains + 2
            )
            variant_copies[snv] = variant_copies.get(snv, 0) + count * (
                variant_gains + 1
            )

    # populations without the SNV only contribute reference copies
    for snv in total_copies:
        for population, count in populations:
            carries_snv = False
            n_cnvs = 0
            for mutation in population.mutations:
                if isinstance(mutation, CNV) and overlaps(snv, mutation):
                    n_cnvs += 1
                    affected_snvs.add(snv)
                if mutation.name == snv.name:
                    carries_snv = True
                    break
            if not carries_snv:
                total_copies[snv] += count * (2 + n_cnvs)
        total_copies[snv] += 2 * n_normal_cells

    return variant_copies, total_copies, affected_snvs


def compute_frequency_table(
    tree: LineageTree, samples: Sequence[TumorSample], cnv_aware: bool = True
) -> pd.DataFrame:
    """Tabulates the true VAFs of all SNVs across samples.

    Args:
        tree: The LineageTree the samples were drawn from
        samples: The tumor samples
        cnv_aware: See `compute_variant_allele_frequencies`

    Returns:
        A DataFrame indexed by SNV name with the columns "chrom" (1-based),
        "pos", "desc", "normal" (always 0) and one column "sample<i>" per
        sample. SNVs absent from a sample have frequency 0.
    """
    sample_columns = [f"sample{i + 1}" for i in range(len(samples))]
    frequencies: Dict[SNV, List[float]] = {}
    for i, sample in enumerate(samples):
        sample_frequencies = compute_variant_allele_frequencies(
            tree, sample, cnv_aware=cnv_aware
        )
        for snv, frequency in sample_frequencies.items():
            if snv not in frequencies:
                frequencies[snv] = [0.0] * len(samples)
            frequencies[snv][i] = frequency

    rows = [
        [snv.chromosome + 1, snv.position, snv.name, 0.0] + values
        for snv, values in frequencies.items()
    ]
    table = pd.DataFrame(
        rows,
        index=[snv.name for snv in frequencies],
        columns=FREQUENCY_TABLE_INFO_COLUMNS
        + [NORMAL_SAMPLE_COLUMN]
        + sample_columns,
    )
    return table


def get_frequency_columns(table: pd.DataFrame) -> List[str]:
    """Returns the frequency columns of a table, normal sample first."""
    return [
        c
        for c in table.columns
        if c not in FREQUENCY_TABLE_INFO_COLUMNS and c != "profile"
    ]


def get_binary_profiles(table: pd.DataFrame) -> pd.Series:
    """Summarizes in which samples each SNV is present.

    Args:
        table: A frequency table from `compute_frequency_table`

    Returns:
        A Series indexed like the table holding, for each SNV, a string of
        "0"/"1" characters over the normal sample and the tumor samples.
    """
    present = table[get_frequency_columns(table)].to_numpy() != 0
    return pd.Series(
        ["".join("1" if v else "0" for v in row) for row in present],
        index=table.index,
        dtype=str,
    )
