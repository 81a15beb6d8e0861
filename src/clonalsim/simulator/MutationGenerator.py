"""
Stores the MutationGenerator, which draws new SNVs and CNVs for a simulation
run.
"""
from typing import Optional

import numpy as np

from clonalsim.data.Mutation import (
    CHROMOSOME_LENGTHS,
    CNV,
    CNV_NAME_PREFIX,
    NUM_CHROMOSOMES,
    SNV,
    get_arm,
)


class MutationGenerator:
    """Draws random mutations with unique sequential names.

    SNVs are named "M<k>" and CNVs "CNV_M<k>", where k is a counter shared by
    both kinds and owned by this generator, so that independent simulation
    runs never share state.

    A mutation can be constrained by a previous mutation of the other kind
    on the same lineage: an SNV derived from a CNV falls on the arm gained by
    the CNV, and a CNV derived from an SNV gains the arm carrying the SNV.

    Args:
        rng: Random number generator to draw from
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.n_mutations = 0

    def __next_name(self) -> str:
        name = f"M{self.n_mutations}"
        self.n_mutations += 1
        return name

    def __draw_chromosome(self) -> int:
        return int(self.rng.integers(NUM_CHROMOSOMES))

    def __draw_haplotype(self) -> int:
        return int(self.rng.integers(2))

    def new_snv(self, parent_cnv: Optional[CNV] = None) -> SNV:
        """Draws a new SNV.

        Args:
            parent_cnv: If provided, the SNV is placed on the chromosome and
                arm gained by this CNV. Its haplotype is still drawn at random.

        Returns:
            The new SNV.
        """
        name = self.__next_name()
        chromosome = self.__draw_chromosome()
        haplotype = self.__draw_haplotype()
        if parent_cnv is None:
            position = int(self.rng.integers(CHROMOSOME_LENGTHS[chromosome]))
        else:
            chromosome = parent_cnv.chromosome
            half_length = CHROMOSOME_LENGTHS[chromosome] // 2
            position = int(self.rng.integers(half_length))
            if parent_cnv.arm == 1:
                position += half_length
        return SNV(
            name=name,
            chromosome=chromosome,
            position=position,
            haplotype=haplotype,
        )

    def new_cnv(self, parent_snv: Optional[SNV] = None) -> CNV:
        """Draws a new CNV.

        Args:
            parent_snv: If provided, the CNV gains the arm of the chromosome
                carrying this SNV.

        Returns:
            The new CNV.
        """
        name = CNV_NAME_PREFIX + self.__next_name()
        chromosome = self.__draw_chromosome()
        haplotype = self.__draw_haplotype()
        if parent_snv is None:
            arm = int(self.rng.integers(2))
        else:
            chromosome = parent_snv.chromosome
            arm = get_arm(chromosome, parent_snv.position)
        return CNV(name=name, chromosome=chromosome, arm=arm, haplotype=haplotype)
