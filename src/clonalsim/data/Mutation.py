"""
Mutation types acquired by cell populations in a simulated lineage tree.

A mutation is either a single-nucleotide variant (SNV) at a position on one
haplotype of a chromosome, or a copy-number variant (CNV) gaining one arm of
one haplotype of a chromosome. Both are immutable and identified by a unique
name. Code that behaves differently for the two kinds matches on the type
explicitly rather than relying on a class hierarchy.
"""
from dataclasses import dataclass
from typing import Union

NUM_CHROMOSOMES = 23

# GRCh37 chromosome lengths (1-22, X, Y). Only the first NUM_CHROMOSOMES are
# drawn from.
CHROMOSOME_LENGTHS = (
    249250621,
    243199373,
    198022430,
    191154276,
    180915260,
    171115067,
    159138663,
    155270560,
    146364022,
    141213431,
    135534747,
    135006516,
    133851895,
    115169878,
    107349540,
    102531392,
    90354753,
    81195210,
    78077248,
    63025520,
    59373566,
    59128983,
    51304566,
    48129895,
)

CNV_NAME_PREFIX = "CNV_"


def get_arm(chromosome: int, position: int) -> int:
    """Returns the chromosome arm (0 or 1) containing a position.

    The boundary is half the chromosome length, inclusive on the lower arm.
    """
    if position <= CHROMOSOME_LENGTHS[chromosome] // 2:
        return 0
    return 1


@dataclass(frozen=True)
class SNV:
    """A single-nucleotide variant.

    Args:
        name: Unique name of the mutation
        chromosome: 0-based chromosome index
        position: Genomic position on the chromosome
        haplotype: Haplotype (0 or 1) carrying the variant
    """

    name: str
    chromosome: int
    position: int
    haplotype: int

    @property
    def kind(self) -> str:
        return "SNV"

    @property
    def arm(self) -> int:
        return get_arm(self.chromosome, self.position)

    def describe(self) -> str:
        return (
            f"{self.name}: chr={self.chromosome + 1}, pos={self.position}, "
            f"haplotype={self.haplotype}"
        )


@dataclass(frozen=True)
class CNV:
    """A copy-number gain of one arm of one haplotype.

    Args:
        name: Unique name of the mutation, prefixed with "CNV_"
        chromosome: 0-based chromosome index
        arm: Affected chromosome arm (0 for the first half, 1 for the second)
        haplotype: Haplotype (0 or 1) that is duplicated
    """

    name: str
    chromosome: int
    arm: int
    haplotype: int

    @property
    def kind(self) -> str:
        return "CNV"

    def describe(self) -> str:
        return (
            f"{self.name}: chr={self.chromosome + 1}, arm={self.arm}, "
            f"haplotype={self.haplotype}"
        )


Mutation = Union[SNV, CNV]


def overlaps(snv: SNV, cnv: CNV) -> bool:
    """Whether a CNV changes the copy number of the locus of an SNV."""
    return cnv.chromosome == snv.chromosome and cnv.arm == snv.arm
