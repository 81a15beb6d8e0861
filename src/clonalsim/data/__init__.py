"""Top level for data."""

from .CellPopulation import CellPopulation
from .LineageTree import LineageTree
from .Mutation import (
    CHROMOSOME_LENGTHS,
    CNV,
    NUM_CHROMOSOMES,
    SNV,
    Mutation,
    get_arm,
    overlaps,
)
from .TumorSample import TumorSample
from .utilities import parse_lineage_text, parse_mutation, to_newick

__all__ = [
    "CellPopulation",
    "CHROMOSOME_LENGTHS",
    "CNV",
    "LineageTree",
    "Mutation",
    "NUM_CHROMOSOMES",
    "SNV",
    "TumorSample",
    "get_arm",
    "overlaps",
    "parse_lineage_text",
    "parse_mutation",
    "to_newick",
]
