"""
Stores the CellPopulation class, a node of a LineageTree.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from clonalsim.data.Mutation import CNV, Mutation

GERMLINE_NAME = "GL"


@dataclass
class CellPopulation:
    """A set of genetically identical cells.

    The mutations are ordered from oldest to most recent; the position of a
    mutation in this tuple is its acquisition time relative to the other
    mutations of the population. Apart from the germline root, every
    population carries its parent's mutations plus exactly one more.

    Args:
        id: Index of the population in its tree
        size: Number of cells in the population
        mutations: Mutations present in the cells, oldest first
        is_dead: Whether the population has died. Dead populations never
            produce descendants
        is_germline: Whether this is the germline root of the tree
    """

    id: int
    size: int = 0
    mutations: Tuple[Mutation, ...] = ()
    is_dead: bool = False
    is_germline: bool = False

    @property
    def last_mutation(self) -> Optional[Mutation]:
        if len(self.mutations) == 0:
            return None
        return self.mutations[-1]

    @property
    def is_cnv(self) -> bool:
        """Whether the most recently acquired mutation is a CNV."""
        return isinstance(self.last_mutation, CNV)

    @property
    def name(self) -> str:
        if self.is_germline:
            return GERMLINE_NAME
        return self.last_mutation.name
