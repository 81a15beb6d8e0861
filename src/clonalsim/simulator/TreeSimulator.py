"""
Abstract class TreeSimulator, for tree simulation module.

All tree simulators are derived classes of this abstract class, and at a minimum
implement a method called `simulate_tree`.
"""
import abc

from clonalsim.data import LineageTree


class TreeSimulator(abc.ABC):
    """
    TreeSimulator is an abstract class that all tree simulators derive from.

    A TreeSimulator returns a LineageTree of cell populations, each carrying
    the mutations acquired along its lineage. The purpose of the TreeSimulator
    is to provide ground-truth tumor phylogenies from which samples and allele
    frequencies can be generated to evaluate phylogeny reconstruction methods.
    """

    @abc.abstractmethod
    def simulate_tree(self) -> LineageTree:
        """
        Simulate a LineageTree.
        """
