"""
This file stores the LineageTree, the data structure holding a simulated
clonal population.

Each node of the tree is a CellPopulation that acquired one new mutation with
respect to its parent, so the path from the germline root to a node lists
every mutation carried by that population. Populations are stored in an arena
and addressed by their integer id; the topology is a networkx DiGraph over
these ids whose children are kept in creation order.

The tree only ever grows. Populations that die stay in the tree but no longer
produce descendants. Samples drawn from the tree refer to populations by id,
so they remain valid while the tree is alive.
"""
from collections import deque
from typing import Dict, Iterable, List, Tuple

import networkx as nx

from clonalsim.data import utilities
from clonalsim.data.CellPopulation import CellPopulation
from clonalsim.data.Mutation import Mutation
from clonalsim.mixins import LineageTreeError


class LineageTree:
    """A rooted out-tree of cell populations.

    Upon construction the tree only contains the germline root, which carries
    no mutations and never dies.
    """

    def __init__(self) -> None:
        self.__populations: List[CellPopulation] = []
        self.__network = nx.DiGraph()
        self.__n_dead_nodes = 0

        germline = CellPopulation(id=0, is_germline=True)
        self.__populations.append(germline)
        self.__network.add_node(germline.id)

    @property
    def root(self) -> int:
        """Returns the id of the germline root."""
        return 0

    @property
    def nodes(self) -> List[int]:
        """Returns the ids of all populations, in creation order."""
        return [p.id for p in self.__populations]

    @property
    def edges(self) -> List[Tuple[int, int]]:
        return [(u, v) for (u, v) in self.__network.edges]

    @property
    def populations(self) -> List[CellPopulation]:
        return self.__populations[:]

    @property
    def n_nodes(self) -> int:
        return len(self.__populations)

    @property
    def n_dead_nodes(self) -> int:
        return self.__n_dead_nodes

    @property
    def n_live_nodes(self) -> int:
        """Number of non-germline populations that are not dead."""
        return self.n_nodes - self.n_dead_nodes - 1

    def __check_node(self, node: int) -> None:
        if node < 0 or node >= len(self.__populations):
            raise LineageTreeError(f"Node {node} does not exist.")

    def get_population(self, node: int) -> CellPopulation:
        self.__check_node(node)
        return self.__populations[node]

    def children(self, node: int) -> List[int]:
        """Gets the children of a node, in the order they were created."""
        self.__check_node(node)
        return [v for v in self.__network.successors(node)]

    def parent(self, node: int) -> int:
        """Gets the parent of a node.

        Raises:
            LineageTreeError if the node is the root.
        """
        self.__check_node(node)
        if node == self.root:
            raise LineageTreeError("The root does not have a parent.")
        return next(self.__network.predecessors(node))

    def is_leaf(self, node: int) -> bool:
        self.__check_node(node)
        return self.__network.out_degree(node) == 0

    def add_population(
        self, parent: int, mutation: Mutation, size: int
    ) -> CellPopulation:
        """Adds a descendant population to the tree.

        The child carries all of the parent's mutations followed by the new
        mutation.

        Args:
            parent: Id of the parent population
            mutation: The newly acquired mutation
            size: Number of cells in the new population

        Returns:
            The new CellPopulation.

        Raises:
            LineageTreeError if the parent does not exist or is dead.
        """
        parent_population = self.get_population(parent)
        if parent_population.is_dead:
            raise LineageTreeError(
                f"Dead population {parent} cannot have descendants."
            )

        child = CellPopulation(
            id=len(self.__populations),
            size=size,
            mutations=parent_population.mutations + (mutation,),
        )
        self.__populations.append(child)
        self.__network.add_edge(parent, child.id)
        return child

    def mark_dead(self, node: int) -> None:
        """Marks a population as dead.

        Raises:
            LineageTreeError if the node is the germline root.
        """
        population = self.get_population(node)
        if population.is_germline:
            raise LineageTreeError("The germline root cannot die.")
        if not population.is_dead:
            population.is_dead = True
            self.__n_dead_nodes += 1

    def get_subtree_sizes(self) -> Dict[int, int]:
        """Computes the number of live cells below every node.

        The size of a subtree is the sum of the sizes of all populations in
        it, the root of the subtree included, where dead populations count as
        zero. A new mapping is computed on every call.

        Returns:
            A dictionary mapping each node id to the size of its subtree.
        """
        sizes = {}
        for node in nx.dfs_postorder_nodes(self.__network, source=self.root):
            population = self.__populations[node]
            size = 0 if population.is_dead else population.size
            for child in self.__network.successors(node):
                size += sizes[child]
            sizes[node] = size
        return sizes

    def get_subtree_nodes(self, node: int) -> List[int]:
        """Returns all nodes below a node, itself included, in BFS order."""
        self.__check_node(node)
        subtree = []
        queue = deque([node])
        while queue:
            n = queue.popleft()
            subtree.append(n)
            queue.extend(self.__network.successors(n))
        return subtree

    def get_sample_colors(
        self, samples: Iterable
    ) -> Dict[int, List[Tuple[int, int, int]]]:
        """Collects the colors of the samples each population was drawn into.

        Args:
            samples: Samples drawn from this tree

        Returns:
            A dictionary mapping node ids to the list of sample colors, one
            entry per time the population was selected as a subclone.
        """
        colors = {}
        for sample in samples:
            for node in sample.subclones:
                colors.setdefault(node, []).append(sample.color)
        return colors

    def get_tree_topology(self) -> nx.DiGraph:
        """Returns a copy of the tree in networkx format.

        Node attributes hold the population name, size, and status.
        """
        tree = self.__network.copy()
        for population in self.__populations:
            tree.nodes[population.id]["name"] = population.name
            tree.nodes[population.id]["size"] = population.size
            tree.nodes[population.id]["dead"] = population.is_dead
        return tree

    def get_newick(self) -> str:
        """Returns the tree as a newick string labeled with population names."""
        return utilities.to_newick(
            self.get_tree_topology(), node_label="name", record_node_names=True
        )

    def to_text(self) -> str:
        """Plain-text dump of the tree.

        One tab-separated parent/child line per edge, naming populations by
        their most recent mutation (the root is "GL"), followed by one line
        describing the mutation of each non-germline population.
        """
        lines = []
        for parent, child in self.__network.edges:
            lines.append(
                f"{self.__populations[parent].name}\t"
                f"{self.__populations[child].name}"
            )
        for population in self.__populations:
            if population.is_germline:
                continue
            lines.append(population.last_mutation.describe())
        return "".join(line + "\n" for line in lines)
