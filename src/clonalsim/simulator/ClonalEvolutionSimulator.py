"""
This file stores a subclass of TreeSimulator, the ClonalEvolutionSimulator.
The ClonalEvolutionSimulator grows a tree of tumor cell populations in
discrete generations, where each population may die or give rise to a
descendant population carrying a new SNV or CNV.
"""
from typing import Optional

import numpy as np

from clonalsim.data import CNV, SNV, LineageTree
from clonalsim.mixins import TreeSimulatorError, logger
from clonalsim.simulator.MutationGenerator import MutationGenerator
from clonalsim.simulator.TreeSimulator import TreeSimulator


class ClonalEvolutionSimulator(TreeSimulator):
    """Simulates the clonal evolution of a tumor as a branching process.

    Starting from the germline root, the tree grows in synchronous rounds. In
    each round every population that is not dead first dies with probability
    `prob_death` (the germline root never dies). A surviving population then
    gives rise to one descendant population that acquired a new SNV with
    probability `prob_snv`, or a new CNV with probability `prob_cnv`.
    Populations created during a round only take part from the next round on.
    The size of a new population is drawn uniformly in
    [0, `max_population_size`).

    When `upstream_cnv_effect` is set, mutations depend on the most recent
    mutation of the parent: an SNV following a CNV is placed on the gained
    arm, and a CNV following an SNV gains the arm carrying the SNV.

    The tree is grown for at least `n_iterations` rounds and until it has at
    least `min_nodes` live (non-dead, non-germline) populations, but growth
    stops as soon as `max_nodes` live populations are reached.

    Example use snippet:
        simulator = ClonalEvolutionSimulator(
            prob_snv=0.15,
            prob_cnv=0.02,
            prob_death=0.06,
            n_iterations=50,
            random_seed=1,
        )
        tree = simulator.simulate_tree()

    Args:
        prob_snv: Per-round probability of a descendant with a new SNV
        prob_cnv: Per-round probability of a descendant with a new CNV
        prob_death: Per-round probability that a population dies
        max_population_size: Exclusive upper bound on population sizes
        upstream_cnv_effect: Whether new mutations are constrained by the
            parent's most recent mutation
        n_iterations: Minimum number of growth rounds
        min_nodes: Minimum number of live populations in the final tree
        max_nodes: Number of live populations at which growth stops
        random_seed: A seed for reproducibility
        rng: A random number generator to use instead of seeding a new one

    Raises:
        TreeSimulatorError if the probabilities are invalid or the growth
            bounds are inconsistent
    """

    def __init__(
        self,
        prob_snv: float = 0.15,
        prob_cnv: float = 0.02,
        prob_death: float = 0.06,
        max_population_size: int = 1000000,
        upstream_cnv_effect: bool = False,
        n_iterations: int = 50,
        min_nodes: int = 10,
        max_nodes: int = 1000,
        random_seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        for name, prob in (
            ("prob_snv", prob_snv),
            ("prob_cnv", prob_cnv),
            ("prob_death", prob_death),
        ):
            if prob < 0 or prob > 1:
                raise TreeSimulatorError(f"`{name}` must be in [0, 1].")
        if prob_snv + prob_cnv + prob_death > 1:
            raise TreeSimulatorError(
                "The sum of SNV, CNV, and cell death probabilities cannot "
                "exceed 1."
            )
        if min_nodes < 1:
            raise TreeSimulatorError(
                "Minimum number of nodes must be at least 1."
            )
        if max_nodes < min_nodes:
            raise TreeSimulatorError(
                "Maximum number of nodes must not be less than the minimum "
                "number of nodes."
            )
        if prob_snv + prob_cnv == 0:
            raise TreeSimulatorError(
                "At least one of `prob_snv` and `prob_cnv` must be positive "
                "for the tree to grow."
            )
        if max_population_size < 1:
            raise TreeSimulatorError(
                "Maximum population size must be at least 1."
            )
        if n_iterations < 0:
            raise TreeSimulatorError("Number of iterations cannot be negative.")

        self.prob_snv = prob_snv
        self.prob_cnv = prob_cnv
        self.prob_death = prob_death
        self.max_population_size = max_population_size
        self.upstream_cnv_effect = upstream_cnv_effect
        self.n_iterations = n_iterations
        self.min_nodes = min_nodes
        self.max_nodes = max_nodes

        self.rng = rng if rng is not None else np.random.default_rng(random_seed)
        self.mutation_generator = MutationGenerator(self.rng)

    def grow(self, tree: LineageTree) -> None:
        """Applies one growth round to all populations that are not dead.

        Args:
            tree: The LineageTree to grow in place
        """
        generator = self.mutation_generator
        # Children created in this round are not visited until the next one.
        for node in tree.nodes:
            population = tree.get_population(node)
            if population.is_dead:
                continue

            death_roll = self.rng.random()
            if death_roll < self.prob_death and not population.is_germline:
                tree.mark_dead(node)
                continue

            last_mutation = population.last_mutation
            mutation = None
            roll = self.rng.random()
            if roll < self.prob_snv:
                if self.upstream_cnv_effect and isinstance(last_mutation, CNV):
                    mutation = generator.new_snv(parent_cnv=last_mutation)
                else:
                    mutation = generator.new_snv()
            elif roll < self.prob_snv + self.prob_cnv:
                if self.upstream_cnv_effect and isinstance(last_mutation, SNV):
                    mutation = generator.new_cnv(parent_snv=last_mutation)
                else:
                    mutation = generator.new_cnv()
            if mutation is None:
                continue

            size = int(self.rng.integers(self.max_population_size))
            tree.add_population(node, mutation, size)

    def simulate_tree(self) -> LineageTree:
        """Grows a LineageTree from the germline root.

        Returns:
            The simulated LineageTree.
        """
        tree = LineageTree()
        iteration = 0
        while (
            iteration < self.n_iterations or tree.n_live_nodes < self.min_nodes
        ):
            if tree.n_live_nodes >= self.max_nodes:
                break
            self.grow(tree)
            iteration += 1

        logger.debug(
            f"Grew tree with {tree.n_nodes} nodes ({tree.n_dead_nodes} dead) "
            f"in {iteration} iterations."
        )
        return tree
