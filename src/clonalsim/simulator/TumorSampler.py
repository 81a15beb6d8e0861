"""
Abstract class TumorSampler. Draws tumor samples from a LineageTree.

All tumor samplers are derived classes of this abstract class, and at a minimum
implement a method called `sample`.
"""
import abc
import warnings
from typing import List, Optional, Sequence

import numpy as np

from clonalsim.data import LineageTree, TumorSample
from clonalsim.mixins import ParameterWarning, TumorSamplerError


class TumorSampler(abc.ABC):
    """
    Abstract base class for all tumor samplers.

    A TumorSampler implements a method 'sample' which, given a fully grown
    tree, selects a few subclones (populations of the tree) for every sample
    and distributes the cells of the sample among them proportionally to the
    population sizes. Each sample additionally contains a random fraction of
    normal cells.

    Args:
        max_subclones: Each sample is drawn from between 1 and
            `max_subclones` - 1 subclones (exactly 1 if `max_subclones` <= 2)
        n_cells_per_sample: Total number of cells in a sample, normal cells
            included
        min_normal_contamination: Minimum percentage of normal cells
        max_normal_contamination: Maximum percentage of normal cells. The
            percentage of each sample is drawn uniformly in
            [`min_normal_contamination`, `max_normal_contamination`]
        random_seed: A seed for reproducibility
        rng: A random number generator to use instead of seeding a new one

    Raises:
        TumorSamplerError if a parameter is out of range
    """

    def __init__(
        self,
        max_subclones: int = 5,
        n_cells_per_sample: int = 100000,
        min_normal_contamination: float = 0.0,
        max_normal_contamination: float = 20.0,
        random_seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        if max_subclones < 1:
            raise TumorSamplerError(
                "Maximum number of subclones must be at least 1."
            )
        if n_cells_per_sample < 1:
            raise TumorSamplerError(
                "Number of cells per sample must be at least 1."
            )
        for contamination in (min_normal_contamination, max_normal_contamination):
            if contamination < 0 or contamination > 100:
                raise TumorSamplerError(
                    "Normal contamination percentages must be in [0, 100]."
                )
        if max_normal_contamination < min_normal_contamination:
            warnings.warn(
                "Maximum normal contamination is lower than the minimum, "
                "setting it to the minimum.",
                ParameterWarning,
            )
            max_normal_contamination = min_normal_contamination

        self.max_subclones = max_subclones
        self.n_cells_per_sample = n_cells_per_sample
        self.min_normal_contamination = min_normal_contamination
        self.max_normal_contamination = max_normal_contamination
        self.rng = rng if rng is not None else np.random.default_rng(random_seed)

    @abc.abstractmethod
    def sample(self, tree: LineageTree) -> List[TumorSample]:
        """
        Draws samples from a LineageTree.

        The tree must not be grown while it is being sampled.

        Args:
            tree: The LineageTree to sample from

        Returns:
            A list of TumorSamples.
        """

    def select_subclones(
        self, tree: LineageTree, nodes: Sequence[int], max_subclones: int
    ) -> List[int]:
        """Randomly picks live, non-germline populations from a list of nodes.

        The number of subclones is drawn uniformly between 1 and
        `max_subclones` - 1 (1 if `max_subclones` <= 1); fewer are returned if
        not enough eligible populations exist.

        Args:
            tree: The tree the nodes belong to
            nodes: Candidate node ids
            max_subclones: Bound on the number of subclones

        Returns:
            The selected node ids.
        """
        candidates = list(nodes)
        self.rng.shuffle(candidates)
        n_subclones = 1
        if max_subclones > 1:
            n_subclones += int(self.rng.integers(max_subclones - 1))

        subclones = []
        for node in candidates:
            if len(subclones) >= n_subclones:
                break
            population = tree.get_population(node)
            if population.is_dead or population.is_germline:
                continue
            subclones.append(node)
        return subclones

    def sample_normal_contamination(self) -> int:
        """Draws the number of normal cells of a sample."""
        percent_normal = self.min_normal_contamination
        if self.max_normal_contamination > self.min_normal_contamination:
            percent_normal += self.rng.random() * (
                self.max_normal_contamination - self.min_normal_contamination
            )
        return int(percent_normal * self.n_cells_per_sample / 100.0)

    def create_sample(
        self, tree: LineageTree, subclones: List[int], n_normal_cells: int
    ) -> TumorSample:
        """Distributes the tumor cells of a sample among subclones.

        The tumor cells are allocated by a multinomial draw with probabilities
        proportional to the subclone sizes (uniform if all sizes are zero).

        Args:
            tree: The tree the subclones belong to
            subclones: Selected node ids. A node listed twice is weighted twice
            n_normal_cells: Number of normal cells in the sample

        Returns:
            The new TumorSample.

        Raises:
            TumorSamplerError if no subclones were selected.
        """
        if len(subclones) == 0:
            raise TumorSamplerError(
                "Cannot create a sample: no live populations to select from."
            )

        sizes = np.array(
            [tree.get_population(node).size for node in subclones], dtype=float
        )
        if sizes.sum() > 0:
            probabilities = sizes / sizes.sum()
        else:
            probabilities = np.full(len(subclones), 1.0 / len(subclones))
        n_tumor_cells = self.n_cells_per_sample - n_normal_cells
        counts = self.rng.multinomial(n_tumor_cells, probabilities)

        population_counts = {}
        for node, count in zip(subclones, counts):
            if count > 0:
                population_counts[node] = population_counts.get(node, 0) + int(
                    count
                )
        color = tuple(int(c) for c in self.rng.integers(256, size=3))
        return TumorSample(
            population_counts=population_counts,
            n_normal_cells=n_normal_cells,
            subclones=list(subclones),
            color=color,
        )
