"""
A subclass of TumorSampler, the RandomTumorSampler.

Draws every sample from subclones picked uniformly at random among all live
populations of a LineageTree.
"""
from typing import List, Optional

import numpy as np

from clonalsim.data import LineageTree, TumorSample
from clonalsim.mixins import TumorSamplerError
from clonalsim.simulator.TumorSampler import TumorSampler


class RandomTumorSampler(TumorSampler):
    def __init__(
        self,
        n_samples: int,
        max_subclones: int = 5,
        n_cells_per_sample: int = 100000,
        min_normal_contamination: float = 0.0,
        max_normal_contamination: float = 20.0,
        random_seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Draws independent samples from random subclones of a tree.

        Args:
            n_samples: Number of samples to draw
            max_subclones: See TumorSampler
            n_cells_per_sample: See TumorSampler
            min_normal_contamination: See TumorSampler
            max_normal_contamination: See TumorSampler
            random_seed: A seed for reproducibility
            rng: A random number generator to use instead of seeding a new one
        """
        if n_samples < 1:
            raise TumorSamplerError("Number of samples must be at least 1.")
        super().__init__(
            max_subclones=max_subclones,
            n_cells_per_sample=n_cells_per_sample,
            min_normal_contamination=min_normal_contamination,
            max_normal_contamination=max_normal_contamination,
            random_seed=random_seed,
            rng=rng,
        )
        self.n_samples = n_samples

    def sample_once(self, tree: LineageTree) -> TumorSample:
        """Draws a single sample from random subclones of the tree.

        Raises:
            TumorSamplerError if the tree has no live populations.
        """
        subclones = self.select_subclones(tree, tree.nodes, self.max_subclones)
        return self.create_sample(
            tree, subclones, self.sample_normal_contamination()
        )

    def sample(self, tree: LineageTree) -> List[TumorSample]:
        """See base class."""
        return [self.sample_once(tree) for _ in range(self.n_samples)]
