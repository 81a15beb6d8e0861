"""
A subclass of TumorSampler, the LocalizedTumorSampler.

Approximates spatially localized sampling of a tumor by drawing each sample
from a different subtree of the LineageTree, so that samples contain
phylogenetically distinct subclones.
"""
from typing import Dict, List, Optional
import warnings

import numpy as np

from clonalsim.data import LineageTree, TumorSample
from clonalsim.mixins import TumorSamplerError, TumorSamplerWarning
from clonalsim.simulator.TumorSampler import TumorSampler


class LocalizedTumorSampler(TumorSampler):
    def __init__(
        self,
        n_samples: int,
        mix_neighbor_subtree_subclone: bool = True,
        max_subclones: int = 5,
        n_cells_per_sample: int = 100000,
        min_normal_contamination: float = 0.0,
        max_normal_contamination: float = 20.0,
        random_seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Draws samples from disjoint subtrees of a tree.

        The tree is split into `n_samples` disjoint subtrees with live cells,
        starting from the children of the germline root and repeatedly
        replacing a subtree root by its children until enough subtrees are
        found. If the tree cannot be split that far, subtrees are reused in
        decreasing order of size and some samples overlap.

        Args:
            n_samples: Number of samples to draw
            mix_neighbor_subtree_subclone: Whether to add to each sample one
                subclone from the subtree of the previous sample (the first
                sample takes one from the last subtree)
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
        self.mix_neighbor_subtree_subclone = mix_neighbor_subtree_subclone

    def find_subtree_roots(self, tree: LineageTree) -> List[int]:
        """Finds up to `n_samples` roots of disjoint subtrees with live cells.

        Args:
            tree: The tree to split

        Returns:
            The subtree roots, sorted by decreasing subtree size.

        Raises:
            TumorSamplerError if the root has no children or none of its
                children has live cells below it.
        """
        if tree.is_leaf(tree.root):
            raise TumorSamplerError(
                "Cannot collect samples from the tree, only the root node is "
                "present."
            )

        subtree_sizes = tree.get_subtree_sizes()

        def _non_empty_children(node: int) -> List[int]:
            return [c for c in tree.children(node) if subtree_sizes[c] > 0]

        subtree_roots = _non_empty_children(tree.root)
        if len(subtree_roots) == 0:
            raise TumorSamplerError(
                "Cannot collect samples from the tree, no subtree below the "
                "root has live cells."
            )

        while len(subtree_roots) < self.n_samples:
            split = None
            for i, node in enumerate(subtree_roots):
                children = _non_empty_children(node)
                if len(children) > 0:
                    split = (i, children)
                    break
            if split is None:
                break
            i, children = split
            subtree_roots.pop(i)
            subtree_roots = children + subtree_roots

        return sorted(subtree_roots, key=lambda n: -subtree_sizes[n])

    def sample(self, tree: LineageTree) -> List[TumorSample]:
        """See base class."""
        k = self.n_samples
        subtree_roots = self.find_subtree_roots(tree)
        if len(subtree_roots) < k:
            warnings.warn(
                f"Only {len(subtree_roots)} disjoint subtrees found for {k} "
                "samples, some samples will overlap.",
                TumorSamplerWarning,
            )

        subtrees: Dict[int, List[int]] = {}
        for i in range(k):
            subtrees[i] = tree.get_subtree_nodes(
                subtree_roots[i % len(subtree_roots)]
            )

        samples = []
        for i in range(k):
            subclones = self.select_subclones(
                tree, subtrees[i], self.max_subclones
            )
            if self.mix_neighbor_subtree_subclone:
                subclones += self.select_subclones(tree, subtrees[(i - 1) % k], 1)
            samples.append(
                self.create_sample(
                    tree, subclones, self.sample_normal_contamination()
                )
            )
        return samples
