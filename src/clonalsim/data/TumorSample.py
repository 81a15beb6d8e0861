"""
Stores the TumorSample class, a tissue sample drawn from a LineageTree.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class TumorSample:
    """A weighted multiset of cell populations plus normal contamination.

    The populations are referred to by their id in the LineageTree the sample
    was drawn from.

    Args:
        population_counts: Number of cells drawn from each population. Only
            populations that received at least one cell are present
        n_normal_cells: Number of normal (diploid, mutation-free) cells
        subclones: Populations selected into the sample, in selection order.
            A population may appear more than once and may have received no
            cells
        color: RGB color of the sample, used for visualization
        n_cnv_affected_snvs: Number of distinct SNVs whose locus is affected by
            a CNV in the sample. Set when CNV-aware allele frequencies are
            computed
    """

    population_counts: Dict[int, int] = field(default_factory=dict)
    n_normal_cells: int = 0
    subclones: List[int] = field(default_factory=list)
    color: Tuple[int, int, int] = (255, 255, 255)
    n_cnv_affected_snvs: Optional[int] = None

    @property
    def n_subclones(self) -> int:
        return len(self.population_counts)

    @property
    def n_tumor_cells(self) -> int:
        return sum(self.population_counts.values())

    @property
    def n_cells(self) -> int:
        return self.n_tumor_cells + self.n_normal_cells

    def get_composition(self, tree) -> str:
        """Describes the populations in the sample.

        One line per population: its name, the number of sampled cells, and
        the names of all its mutations.

        Args:
            tree: The LineageTree the sample was drawn from
        """
        lines = []
        for node, count in self.population_counts.items():
            population = tree.get_population(node)
            names = "".join(m.name + " " for m in population.mutations)
            lines.append(f"{population.name}: {count} ({names})")
        return "".join(line + "\n" for line in lines)
