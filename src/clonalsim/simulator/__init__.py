"""Top level for simulator."""

from .ClonalEvolutionSimulator import ClonalEvolutionSimulator
from .LocalizedTumorSampler import LocalizedTumorSampler
from .MutationGenerator import MutationGenerator
from .RandomTumorSampler import RandomTumorSampler
from .TreeSimulator import TreeSimulator
from .TumorSampler import TumorSampler

__all__ = [
    "ClonalEvolutionSimulator",
    "LocalizedTumorSampler",
    "MutationGenerator",
    "RandomTumorSampler",
    "TreeSimulator",
    "TumorSampler",
]
