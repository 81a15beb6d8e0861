"""Top level for mixins."""

from clonalsim.mixins.errors import (
    LineageTreeError,
    SimulationPipelineError,
    TreeSimulatorError,
    TumorSamplerError,
    UnspecifiedConfigParameterError,
    VariantAlleleFrequencyError,
)
from clonalsim.mixins.logging import logger
from clonalsim.mixins.warnings import ParameterWarning, TumorSamplerWarning
