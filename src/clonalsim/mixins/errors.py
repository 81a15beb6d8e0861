class LineageTreeError(Exception):
    """An Exception class for the LineageTree class."""

    pass


class SimulationPipelineError(Exception):
    """An Exception class for the simulation pipeline driver."""

    pass


class TreeSimulatorError(Exception):
    """An Exception class for all TreeSimulator subclasses."""

    pass


class TumorSamplerError(Exception):
    """An Exception class for all TumorSampler subclasses."""

    pass


class UnspecifiedConfigParameterError(Exception):
    pass


class VariantAlleleFrequencyError(Exception):
    """An Exception class for allele frequency and read noise computations."""

    pass
