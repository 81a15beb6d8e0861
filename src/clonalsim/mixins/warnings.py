class ParameterWarning(UserWarning):
    """A warning for simulation parameters that were adjusted."""

    pass


class TumorSamplerWarning(UserWarning):

    pass
