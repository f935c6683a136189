class StepSorterError(Exception):
    """Base class for everything the engine raises."""


class InvalidStepError(StepSorterError):
    """A Step referenced an index outside the buffer it is applied to.

    This is always a driver bug, never a runtime condition to recover from.
    """


class UnknownAlgorithmError(StepSorterError, KeyError):
    pass
