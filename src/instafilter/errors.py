"""
Errors raised while binding, applying and saving filters.
"""


class FilterError(Exception):
    """Base class for all filter errors."""
    pass


class NoOutputError(FilterError):
    """The filter declined to produce an output image."""
    pass


class NoInputImageError(NoOutputError):
    """A filter was applied before an input image was set."""

    def __init__(self, message: str = "No input image set"):
        super().__init__(message)


class UnknownFilterError(FilterError, ValueError):
    """The requested filter id is not in the registry."""
    pass


class UnknownParameterError(FilterError, KeyError):
    """The requested parameter name is not one of the declared parameters."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class FilterExecutionError(FilterError):
    """Error raised by the image library while evaluating a filter."""
    pass


class SaveFailedError(FilterError):
    """The photo album writer reported a failure."""
    pass


class InvalidParameterError(FilterError, ValueError):
    """A slider value is not a finite number."""
    pass
