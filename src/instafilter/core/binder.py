"""
Filter Parameter Binder - Maps slider values onto the active filter.

The binder holds:
- the active FilterSelection (exactly one at a time)
- the current value of every slider parameter
- a reference to the input image, if one has been set
- the last output image

Any change to the filter or a parameter re-applies the filter when an
input image is bound. Only the parameters the active filter declares are
forwarded to it.
"""

from __future__ import annotations

import logging

from instafilter.core.data_types import ImageData
from instafilter.errors import NoInputImageError
from instafilter.filters.filter_registry import (
    FilterSelection,
    FilterSpec,
    default_parameters,
    get_filter,
    get_parameter,
)
from instafilter.filters.pillow_runner import FilterRunner

logger = logging.getLogger(__name__)


class FilterParameterBinder:
    """
    Binds a filter selection and slider values to filter evaluation.

    Usage:
        binder = FilterParameterBinder()
        binder.select_filter("pixellate")
        binder.set_parameter("scale", 5)
        output = binder.apply(image)
    """

    def __init__(
        self,
        selection: FilterSelection | str = FilterSelection.SEPIA_TONE,
        runner: FilterRunner | None = None,
    ):
        self._runner = runner or FilterRunner()
        self._spec: FilterSpec = get_filter(selection)
        self._chosen = False
        self._parameters: dict[str, float] = default_parameters()
        self._input: ImageData | None = None
        self._output: ImageData | None = None

    @property
    def selection(self) -> FilterSelection:
        """The active filter."""
        return self._spec.selection

    @property
    def filter_spec(self) -> FilterSpec:
        return self._spec

    @property
    def filter_label(self) -> str:
        """
        Button label for the active filter.

        Reads "Change filter" until a filter has been picked with
        `select_filter`, even though the start-up filter is already active.
        """
        if not self._chosen:
            return FilterSelection.NONE.display_name
        return self._spec.selection.display_name

    @property
    def parameters(self) -> dict[str, float]:
        """Copy of the current slider values."""
        return dict(self._parameters)

    @property
    def input_image(self) -> ImageData | None:
        return self._input

    @property
    def output(self) -> ImageData | None:
        """Result of the last successful apply, None when cleared."""
        return self._output

    def reset(self) -> None:
        """Restore every parameter to its default and clear the output."""
        self._parameters = default_parameters()
        self._output = None

    def select_filter(self, filter_id: FilterSelection | str) -> ImageData | None:
        """
        Make a filter active.

        Parameters are reset to their defaults and the output is cleared.
        If an input image is bound it is re-filtered straight away.

        Raises:
            UnknownFilterError: If the filter is not registered
        """
        self._spec = get_filter(filter_id)
        self._chosen = True
        self.reset()
        logger.debug(f"Selected filter {self._spec.id}")
        return self._reapply()

    def set_input_image(self, image: ImageData | None) -> ImageData | None:
        """
        Bind (reference) an input image, reset parameters and apply.

        Passing None unbinds the image and clears the output.
        """
        self._input = image
        self.reset()
        return self._reapply()

    def set_parameter(self, name: str, value: float) -> ImageData | None:
        """
        Update one slider value and re-apply.

        The value is clamped to the parameter's declared range. Parameters
        the active filter does not accept are still stored so they carry
        over, but they have no effect on the output.

        Returns:
            The new output, or None if no input image is bound

        Raises:
            UnknownParameterError: If the name is not a declared parameter
            InvalidParameterError: If value is NaN or infinite
        """
        param = get_parameter(name)
        self._parameters[name] = param.clamp(value)
        return self._reapply()

    def forwarded_parameters(self) -> dict[str, float]:
        """The subset of parameters the active filter accepts."""
        return {
            name: value
            for name, value in self._parameters.items()
            if self._spec.accepts(name)
        }

    def apply(self, input_image: ImageData | None = None) -> ImageData:
        """
        Evaluate the active filter.

        Args:
            input_image: Image to filter; defaults to the bound input image

        Returns:
            The filtered image, also kept as `output`

        Raises:
            NoInputImageError: If no image was passed or bound
            NoOutputError: If the filter produced nothing
            FilterExecutionError: If the image library failed
        """
        image = input_image if input_image is not None else self._input
        if image is None:
            self._output = None
            raise NoInputImageError("Cannot apply a filter before an image is set")

        self._output = None
        self._output = self._runner.apply_filter(
            image, self._spec.selection, self.forwarded_parameters()
        )
        return self._output

    def _reapply(self) -> ImageData | None:
        if self._input is None:
            return None
        return self.apply()
