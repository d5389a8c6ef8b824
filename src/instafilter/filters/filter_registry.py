"""
Filter Registry - The available filters and the parameters they accept.

This module defines FilterParam and FilterSpec dataclasses for describing
filters and their parameters, along with the registry of the eight filters
offered in the filter picker.

Every filter draws from the same three slider parameters (intensity,
radius, scale). A FilterSpec lists which of them it accepts; the rest are
never forwarded to it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from instafilter.errors import (
    InvalidParameterError,
    UnknownFilterError,
    UnknownParameterError,
)


class FilterSelection(Enum):
    """The single active filter. Values are the registry ids."""
    CRYSTALLIZE = "crystallize"
    EDGES = "edges"
    GAUSSIAN_BLUR = "gaussian_blur"
    PIXELLATE = "pixellate"
    SEPIA_TONE = "sepia_tone"
    UNSHARP_MASK = "unsharp_mask"
    VIGNETTE = "vignette"
    NONE = "none"

    @property
    def display_name(self) -> str:
        """Label shown on the filter picker button."""
        if self is FilterSelection.NONE:
            return "Change filter"
        return _FILTERS[self].name

    @classmethod
    def from_id(cls, value: FilterSelection | str) -> FilterSelection:
        """
        Parse a filter id ("sepia_tone"), enum name ("SEPIA_TONE") or
        display name ("Sepia Tone").

        Raises:
            UnknownFilterError: If nothing matches
        """
        if isinstance(value, FilterSelection):
            return value

        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        for selection in cls:
            if key == selection.value:
                return selection

        raise UnknownFilterError(f"Unknown filter: {value}")


@dataclass
class FilterParam:
    """
    Specification for a slider parameter.

    Attributes:
        name: Parameter name (also used as label)
        default: Value restored whenever a filter is selected
        min_value: Minimum value, None for unconstrained
        max_value: Maximum value, None for unconstrained
        description: Optional description for help text
    """
    name: str
    default: float = 0.0
    min_value: float | None = None
    max_value: float | None = None
    description: str = ""

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def clamp(self, value: float) -> float:
        """
        Constrain value to the declared range, if any.

        Raises:
            InvalidParameterError: If value is NaN or infinite
        """
        value = float(value)
        if not math.isfinite(value):
            raise InvalidParameterError(f"{self.label} must be a finite number, got {value}")
        if self.min_value is not None and value < self.min_value:
            value = self.min_value
        if self.max_value is not None and value > self.max_value:
            value = self.max_value
        return value


@dataclass
class FilterSpec:
    """
    Specification for a filter.

    Attributes:
        selection: Enum member identifying the filter
        name: Display name
        category: Filter category for grouping
        params: Names of the slider parameters the filter accepts
        description: Filter description
    """
    selection: FilterSelection
    name: str
    category: str
    params: list[str] = field(default_factory=list)
    description: str = ""

    @property
    def id(self) -> str:
        return self.selection.value

    def accepts(self, param_name: str) -> bool:
        """Check whether the filter declares the named parameter."""
        return param_name in self.params


# Slider parameters shared by all filters
PARAMETERS: dict[str, FilterParam] = {
    "intensity": FilterParam(
        "intensity", default=1.0,
        description="Effect strength",
    ),
    "radius": FilterParam(
        "radius", default=200.0, min_value=1.0, max_value=200.0,
        description="Effect radius in pixels",
    ),
    "scale": FilterParam(
        "scale", default=10.0, min_value=1.0, max_value=10.0,
        description="Effect scale in pixels",
    ),
}


def get_parameter(name: str) -> FilterParam:
    """
    Get a slider parameter by name.

    Raises:
        UnknownParameterError: If the name is not a declared parameter
    """
    try:
        return PARAMETERS[name]
    except KeyError:
        raise UnknownParameterError(
            f"Unknown parameter: {name} (expected one of {', '.join(PARAMETERS)})"
        ) from None


def default_parameters() -> dict[str, float]:
    """Fresh mapping of every slider parameter to its default."""
    return {name: param.default for name, param in PARAMETERS.items()}


# Filter registry
_FILTERS: dict[FilterSelection, FilterSpec] = {}


def _register(spec: FilterSpec) -> FilterSpec:
    """Register a filter specification."""
    _FILTERS[spec.selection] = spec
    return spec


def get_filter_registry() -> dict[str, FilterSpec]:
    """Get the complete filter registry keyed by filter id."""
    return {spec.id: spec for spec in _FILTERS.values()}


def get_filter(filter_id: FilterSelection | str) -> FilterSpec:
    """
    Get a specific filter by id or selection.

    Raises:
        UnknownFilterError: If the filter is not registered
    """
    return _FILTERS[FilterSelection.from_id(filter_id)]


def get_filters_by_category(category: str) -> list[FilterSpec]:
    """Get all filters in a category."""
    return [f for f in _FILTERS.values() if f.category == category]


def get_categories() -> list[str]:
    """Get list of all filter categories."""
    return sorted(set(f.category for f in _FILTERS.values()))


# =============================================================================
# STYLIZE FILTERS
# =============================================================================

_register(FilterSpec(
    selection=FilterSelection.CRYSTALLIZE,
    name="Crystallize",
    category="Stylize",
    params=["radius"],
    description="Polygonal colour cells, cell size set by radius",
))

_register(FilterSpec(
    selection=FilterSelection.EDGES,
    name="Edges",
    category="Stylize",
    params=["intensity"],
    description="Edge detection, brightness set by intensity",
))

_register(FilterSpec(
    selection=FilterSelection.PIXELLATE,
    name="Pixellate",
    category="Stylize",
    params=["scale"],
    description="Square blocks of scale pixels",
))

_register(FilterSpec(
    selection=FilterSelection.VIGNETTE,
    name="Vignette",
    category="Stylize",
    params=["intensity", "radius"],
    description="Darkens the corners",
))

# =============================================================================
# BLUR & SHARPEN
# =============================================================================

_register(FilterSpec(
    selection=FilterSelection.GAUSSIAN_BLUR,
    name="Gaussian Blur",
    category="Blur",
    params=["radius"],
    description="Standard Gaussian blur",
))

_register(FilterSpec(
    selection=FilterSelection.UNSHARP_MASK,
    name="Unsharp Mask",
    category="Sharpen",
    params=["intensity", "radius"],
    description="Unsharp mask sharpening",
))

# =============================================================================
# COLOR
# =============================================================================

_register(FilterSpec(
    selection=FilterSelection.SEPIA_TONE,
    name="Sepia Tone",
    category="Color",
    params=["intensity"],
    description="Warm brown tint",
))

_register(FilterSpec(
    selection=FilterSelection.NONE,
    name="None",
    category="Color",
    params=[],
    description="Leaves the image unchanged",
))
