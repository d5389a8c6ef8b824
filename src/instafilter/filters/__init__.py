"""
Filters module - Filter registry and the Pillow-based filter runner.
"""

from instafilter.filters.pillow_runner import FilterRunner
from instafilter.filters.filter_registry import (
    PARAMETERS,
    FilterParam,
    FilterSelection,
    FilterSpec,
    default_parameters,
    get_filter,
    get_filter_registry,
    get_parameter,
)

__all__ = [
    "FilterRunner",
    "PARAMETERS",
    "FilterParam",
    "FilterSelection",
    "FilterSpec",
    "default_parameters",
    "get_filter",
    "get_filter_registry",
    "get_parameter",
]
