"""
Instafilter - Pick a photo, apply a filter, tune it with sliders and save it.
"""

__version__ = "0.1.0"
