"""
Entry point for running Instafilter as a module.

Usage:
    python -m instafilter photo.jpg --filter sepia_tone --intensity 0.5
"""

import sys

from instafilter.main import main

if __name__ == "__main__":
    sys.exit(main())
