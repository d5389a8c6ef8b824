"""
Instafilter - Main Entry Point

Applies one filter to a photo and saves the result to the album:

    instafilter photo.jpg --filter pixellate --scale 5
    instafilter --list-filters
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from instafilter.core.session import EditorSession
from instafilter.core.settings import load_settings
from instafilter.errors import FilterError
from instafilter.filters.filter_registry import (
    PARAMETERS,
    get_categories,
    get_filter_registry,
    get_filters_by_category,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="instafilter",
        description="Apply an image filter to a photo and save it to the album",
    )
    parser.add_argument("input", nargs="?", type=Path, help="Photo to filter")
    parser.add_argument(
        "--filter",
        dest="filter_id",
        default=None,
        choices=sorted(get_filter_registry()),
        help="Filter to apply (default: from settings)",
    )
    for name, param in PARAMETERS.items():
        bounds = ""
        if param.min_value is not None and param.max_value is not None:
            bounds = f", {param.min_value:g}-{param.max_value:g}"
        parser.add_argument(
            f"--{name}",
            type=float,
            default=None,
            help=f"{param.description} (default {param.default:g}{bounds})",
        )
    parser.add_argument("--output", type=Path, default=None, help="Album directory to save into")
    parser.add_argument("--config", type=Path, default=None, help="Settings file to use")
    parser.add_argument("--list-filters", action="store_true", help="List available filters")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def list_filters() -> None:
    print("Available filters:")
    for category in get_categories():
        print(f"  {category}")
        for spec in get_filters_by_category(category):
            accepts = ", ".join(spec.params) or "no parameters"
            print(f"    {spec.id:<14} {spec.name} ({accepts})")


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for Instafilter.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_filters:
        list_filters()
        return 0

    if args.input is None:
        parser.print_usage()
        print("Error: an input photo is required")
        return 1

    try:
        settings = load_settings(args.config)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.output is not None:
        settings.album_directory = args.output

    try:
        session = EditorSession(settings)
        session.load_image(args.input)
        if args.filter_id is not None:
            session.choose_filter(args.filter_id)
        for name in PARAMETERS:
            value = getattr(args, name)
            if value is not None:
                session.set_slider(name, value)
    except (OSError, FilterError) as e:
        print(f"Error: {e}")
        return 1

    path = session.save()
    if path is None:
        alert = session.alert
        print(f"{alert.title}: {alert.message}" if alert else "Error: image was not saved")
        return 1

    print(f"{session.binder.filter_spec.name}: saved to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
