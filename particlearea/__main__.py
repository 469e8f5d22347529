# particlearea/__main__.py
# Entry point for running particlearea as a module: python -m particlearea
"""
particlearea - particle count and area from a micrograph

Usage:
    python -m particlearea [CLEAN_IMAGE] [CONTOUR_IMAGE] [options]

    CLEAN_IMAGE     image the outlines are extracted from (default: clearImg.jpg)
    CONTOUR_IMAGE   image the outlines are drawn on (default: img.png)

Options:
    --config FILE   JSON object overriding configuration values
    --verbose, -v   debug logging
    --help, -h      show this help
"""
from __future__ import annotations

import logging
import sys

from .core.config import DEFAULTS, load_config
from .core.errors import EmptyOutlineSet, InvalidImage, WriteFailure
from .core.pipeline import run_pipeline


def _report(result, unit_label: str) -> None:
    print(f"Point count: {result.point_count}")
    print(f"Area: {result.area} {unit_label}")


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)

    if any(a in ("-h", "--help", "help") for a in args):
        print(__doc__)
        return 0

    verbose = False
    config_path = None
    paths = []
    i = 0
    while i < len(args):
        a = args[i]
        if a in ("-v", "--verbose"):
            verbose = True
        elif a == "--config":
            if i + 1 >= len(args):
                print("--config needs a file argument", file=sys.stderr)
                return 2
            config_path = args[i + 1]
            i += 1
        elif a.startswith("-"):
            print(f"Unknown option: {a}", file=sys.stderr)
            return 2
        else:
            paths.append(a)
        i += 1

    if len(paths) > 2:
        print("Expected at most two image paths", file=sys.stderr)
        return 2

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(asctime)s [%(levelname)s] %(message)s')

    try:
        config = load_config(config_path) if config_path else DEFAULTS
    except (OSError, ValueError) as e:
        print(f"Bad configuration: {e}", file=sys.stderr)
        return 2

    clean_path = paths[0] if len(paths) > 0 else None
    contour_path = paths[1] if len(paths) > 1 else None

    try:
        result = run_pipeline(clean_path, contour_path, config)
    except (InvalidImage, EmptyOutlineSet) as e:
        print(f"Measurement failed: {e}", file=sys.stderr)
        return 2
    except WriteFailure as e:
        if e.result is not None:
            _report(e.result, config.unit_label)
        print(f"Output not written: {e}", file=sys.stderr)
        return 1

    _report(result, config.unit_label)
    return 0


if __name__ == "__main__":
    sys.exit(main())
