#!/usr/bin/env python
"""
Collect translation keys from source and template files.

Scans the configured roots for ``trans('...')`` calls, writes one generated
catalog per root into the dump directory, and with ``--append`` adds the new
keys to every existing catalog.

Usage:
    python -m transcollect
    python -m transcollect --project-root ./site --location --append -v
    python -m transcollect --test
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from transcollect import __version__
from transcollect.common.config import load_config
from transcollect.core.collector import TranslationCollector
from transcollect.core.errors import ConfigError

LOG_FORMAT = "%(levelname)s %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcollect",
        description="Collects translations from code.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Scan the default roots of the current project
    transcollect

    # Add source locations to the dump and update existing catalogs
    transcollect --location --append

    # Scan the test fixtures instead
    transcollect --test -v
""",
    )
    parser.add_argument(
        "--project-root",
        default=".",
        help="Project root that configured paths are relative to (default: current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON config file (default: transcollect.json in the project root, if present)",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Run collector on test files.",
    )
    parser.add_argument(
        "--location",
        action="store_true",
        help="Add translation location into dump as comment for each line.",
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Add missing translations for current translation files.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report every scanned file and found key",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(Path(args.project_root), args.config)
    except ConfigError as e:
        logging.getLogger("transcollect").error("%s", e)
        return 1

    collector = TranslationCollector(config, include_locations=args.location)
    return collector.run(test=args.test, append=args.append)


if __name__ == "__main__":
    sys.exit(main())
