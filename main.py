#!/usr/bin/env python3
"""
Batch Regex Rename - Main Entry

Preview and apply a regular expression rename over the files given on
the command line.

Usage:
    python main.py FILE...                  # Rename the given files
    python main.py --ignore-case FILE...    # Case-insensitive find pattern
    python main.py --log-dir ./logs FILE... # Save a JSON result log
    python main.py -v FILE...               # Debug output on stderr

Keys:
    q   Quit (outside of text fields)
    `   Toggle the debug console
"""

import sys
import argparse
import logging
from pathlib import Path

# Ensure the current directory is in the Python path
sys.path.insert(0, str(Path(__file__).parent))

from rename_core import RenameOptions

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="regex-rename",
        description="Batch rename files with a regular expression",
    )
    parser.add_argument("paths", nargs="*", help="Files to rename")
    parser.add_argument("--ignore-case", "-i", action="store_true",
                        help="Case-insensitive find pattern")
    parser.add_argument("--case-insensitive-detect", action="store_true",
                        help="Treat names differing only in case as conflicts")
    parser.add_argument("--log-dir", type=Path, default=None,
                        help="Directory for the JSON result log")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING",
                        help="Level of messages written to stderr")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Same as --log-level DEBUG")
    return parser


def configure_logging(level: str) -> None:
    """stderr gets `level` and up; the debug console sees everything"""
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=logging.DEBUG, handlers=[handler])


def options_from_args(args: argparse.Namespace) -> RenameOptions:
    """Build rename options from parsed arguments"""
    return RenameOptions(
        ignore_case=args.ignore_case,
        case_insensitive_detect=args.case_insensitive_detect,
        log_dir=args.log_dir,
    )


def main(argv=None):
    """Main entry point"""
    args = create_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else args.log_level)

    try:
        from rename_gui import main as gui_main
    except ImportError as e:
        print(f"Error: Unable to start GUI, please ensure PySide6 is installed")
        print(f"Detailed error: {e}")
        print("\nInstall command: pip install PySide6")
        return 1

    return gui_main(args.paths, options_from_args(args))


if __name__ == "__main__":
    sys.exit(main())
