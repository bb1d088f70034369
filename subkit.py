#!/usr/bin/env python3
"""
subkit - Main Application Entry Point
=====================================

A command-line toolkit for subtitle tracks in Matroska files:
- Subtitle track listing and interactive extraction
- Two-color subtitle merging
- Subtitle timing shifts
- Batch extract-and-merge over a directory

Requires mkvtoolnix (mkvmerge and mkvextract) for anything that reads
container files.

Usage:
    python subkit.py tracks episode01.mkv
    python subkit.py extract episode01.mkv subs/ --count 2
    python subkit.py merge en.srt ja.srt merged.srt --color1 white --color2 yellow
    python subkit.py shift 1500 episode01.srt shifted.srt
    python subkit.py bem /media/show/season1

    # Help
    python subkit.py --help
    python subkit.py <command> --help
"""

import platform
import shutil
import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from utils.constants import APP_NAME, APP_VERSION, MKVEXTRACT_BINARY, MKVMERGE_BINARY
from ui.cli import CLIHandler


def main():
    """
    Main application entry point.

    Parses the command line and dispatches to the CLI handler; the handler's
    return value becomes the process exit status.
    """
    cli_handler = CLIHandler()
    cli_parser = cli_handler.create_parser()

    args = cli_parser.parse_args()
    sys.exit(cli_handler.handle_command(args))


def check_dependencies():
    """
    Check that the external mkvtoolnix programs are available.

    Prints a warning for each missing program.
    """
    missing = [tool for tool in (MKVMERGE_BINARY, MKVEXTRACT_BINARY)
               if shutil.which(tool) is None]

    if missing:
        print("External programs not found on PATH:")
        for tool in missing:
            print(f"  - {tool} (part of mkvtoolnix)")
        print("\nContainer commands (tracks, extract, bem) will fail without them.\n")


def print_system_info():
    """Print system and application information."""
    print(f"{APP_NAME} v{APP_VERSION}")
    print(f"Python {platform.python_version()}")
    print(f"Platform: {platform.system()} {platform.release()}")
    print()


if __name__ == '__main__':
    # Print system info in debug mode
    if '--debug' in sys.argv or '-d' in sys.argv:
        print_system_info()
        check_dependencies()

    main()
