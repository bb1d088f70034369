"""
Command-line interface for subkit.

This module wires the subtitle operations to argparse subcommands:
track listing, extraction, merging, shifting and batch extract-merge.
"""

import argparse
import logging
import sys
from pathlib import Path

from core.exceptions import SubtitleToolError
from core.video_containers import VideoContainerHandler
from processors.batch_processor import BatchProcessor
from processors.extractor import SubtitleExtractor
from processors.merger import SubtitleMerger, SubtitleSource
from processors.timing_adjuster import TimingAdjuster
from utils.config import ToolConfig
from utils.constants import APP_NAME, APP_VERSION, APP_DESCRIPTION, MKVEXTRACT_BINARY, MKVMERGE_BINARY
from utils.logging_config import setup_logging
from .interactive import TrackSelector, print_tracks

logger = None  # Will be initialized in setup_cli_logging


def setup_cli_logging(verbose: bool = False, debug: bool = False, use_colors: bool = True,
                      log_file: Path = None):
    """Set up logging for CLI operations."""
    global logger

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = setup_logging(level=level, log_file=log_file, use_colors=use_colors)
    return logger


class CLIHandler:
    """Handles command-line interface operations."""

    def __init__(self, selector: TrackSelector = None):
        """
        Initialize the CLI handler.

        Args:
            selector: Track selector used by interactive commands
        """
        self.selector = selector or TrackSelector()

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create the main argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog=APP_NAME,
            description=APP_DESCRIPTION,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # List subtitle tracks
  subkit tracks episode01.mkv

  # Merge two subtitle files
  subkit merge en.srt ja.srt merged.srt --color2 cyan

  # Delay a subtitle by 1.5 seconds
  subkit shift 1500 episode01.srt

  # Extract and merge two tracks for every MKV in a directory
  subkit bem /media/show/season1
            """
        )

        parser.add_argument('--version', action='version', version=f'{APP_NAME} {APP_VERSION}')
        parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--no-colors', action='store_true', help='Disable colored output')
        parser.add_argument('--log-file', type=Path, metavar='PATH', help='Also write log output to a file')
        parser.add_argument('--mkvmerge', default=MKVMERGE_BINARY, metavar='PATH',
                            help=f'mkvmerge executable (default: {MKVMERGE_BINARY})')
        parser.add_argument('--mkvextract', default=MKVEXTRACT_BINARY, metavar='PATH',
                            help=f'mkvextract executable (default: {MKVEXTRACT_BINARY})')
        parser.add_argument('--timeout', type=int, metavar='SECONDS',
                            help='Timeout for one mkvtoolnix run')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        self._add_tracks_parser(subparsers)
        self._add_extract_parser(subparsers)
        self._add_merge_parser(subparsers)
        self._add_shift_parser(subparsers)
        self._add_batch_parser(subparsers)

        return parser

    def _add_tracks_parser(self, subparsers):
        """Add tracks command parser."""
        tracks_parser = subparsers.add_parser(
            'tracks',
            help='List subtitle tracks of an MKV file'
        )
        tracks_parser.add_argument('input', type=Path, help='Path to an MKV file')

    def _add_extract_parser(self, subparsers):
        """Add extract command parser."""
        extract_parser = subparsers.add_parser(
            'extract',
            help='Extract subtitles from an MKV file',
            description='Choose subtitle tracks interactively and extract them'
        )
        extract_parser.add_argument('input', type=Path, help='Path to an MKV file')
        extract_parser.add_argument('output', type=Path, help='Output directory')
        extract_parser.add_argument('-n', '--count', type=int, default=1,
                                    help='Number of tracks to extract (default: 1)')

    def _add_merge_parser(self, subparsers):
        """Add merge command parser."""
        merge_parser = subparsers.add_parser(
            'merge',
            help='Merge 2 subtitles',
            description='Merge two SRT files into one two-color SRT file'
        )
        merge_parser.add_argument('sub1', type=Path, help='Path to first subtitle file (default color: white)')
        merge_parser.add_argument('sub2', type=Path, help='Path to second subtitle file (default color: yellow)')
        merge_parser.add_argument('output', type=Path, help='Path to output file')
        merge_parser.add_argument('--color1', help='Color of sub1 after merging (default: white)')
        merge_parser.add_argument('--color2', help='Color of sub2 after merging (default: yellow)')

    def _add_shift_parser(self, subparsers):
        """Add shift command parser."""
        shift_parser = subparsers.add_parser(
            'shift',
            help='Shift all timestamps in a subtitle',
            description='Shift all timestamps; e.g. 1500, -1500ms, 2.5s or 00:00:02,500'
        )
        # Negative offsets with a unit ("-2.5s") must follow "--"
        shift_parser.add_argument('offset', help='Time to shift (+ to delay, - to speed up), milliseconds by default')
        shift_parser.add_argument('input', type=Path, help='Path to subtitle file')
        shift_parser.add_argument('output', type=Path, nargs='?', help='Path to output file (default: overwrite input)')
        shift_parser.add_argument('-b', '--backup', action='store_true',
                                  help='Back up the input before overwriting it')

    def _add_batch_parser(self, subparsers):
        """Add batch extract-merge command parser."""
        batch_parser = subparsers.add_parser(
            'bem',
            help='Batch Extract Merge',
            description='Extract two subtitle tracks from every MKV file in a directory and merge them'
        )
        batch_parser.add_argument('directory', type=Path, help='Path of the directory containing MKV files')
        batch_parser.add_argument('--keep-going', action='store_true',
                                  help='Continue with the next file when one fails')
        batch_parser.add_argument('--extension', action='append', dest='extensions', metavar='EXT',
                                  help='Container extension to include (repeatable, default: .mkv)')

    def build_config(self, args) -> ToolConfig:
        """Build the tool configuration from parsed arguments."""
        settings = {
            'mkvmerge_path': args.mkvmerge,
            'mkvextract_path': args.mkvextract,
        }
        if args.timeout is not None:
            settings['command_timeout'] = args.timeout
        if getattr(args, 'extensions', None):
            settings['container_extensions'] = args.extensions
        return ToolConfig(**settings)

    def handle_command(self, args) -> int:
        """
        Handle the parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        setup_cli_logging(args.verbose, args.debug, use_colors=not args.no_colors,
                          log_file=args.log_file)

        if not args.command:
            logger.error("No command specified. Use --help for usage information.")
            return 1

        handlers = {
            'tracks': self._handle_tracks,
            'extract': self._handle_extract,
            'merge': self._handle_merge,
            'shift': self._handle_shift,
            'bem': self._handle_batch,
        }
        handler = handlers.get(args.command)
        if handler is None:
            logger.error(f"Unknown command: {args.command}")
            return 1

        try:
            config = self.build_config(args)
            return handler(args, config)
        except KeyboardInterrupt:
            logger.error("Operation cancelled by user")
            return 1
        except (SubtitleToolError, OSError, ValueError) as e:
            logger.error(str(e))
            if args.debug:
                import traceback
                traceback.print_exc()
            return 1

    def _handle_tracks(self, args, config: ToolConfig) -> int:
        """Handle tracks command."""
        tracks = VideoContainerHandler(config).list_subtitle_tracks(args.input)
        print_tracks(tracks)
        return 0

    def _handle_extract(self, args, config: ToolConfig) -> int:
        """Handle extract command."""
        handler = VideoContainerHandler(config)
        tracks = handler.list_subtitle_tracks(args.input)
        selected = self.selector.select(tracks, args.count)

        extracted = SubtitleExtractor(config, handler).extract(args.input, selected, args.output)
        for path in extracted:
            print(f"Extracted: {path}")
        return 0

    def _handle_merge(self, args, config: ToolConfig) -> int:
        """Handle merge command."""
        SubtitleMerger().merge(
            SubtitleSource(args.sub1, args.color1),
            SubtitleSource(args.sub2, args.color2),
            args.output,
        )
        print(f"Merged subtitles written to: {args.output}")
        return 0

    def _handle_shift(self, args, config: ToolConfig) -> int:
        """Handle shift command."""
        adjuster = TimingAdjuster(create_backup=args.backup)
        offset_ms = adjuster.parse_offset_string(args.offset)
        output_path = adjuster.shift(offset_ms, args.input, args.output)
        print(f"Shifted subtitles written to: {output_path}")
        return 0

    def _handle_batch(self, args, config: ToolConfig) -> int:
        """Handle batch extract-merge command."""
        processor = BatchProcessor(config, selector=self.selector, keep_going=args.keep_going)
        results = processor.run(args.directory)

        print(f"\nProcessed {results['total']} file(s): "
              f"{results['successful']} merged, {results['failed']} failed")
        for path in results['processed_files']:
            print(f"  {path}")
        for error in results['errors']:
            print(f"  {error}", file=sys.stderr)

        return 0 if results['failed'] == 0 else 1


def main():
    """Main entry point for CLI."""
    cli = CLIHandler()
    parser = cli.create_parser()
    args = parser.parse_args()

    exit_code = cli.handle_command(args)
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
