# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for gpmeta

Prints Guitar Pro header metadata for one or more files.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from gpmeta import __version__
from gpmeta.core import GPMeta
from gpmeta.exceptions import GPMetaError
from gpmeta.metadata_utils import collect_guitar_pro_files


def format_output(metadata: Dict[str, Any], format_type: str = "text") -> str:
    """
    Format metadata output based on format type.

    Args:
        metadata: Dictionary of metadata
        format_type: Output format ('text', 'json', 'csv')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(metadata, indent=2, ensure_ascii=False)
    elif format_type == "csv":
        lines = ["Tag,Value"]
        for tag, value in sorted(metadata.items()):
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            # Escape quotes in CSV
            value_str = str(value).replace('"', '""')
            lines.append(f'"{tag}","{value_str}"')
        return "\n".join(lines)
    else:  # text format (default)
        lines = []
        for tag, value in sorted(metadata.items()):
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            lines.append(f"{tag}: {value}")
        return "\n".join(lines)


def read_metadata(file_path: Path) -> Dict[str, Any]:
    """
    Read metadata from a file.

    Args:
        file_path: Path to the Guitar Pro file

    Returns:
        Group-prefixed metadata dictionary

    Raises:
        GPMetaError: If the file cannot be read
    """
    with GPMeta(file_path) as gp:
        return gp.get_all_metadata()


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpmeta",
        description="gpmeta - Read Guitar Pro (GP3/GP4/GP5/GPX/GP7+) header metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read all metadata
  gpmeta song.gp5

  # Read in JSON format
  gpmeta -j song.gp

  # Recursive processing
  gpmeta -r /path/to/tabs
        """
    )
    parser.add_argument('files', nargs='*', help='File(s) or directory(ies) to process')
    parser.add_argument('-r', '--recurse', action='store_true', help='Recursively process directories')
    parser.add_argument('-j', '--json', action='store_true', help='Output metadata in JSON format')
    parser.add_argument('-csv', action='store_true', help='Output metadata in CSV format')
    parser.add_argument('-q', '--quiet', action='store_true', help='Quiet mode (only errors are logged)')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Verbose logging (-vv for debug)')
    parser.add_argument('-V', '--version', action='store_true', help='Print version number')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0
    if not args.files:
        parser.error("at least one file is required")

    _configure_logging(args.verbose, args.quiet)

    format_type = "json" if args.json else "csv" if args.csv else "text"
    files = collect_guitar_pro_files(args.files, recurse=args.recurse)

    exit_code = 0
    json_results = []
    for file_path in files:
        try:
            metadata = read_metadata(file_path)
        except GPMetaError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            exit_code = 1
            continue

        if format_type == "json":
            json_results.append({'SourceFile': str(file_path), **metadata})
        else:
            if len(files) > 1:
                print(f"======== {file_path}")
            print(format_output(metadata, format_type))

    if format_type == "json":
        print(json.dumps(json_results, indent=2, ensure_ascii=False))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
