# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Metadata utility functions for common operations.

Batch reading and file selection helpers built on the core API.

Copyright 2025 DNAi inc.
"""

from typing import Callable, Dict, Iterable, List, Optional, Union
from pathlib import Path

from gpmeta.core import GPMeta
from gpmeta.format_detector import FormatDetector
from gpmeta.header_info import GpHeaderInfo
from gpmeta.gpx_parser import BCFS_SIGNATURE, BCFZ_SIGNATURE
from gpmeta.zip_parser import ZIPParser


def has_gp_signature(file_path: Union[str, Path]) -> bool:
    """
    Quickly check if a file looks like a Guitar Pro file.

    Only the first bytes are read. ZIP and BCFZ/BCFS containers are
    recognized by magic number, the binary formats by their
    'GUITAR PRO' version string.

    Args:
        file_path: Path to the file to check

    Returns:
        True if the header matches a Guitar Pro signature
    """
    path = Path(file_path)
    if not path.is_file():
        return False

    with open(path, 'rb') as f:
        header = f.read(FormatDetector.MIN_HEADER_SIZE)

    if len(header) < FormatDetector.MIN_HEADER_SIZE:
        return False
    if header[:4] in (ZIPParser.LOCAL_FILE_SIGNATURE, BCFZ_SIGNATURE, BCFS_SIGNATURE):
        return True
    return b'GUITAR PRO' in header.upper()


def collect_guitar_pro_files(
    paths: Iterable[Union[str, Path]],
    recurse: bool = False,
) -> List[Path]:
    """
    Expand files and directories into a list of Guitar Pro files.

    Explicit file arguments are kept as given; files found inside
    directories are filtered by extension.

    Args:
        paths: Files and/or directories
        recurse: Descend into subdirectories

    Returns:
        Sorted list of paths per directory, in argument order
    """
    files: List[Path] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            candidates = path.rglob('*') if recurse else path.iterdir()
            files.extend(sorted(
                p for p in candidates
                if p.is_file() and FormatDetector.is_guitar_pro_file(p.name)
            ))
        else:
            files.append(path)
    return files


def batch_read_metadata(
    file_paths: Iterable[Union[str, Path]],
    error_handler: Optional[Callable[[Path, Exception], None]] = None,
) -> Dict[Path, GpHeaderInfo]:
    """
    Read Guitar Pro metadata from multiple files in batch.

    Args:
        file_paths: List of file paths to read
        error_handler: Optional callback function for handling errors (path, exception)

    Returns:
        Dictionary mapping file paths to header records. Files that
        could not be read map to the empty record unless an
        error_handler is given, in which case they are omitted.

    Example:
        >>> results = batch_read_metadata(['a.gp5', 'b.gp'])
        >>> print(results[Path('a.gp5')].title)
    """
    results: Dict[Path, GpHeaderInfo] = {}

    for file_path in file_paths:
        path = Path(file_path)
        try:
            with GPMeta(path) as gp:
                results[path] = gp.read()
        except Exception as e:
            if error_handler:
                error_handler(path, e)
            else:
                results[path] = GpHeaderInfo()

    return results
