# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
gpmeta - Guitar Pro header metadata reader

Reads title, artist, album, tempo and track names from Guitar Pro
files (GP3, GP4, GP5, GPX and GP7+) without parsing the score.
All parsing is done by directly reading the binary file structures.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from gpmeta.core import GPMeta, parse_gp_header
from gpmeta.exceptions import GPMetaError, MetadataReadError, ContainerCorruptError
from gpmeta.format_detector import FormatDetector
from gpmeta.header_info import GpHeaderInfo, empty_result, DEFAULT_TEMPO
from gpmeta.string_decoder import decode_string
from gpmeta.metadata_utils import (
    batch_read_metadata,
    collect_guitar_pro_files,
    has_gp_signature,
)

__all__ = [
    "GPMeta",
    "parse_gp_header",
    "GPMetaError",
    "MetadataReadError",
    "ContainerCorruptError",
    "FormatDetector",
    "GpHeaderInfo",
    "empty_result",
    "DEFAULT_TEMPO",
    "decode_string",
    "batch_read_metadata",
    "collect_guitar_pro_files",
    "has_gp_signature",
]
