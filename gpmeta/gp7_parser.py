# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
GP7 / GP8 (.gp) parser

A .gp file is a plain ZIP archive containing:
- Content/score.gpif: UTF-8 GPIF document
- Content/BinaryStylesheet
- Content/Assets/: attachments such as audio tracks
- meta.json, VERSION

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Optional

from gpmeta.gpif_parser import GPIFParser
from gpmeta.header_info import GpHeaderInfo, empty_result
from gpmeta.zip_parser import ZIPParser

logger = logging.getLogger(__name__)

GP7_VERSION = "GP7+"


class GP7Parser:
    """
    Parser for GP7+ ZIP archives.

    Always returns a record tagged "GP7+"; on failure it is the empty one.
    """

    SCORE_ENTRY = 'Content/score.gpif'

    def __init__(self, file_path: Optional[str] = None, file_data: Optional[bytes] = None):
        """
        Initialize GP7+ parser.

        Args:
            file_path: Path to .gp file
            file_data: Raw file data
        """
        if file_path:
            self.file_path = Path(file_path)
            self.file_data = None
        elif file_data is not None:
            self.file_data = file_data
            self.file_path = None
        else:
            raise ValueError("Either file_path or file_data must be provided")

    def parse(self) -> GpHeaderInfo:
        if self.file_data is None:
            with open(self.file_path, 'rb') as f:
                self.file_data = f.read()

        gpif_data = ZIPParser(file_data=self.file_data).extract(self.SCORE_ENTRY)
        if gpif_data is None:
            logger.error("%s not found in ZIP (size=%d)", self.SCORE_ENTRY, len(self.file_data))
            return empty_result(GP7_VERSION)

        xml = gpif_data.decode('utf-8', errors='replace')
        return GPIFParser(xml).parse(version=GP7_VERSION)
