# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
GPIF (score.gpif) metadata extractor

GPIF is the XML document inside GP6 containers and GP7+ archives.
Documents found inside a container are frequently cut short or mixed
with binary data, so fields are located with regular expressions
instead of a full XML parse.

Copyright 2025 DNAi inc.
"""

import math
import re
from typing import List

from gpmeta.header_info import GpHeaderInfo, clamp_tempo, DEFAULT_TEMPO


# <Type>Tempo</Type> is followed by <Linear>, <Bar>, <Position> etc.
# before the <Value> inside an <Automation> block
TEMPO_PATTERN = re.compile(r'<Type>Tempo</Type>[\s\S]*?<Value>\s*(\d+(?:\.\d+)?)')

TRACK_NAME_PATTERN = re.compile(
    r'<Track\s[^>]*>[\s\S]*?<Name>(?:<!\[CDATA\[)?([\s\S]*?)(?:\]\]>)?</Name>'
)


def get_tag(xml: str, tag: str) -> str:
    """
    Extract the text of the first <tag> element.

    Supports:
    - CDATA: <Tag><![CDATA[text]]></Tag> (preferred)
    - Plain text: <Tag>text</Tag>

    Args:
        xml: GPIF document text
        tag: Element name

    Returns:
        Trimmed element text, or '' if absent
    """
    name = re.escape(tag)
    cdata_match = re.search(rf'<{name}><!\[CDATA\[([\s\S]*?)\]\]></{name}>', xml)
    if cdata_match:
        return cdata_match.group(1).strip()

    plain_match = re.search(rf'<{name}>([^<]*)</{name}>', xml)
    if plain_match:
        return plain_match.group(1).strip()
    return ''


def extract_tempo(xml: str) -> int:
    """Tempo from the first tempo automation, DEFAULT_TEMPO if missing."""
    match = TEMPO_PATTERN.search(xml)
    if not match:
        return DEFAULT_TEMPO
    value = float(match.group(1))
    if not math.isfinite(value):
        return DEFAULT_TEMPO
    # round half up
    return clamp_tempo(math.floor(value + 0.5))


def extract_track_names(xml: str) -> List[str]:
    names = []
    for match in TRACK_NAME_PATTERN.finditer(xml):
        name = match.group(1).strip()
        if name:
            names.append(name)
    return names


class GPIFParser:
    """
    Parser for GPIF score metadata.

    Extracts title, artist, album, tempo and track names.
    """

    def __init__(self, xml: str):
        self.xml = xml

    def parse(self, version: str = "GPX") -> GpHeaderInfo:
        return GpHeaderInfo(
            title=get_tag(self.xml, 'Title'),
            artist=get_tag(self.xml, 'Artist'),
            album=get_tag(self.xml, 'Album'),
            tempo=extract_tempo(self.xml),
            track_names=tuple(extract_track_names(self.xml)),
            version=version,
        )
