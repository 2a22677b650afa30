"""
Deck list dialect registry and detector.

detect_format is total: any text, however malformed, resolves to a handler.
Signatures are checked top to bottom and the first match wins, so narrow
signatures (category tags, CSV header) come before broad ones.
"""

import re

from deckbuilder.formats.arena import ArenaFormat
from deckbuilder.formats.archidekt import ARCHIDEKT_SIGNATURE, ArchidektFormat
from deckbuilder.formats.base import DeckFormatHandler, prepare_lines
from deckbuilder.formats.moxfield import MoxfieldFormat, is_csv_header
from deckbuilder.formats.mtgo import MtgoFormat
from deckbuilder.formats.simple import SimpleFormat
from deckbuilder.models.failure import UnknownFormatError
from deckbuilder.models.parsed import ParsedDeckText

arena_format = ArenaFormat()
moxfield_format = MoxfieldFormat()
archidekt_format = ArchidektFormat()
mtgo_format = MtgoFormat()
simple_format = SimpleFormat()

FORMATS: tuple[DeckFormatHandler, ...] = (
    arena_format,
    moxfield_format,
    archidekt_format,
    mtgo_format,
    simple_format,
)

AUTO_FORMAT = "auto"

# "(M21) 199", "(MH3) 81p"
SET_CODE_SIGNATURE = re.compile(r"\([A-Za-z0-9]+\)\s+\S+")


def get_format(format_id: str) -> DeckFormatHandler | None:
    """Look up a handler by id."""
    for handler in FORMATS:
        if handler.id == format_id:
            return handler
    return None


def detect_format(text: str) -> DeckFormatHandler:
    """
    Pick the handler whose signature matches the text.

    Order:
        1. Archidekt: a "<N>x " line with a [Category] tag
        2. Moxfield CSV: first non-empty line starts with the Count header
        3. Arena: a "(SET) <collector>" decoration on any line
        4. Simple: everything else
    """
    lines = [line for line in prepare_lines(text) if line]

    if any(ARCHIDEKT_SIGNATURE.search(line) for line in lines):
        return archidekt_format

    if lines and is_csv_header(lines[0]):
        return moxfield_format

    if any(SET_CODE_SIGNATURE.search(line) for line in lines):
        return arena_format

    return simple_format


def parse_deck_text(text: str, format_id: str = AUTO_FORMAT) -> ParsedDeckText:
    """
    Parse deck list text with the named dialect, or detect it.

    Args:
        text: Raw deck list text
        format_id: Handler id, or "auto" to detect

    Returns:
        ParsedDeckText with entries and skipped lines

    Raises:
        UnknownFormatError: If format_id is neither "auto" nor registered
    """
    if format_id == AUTO_FORMAT:
        handler = detect_format(text)
    else:
        found = get_format(format_id)
        if found is None:
            raise UnknownFormatError(format_id, [h.id for h in FORMATS])
        handler = found

    return handler.parse_document(text)


__all__ = [
    "AUTO_FORMAT",
    "FORMATS",
    "ArchidektFormat",
    "ArenaFormat",
    "DeckFormatHandler",
    "MoxfieldFormat",
    "MtgoFormat",
    "SimpleFormat",
    "archidekt_format",
    "arena_format",
    "detect_format",
    "get_format",
    "moxfield_format",
    "mtgo_format",
    "parse_deck_text",
    "simple_format",
]
