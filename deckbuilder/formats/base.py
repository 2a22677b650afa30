"""
Shared contract and line grammar for deck list dialects.

THIS PACKAGE HANDLES SYNTAX ONLY.

Each dialect handler turns raw text into UNTRUSTED ParsedCardEntry records
and renders a canonical Deck back to text. Handlers never resolve cards,
never touch storage and never raise on a single bad line: a line that
matches no grammar is recorded as a MalformedLine and parsing continues.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from deckbuilder.models.card import CardIdentifier
from deckbuilder.models.deck import Deck, DeckCardEntry, RenderOptions
from deckbuilder.models.parsed import (
    DeckSection,
    MalformedLine,
    ParsedCardEntry,
    ParsedDeckText,
)

logger = logging.getLogger(__name__)

# "4 Lightning Bolt (M21) 199", "1x Sol Ring (C21) 123", "1 Flooded Strand (MH3) 81p *F*"
# Groups: (quantity, card_name, set_code, collector_number)
# Collector number keeps suffix letters (81p, 248s); *F* / *E* markers are dropped
FULL_CARD_PATTERN = re.compile(
    r"^(\d+)x?\s+(.+?)\s+\(([A-Za-z0-9]+)\)\s+(\S+?)(?:\s+\*[A-Za-z]+\*)*$",
    re.IGNORECASE,
)

# "4 Lightning Bolt" or "4x Lightning Bolt"
# Groups: (quantity, card_name)
QUANTITY_NAME_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)

# Trailing set decoration without a quantity: "Lightning Bolt (M21) 199 *F*"
# Groups: (card_name, set_code, collector_number)
NAME_SET_PATTERN = re.compile(r"^(.+?)\s+\(([A-Za-z0-9]+)\)\s+(\S+?)(?:\s+\*[A-Za-z]+\*)*$")

# Leading UTF-8 byte order mark, stripped before parsing
BYTE_ORDER_MARK = "\ufeff"

SECTION_HEADERS: dict[str, DeckSection] = {
    "commander": DeckSection.COMMANDER,
    "deck": DeckSection.MAINBOARD,
    "sideboard": DeckSection.SIDEBOARD,
    "maybeboard": DeckSection.MAYBEBOARD,
    "considering": DeckSection.MAYBEBOARD,
}


def prepare_lines(text: str) -> list[str]:
    """Split text into trimmed lines (blank lines kept as empty strings)."""
    return [line.strip() for line in text.removeprefix(BYTE_ORDER_MARK).splitlines()]


def parse_section_header(line: str) -> DeckSection | None:
    """Return the section a header line switches to, or None if not a header."""
    return SECTION_HEADERS.get(line.strip().lower())


def parse_quantity(raw: str) -> int | None:
    """Parse an explicit quantity; None if it is not a positive integer."""
    try:
        quantity = int(raw)
    except ValueError:
        return None
    return quantity if quantity >= 1 else None


class SectionTracker:
    """
    Current-section state for one parse call.

    Starts in the mainboard. Only header lines and explicit transitions
    (the MTGO blank-line rule) move it; card content never does.
    """

    def __init__(self) -> None:
        self.section = DeckSection.MAINBOARD
        self.cards_in_section = 0

    def enter(self, section: DeckSection) -> None:
        self.section = section
        self.cards_in_section = 0

    def feed_header(self, line: str) -> bool:
        """Switch section if `line` is a header. Returns True when consumed."""
        section = parse_section_header(line)
        if section is None:
            return False
        self.enter(section)
        return True

    def record_card(self) -> None:
        self.cards_in_section += 1

    def build_entry(
        self,
        name: str,
        quantity: int,
        set_code: str | None = None,
        collector_number: str | None = None,
        roles: tuple[str, ...] = (),
    ) -> ParsedCardEntry:
        """Create an entry flagged for the current section."""
        self.record_card()
        return ParsedCardEntry(
            name=name,
            quantity=quantity,
            set_code=set_code.lower() if set_code else None,
            collector_number=collector_number,
            is_sideboard=self.section == DeckSection.SIDEBOARD,
            is_maybeboard=self.section == DeckSection.MAYBEBOARD,
            is_commander=self.section == DeckSection.COMMANDER,
            roles=roles,
        )


@dataclass(frozen=True, slots=True)
class CardLine:
    """Pieces of one matched card line."""

    quantity: int
    name: str
    set_code: str | None = None
    collector_number: str | None = None


def match_card_line(line: str, quantity_required: bool = True) -> CardLine | None:
    """
    Match a quantity-prefixed card line, with or without set decoration.

    When quantity_required is False, a bare "Name" or "Name (SET) 123" is
    accepted with quantity 1.
    """
    match = FULL_CARD_PATTERN.match(line)
    if match:
        quantity = parse_quantity(match.group(1))
        if quantity is None:
            return None
        return CardLine(quantity, match.group(2).strip(), match.group(3), match.group(4))

    match = QUANTITY_NAME_PATTERN.match(line)
    if match:
        quantity = parse_quantity(match.group(1))
        if quantity is None:
            return None
        return CardLine(quantity, match.group(2).strip())

    if quantity_required:
        return None

    match = NAME_SET_PATTERN.match(line)
    if match:
        return CardLine(1, match.group(1).strip(), match.group(2), match.group(3))

    return CardLine(1, line)


def log_malformed(format_id: str, malformed: list[MalformedLine]) -> None:
    """Log skipped lines at debug level."""
    if malformed:
        logger.debug(
            "malformed_lines_skipped",
            extra={
                "format_id": format_id,
                "malformed_count": len(malformed),
                "first_line_numbers": [m.line_number for m in malformed[:10]],
            },
        )


def format_set_code(card: CardIdentifier) -> str:
    """Upper-case set code for output."""
    return card.set_code.upper()


class DeckFormatHandler(ABC):
    """
    Capability contract for one dialect: parse text, render a deck.

    Subclasses implement parse_document and render; parse is the plain list
    view of parse_document.
    """

    id: str
    name: str
    description: str

    def parse(self, text: str) -> list[ParsedCardEntry]:
        """Parse text into card entries, skipping malformed lines."""
        return self.parse_document(text).cards

    @abstractmethod
    def parse_document(self, text: str) -> ParsedDeckText:
        """Parse text, keeping track of skipped lines."""

    @abstractmethod
    def render(self, deck: Deck, options: RenderOptions | None = None) -> str:
        """Render a canonical deck as text in this dialect."""

    def _commander_section(self, deck: Deck) -> list[CardIdentifier]:
        """Commanders to emit first (commander-format decks only)."""
        if deck.is_commander and deck.commanders:
            return list(deck.commanders)
        return []

    @staticmethod
    def _sideboard(deck: Deck, options: RenderOptions) -> list[DeckCardEntry]:
        return list(deck.sideboard) if options.include_sideboard else []

    @staticmethod
    def _maybeboard(deck: Deck, options: RenderOptions) -> list[DeckCardEntry]:
        return deck.maybeboard_cards() if options.include_maybeboard else []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
