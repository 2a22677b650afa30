"""
Parsed deck list structures.

THESE STRUCTURES ARE UNTRUSTED.

A ParsedCardEntry is what a dialect handler extracted from one line of text.
Nothing about it has been checked against the card database; it must go
through the resolver before it becomes part of a deck.
"""

from dataclasses import dataclass, field
from enum import Enum

from deckbuilder.models.card import CardReference


class DeckSection(str, Enum):
    """Section a parsed card line belongs to."""

    MAINBOARD = "mainboard"
    COMMANDER = "commander"
    SIDEBOARD = "sideboard"
    MAYBEBOARD = "maybeboard"


@dataclass(frozen=True, slots=True)
class ParsedCardEntry:
    """
    One card line extracted by a format handler.

    The section flags are independent booleans. Well-formed input never sets
    commander and sideboard together, but the model does not forbid it.

    Attributes:
        name: Card name as written
        quantity: Number of copies (>= 1)
        set_code: Lower-case set code, if the dialect carries one
        collector_number: Collector number, verbatim (suffix letters kept)
        is_sideboard: Card was listed in the sideboard
        is_maybeboard: Card was listed in the maybeboard / considering list
        is_commander: Card was listed as a commander
        roles: Role ids attached by the dialect (usually empty)
    """

    name: str
    quantity: int
    set_code: str | None = None
    collector_number: str | None = None
    is_sideboard: bool = False
    is_maybeboard: bool = False
    is_commander: bool = False
    roles: tuple[str, ...] = ()

    @property
    def reference(self) -> CardReference:
        return CardReference(self.name, self.set_code, self.collector_number)

    @property
    def section(self) -> DeckSection:
        """Single section for this entry (commander wins over sideboard)."""
        if self.is_commander:
            return DeckSection.COMMANDER
        if self.is_sideboard:
            return DeckSection.SIDEBOARD
        if self.is_maybeboard:
            return DeckSection.MAYBEBOARD
        return DeckSection.MAINBOARD

    @property
    def has_ambiguous_section(self) -> bool:
        """True when the entry is flagged as both commander and sideboard."""
        return self.is_commander and self.is_sideboard


@dataclass(frozen=True, slots=True)
class MalformedLine:
    """A non-blank line that matched no card grammar and was skipped."""

    line_number: int
    content: str


@dataclass
class ParsedDeckText:
    """Result of parsing a whole document with one handler."""

    format_id: str
    cards: list[ParsedCardEntry] = field(default_factory=list)
    malformed_lines: list[MalformedLine] = field(default_factory=list)

    def count_by_section(self) -> dict[DeckSection, int]:
        """Total quantity per section."""
        counts = dict.fromkeys(DeckSection, 0)
        for card in self.cards:
            counts[card.section] += card.quantity
        return counts
