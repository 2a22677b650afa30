"""
Canonical deck models.

A Deck holds fully identified DeckCardEntry records in three lists
(cards, alternates, sideboard) plus the commander identifiers. Entries are
immutable; edits produce new records via dataclasses.replace.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from deckbuilder.models.card import CardIdentifier


class InclusionStatus(str, Enum):
    CONFIRMED = "confirmed"
    CONSIDERING = "considering"
    CUT = "cut"


class OwnershipStatus(str, Enum):
    OWNED = "owned"
    PULLED = "pulled"
    NEED_TO_BUY = "need_to_buy"


class AddedBy(str, Enum):
    USER = "user"
    IMPORT = "import"


class FormatType(str, Enum):
    """Deck construction formats."""

    COMMANDER = "commander"
    STANDARD = "standard"
    MODERN = "modern"
    KITCHEN_TABLE = "kitchen_table"


@dataclass(frozen=True, slots=True)
class DeckFormat:
    """Format a deck is built for, with its target sizes."""

    type: FormatType
    deck_size: int
    sideboard_size: int


FORMAT_DEFAULTS: dict[FormatType, DeckFormat] = {
    FormatType.COMMANDER: DeckFormat(FormatType.COMMANDER, deck_size=100, sideboard_size=0),
    FormatType.STANDARD: DeckFormat(FormatType.STANDARD, deck_size=60, sideboard_size=15),
    FormatType.MODERN: DeckFormat(FormatType.MODERN, deck_size=60, sideboard_size=15),
    FormatType.KITCHEN_TABLE: DeckFormat(
        FormatType.KITCHEN_TABLE, deck_size=60, sideboard_size=15
    ),
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, eq=False)
class DeckCardEntry:
    """
    A canonical card inside a deck list.

    Attributes:
        card: Canonical identity
        quantity: Number of copies (>= 1)
        inclusion: confirmed, considering or cut
        ownership: owned, pulled or need_to_buy
        roles: Role ids; order kept for display, ignored for equality
        is_pinned: Pinned by the user
        notes: Free-form notes
        added_at: When the entry was created
        added_by: user or import
        type_line: Type line remembered at import, used when metadata is missing
    """

    card: CardIdentifier
    quantity: int = 1
    inclusion: InclusionStatus = InclusionStatus.CONFIRMED
    ownership: OwnershipStatus = OwnershipStatus.OWNED
    roles: tuple[str, ...] = ()
    is_pinned: bool = False
    notes: str | None = None
    added_at: datetime = field(default_factory=_utcnow)
    added_by: AddedBy = AddedBy.USER
    type_line: str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity} for {self.card.name}")
        if len(set(self.roles)) != len(self.roles):
            raise ValueError(f"duplicate role ids for {self.card.name}: {self.roles}")
        # Accept lists from callers, store tuples
        if not isinstance(self.roles, tuple):
            object.__setattr__(self, "roles", tuple(self.roles))

    @property
    def name_key(self) -> str:
        return self.card.name_key

    def _identity(self) -> tuple[object, ...]:
        return (
            self.card,
            self.quantity,
            self.inclusion,
            self.ownership,
            frozenset(self.roles),
            self.is_pinned,
            self.notes,
            self.added_at,
            self.added_by,
            self.type_line,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeckCardEntry):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Optional sections to include when rendering a deck."""

    include_maybeboard: bool = False
    include_sideboard: bool = False


@dataclass
class Deck:
    """
    A deck as handed over by the persistence layer.

    Attributes:
        name: Deck name
        format: Format definition (commander decks render a Commander section)
        cards: Main list; confirmed cards are the mainboard, considering
            cards belong to the maybeboard
        alternates: Additional maybeboard cards
        sideboard: Sideboard cards
        commanders: Commander identities (commander format only)
    """

    name: str
    format: DeckFormat = field(default_factory=lambda: FORMAT_DEFAULTS[FormatType.KITCHEN_TABLE])
    cards: list[DeckCardEntry] = field(default_factory=list)
    alternates: list[DeckCardEntry] = field(default_factory=list)
    sideboard: list[DeckCardEntry] = field(default_factory=list)
    commanders: list[CardIdentifier] = field(default_factory=list)

    @property
    def is_commander(self) -> bool:
        return self.format.type == FormatType.COMMANDER

    def confirmed_cards(self) -> list[DeckCardEntry]:
        """Mainboard cards (confirmed inclusion)."""
        return [c for c in self.cards if c.inclusion == InclusionStatus.CONFIRMED]

    def maybeboard_cards(self) -> list[DeckCardEntry]:
        """Considering cards from the main list followed by alternates."""
        considering = [c for c in self.cards if c.inclusion == InclusionStatus.CONSIDERING]
        return considering + list(self.alternates)

    def card_count(self) -> int:
        """Mainboard count; commanders count towards deck size."""
        return sum(c.quantity for c in self.confirmed_cards()) + len(self.commanders)
