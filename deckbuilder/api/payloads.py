"""
Request and response models shared by the deck endpoints.

These are transport shapes only; each converts to or from the core
dataclasses in deckbuilder.models.
"""

from pydantic import BaseModel, Field

from deckbuilder.models.card import CardIdentifier, CardMetadata
from deckbuilder.models.deck import (
    FORMAT_DEFAULTS,
    Deck,
    DeckCardEntry,
    FormatType,
    InclusionStatus,
    OwnershipStatus,
)
from deckbuilder.models.parsed import MalformedLine, ParsedCardEntry


class CardIdentifierPayload(BaseModel):
    """Canonical card identity."""

    name: str = Field(..., min_length=1)
    set_code: str = ""
    collector_number: str = ""
    scryfall_id: str | None = None

    def to_identifier(self) -> CardIdentifier:
        return CardIdentifier(
            name=self.name,
            set_code=self.set_code,
            collector_number=self.collector_number,
            scryfall_id=self.scryfall_id,
        )


class DeckCardPayload(CardIdentifierPayload):
    """One deck entry."""

    quantity: int = Field(default=1, ge=1)
    inclusion: InclusionStatus = InclusionStatus.CONFIRMED
    ownership: OwnershipStatus = OwnershipStatus.OWNED
    roles: list[str] = Field(default_factory=list)
    is_pinned: bool = False
    notes: str | None = None
    type_line: str | None = None

    def to_entry(self) -> DeckCardEntry:
        return DeckCardEntry(
            card=self.to_identifier(),
            quantity=self.quantity,
            inclusion=self.inclusion,
            ownership=self.ownership,
            roles=tuple(dict.fromkeys(self.roles)),
            is_pinned=self.is_pinned,
            notes=self.notes,
            type_line=self.type_line,
        )

    @classmethod
    def from_entry(cls, entry: DeckCardEntry) -> "DeckCardPayload":
        return cls(
            name=entry.card.name,
            set_code=entry.card.set_code,
            collector_number=entry.card.collector_number,
            scryfall_id=entry.card.scryfall_id,
            quantity=entry.quantity,
            inclusion=entry.inclusion,
            ownership=entry.ownership,
            roles=list(entry.roles),
            is_pinned=entry.is_pinned,
            notes=entry.notes,
            type_line=entry.type_line,
        )


class DeckPayload(BaseModel):
    """A deck as sent by a client for rendering."""

    name: str = "Untitled Deck"
    format: FormatType = FormatType.KITCHEN_TABLE
    cards: list[DeckCardPayload] = Field(default_factory=list)
    alternates: list[DeckCardPayload] = Field(default_factory=list)
    sideboard: list[DeckCardPayload] = Field(default_factory=list)
    commanders: list[CardIdentifierPayload] = Field(default_factory=list)

    def to_deck(self) -> Deck:
        return Deck(
            name=self.name,
            format=FORMAT_DEFAULTS[self.format],
            cards=[c.to_entry() for c in self.cards],
            alternates=[c.to_entry() for c in self.alternates],
            sideboard=[c.to_entry() for c in self.sideboard],
            commanders=[c.to_identifier() for c in self.commanders],
        )


class CardMetadataPayload(BaseModel):
    """Cached card metadata supplied with an analysis request."""

    id: str
    name: str
    cmc: float = 0.0
    type_line: str = ""
    color_identity: list[str] = Field(default_factory=list)
    set: str = ""
    collector_number: str = ""
    mana_cost: str | None = None
    colors: list[str] | None = None
    rarity: str | None = None
    oracle_text: str | None = None

    def to_metadata(self) -> CardMetadata:
        return CardMetadata(
            id=self.id,
            name=self.name,
            cmc=self.cmc,
            type_line=self.type_line,
            color_identity=tuple(self.color_identity),
            set=self.set,
            collector_number=self.collector_number,
            mana_cost=self.mana_cost,
            colors=tuple(self.colors) if self.colors is not None else None,
            rarity=self.rarity,
            oracle_text=self.oracle_text,
        )


class ParsedCardPayload(BaseModel):
    """One parsed (unresolved) card line."""

    name: str
    quantity: int
    set_code: str | None = None
    collector_number: str | None = None
    section: str
    is_sideboard: bool = False
    is_maybeboard: bool = False
    is_commander: bool = False
    roles: list[str] = Field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: ParsedCardEntry) -> "ParsedCardPayload":
        return cls(
            name=entry.name,
            quantity=entry.quantity,
            set_code=entry.set_code,
            collector_number=entry.collector_number,
            section=entry.section.value,
            is_sideboard=entry.is_sideboard,
            is_maybeboard=entry.is_maybeboard,
            is_commander=entry.is_commander,
            roles=list(entry.roles),
        )


class MalformedLinePayload(BaseModel):
    """A skipped input line."""

    line_number: int
    content: str

    @classmethod
    def from_line(cls, line: MalformedLine) -> "MalformedLinePayload":
        return cls(line_number=line.line_number, content=line.content)
