"""
Deck import flow.

Turns raw deck list text into a Deck:
    text -> ParsedDeckText -> ResolvedCard -> DeckCardEntry -> Deck

Parsed entries are routed by section:
- commander  -> deck.commanders
- sideboard  -> deck.sideboard
- maybeboard -> deck.alternates (inclusion: considering)
- mainboard  -> deck.cards
Every card list is consolidated before the deck is returned.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from deckbuilder.formats import AUTO_FORMAT, parse_deck_text
from deckbuilder.models.card import CardIdentifier
from deckbuilder.models.deck import (
    FORMAT_DEFAULTS,
    AddedBy,
    Deck,
    DeckCardEntry,
    FormatType,
    InclusionStatus,
    OwnershipStatus,
)
from deckbuilder.models.failure import CardNotFoundError
from deckbuilder.models.parsed import DeckSection, MalformedLine, ParsedCardEntry
from deckbuilder.services.card_resolver import CardIdentityResolver, CardLookup, ResolvedCard
from deckbuilder.services.consolidation import consolidate_duplicate_cards

logger = logging.getLogger(__name__)

DEFAULT_DECK_NAME = "Imported Deck"


@dataclass
class ImportResult:
    """Deck built from text, with everything that could not be used."""

    deck: Deck
    format_id: str
    unresolved: list[CardNotFoundError] = field(default_factory=list)
    malformed_lines: list[MalformedLine] = field(default_factory=list)


def infer_format_type(entries: Iterable[ParsedCardEntry]) -> FormatType:
    """Commander when the list has a commander section, kitchen table otherwise."""
    if any(entry.is_commander for entry in entries):
        return FormatType.COMMANDER
    return FormatType.KITCHEN_TABLE


def build_deck_card(resolved: ResolvedCard, now: datetime | None = None) -> DeckCardEntry:
    """Create an imported deck entry from a resolved card."""
    entry = resolved.entry
    return DeckCardEntry(
        card=resolved.identifier,
        quantity=entry.quantity,
        inclusion=(
            InclusionStatus.CONSIDERING if entry.is_maybeboard else InclusionStatus.CONFIRMED
        ),
        ownership=OwnershipStatus.OWNED,
        roles=entry.roles,
        added_at=now or datetime.now(UTC),
        added_by=AddedBy.IMPORT,
        type_line=resolved.metadata.type_line,
    )


def _assemble_deck(
    pairs: Iterable[tuple[ParsedCardEntry, DeckCardEntry]],
    deck_name: str,
    format_type: FormatType | None,
) -> Deck:
    pairs = list(pairs)
    if format_type is None:
        format_type = infer_format_type(parsed for parsed, _ in pairs)
    deck = Deck(name=deck_name, format=FORMAT_DEFAULTS[format_type])

    for parsed, card in pairs:
        if parsed.has_ambiguous_section:
            logger.warning(
                "ambiguous_section",
                extra={"card_name": parsed.name, "chosen_section": parsed.section.value},
            )

        section = parsed.section
        if section == DeckSection.COMMANDER:
            if card.name_key not in {c.name_key for c in deck.commanders}:
                deck.commanders.append(card.card)
        elif section == DeckSection.SIDEBOARD:
            deck.sideboard.append(card)
        elif section == DeckSection.MAYBEBOARD:
            deck.alternates.append(card)
        else:
            deck.cards.append(card)

    deck.cards = consolidate_duplicate_cards(deck.cards)
    deck.sideboard = consolidate_duplicate_cards(deck.sideboard)
    deck.alternates = consolidate_duplicate_cards(deck.alternates)
    return deck


async def import_deck_text(
    text: str,
    lookup: CardLookup,
    *,
    format_id: str = AUTO_FORMAT,
    deck_name: str = DEFAULT_DECK_NAME,
    format_type: FormatType | None = None,
) -> ImportResult:
    """
    Parse, resolve and assemble a deck from text.

    Unresolved cards are left out of the deck and reported on the result.
    Without an explicit format_type, a list with commanders becomes a
    commander deck.

    Raises:
        UnknownFormatError: If format_id is not registered
        LookupServiceError: If the lookup service itself fails
    """
    parsed = parse_deck_text(text, format_id)

    resolution = await CardIdentityResolver(lookup).resolve(parsed.cards)

    now = datetime.now(UTC)
    deck = _assemble_deck(
        ((r.entry, build_deck_card(r, now)) for r in resolution.resolved),
        deck_name=deck_name,
        format_type=format_type or infer_format_type(parsed.cards),
    )

    logger.info(
        "deck_imported",
        extra={
            "format_id": parsed.format_id,
            "parsed_entries": len(parsed.cards),
            "resolved_entries": len(resolution.resolved),
            "unresolved_entries": len(resolution.unresolved),
            "malformed_lines": len(parsed.malformed_lines),
        },
    )

    return ImportResult(
        deck=deck,
        format_id=parsed.format_id,
        unresolved=resolution.unresolved,
        malformed_lines=parsed.malformed_lines,
    )


def build_deck_from_entries(
    entries: Sequence[ParsedCardEntry],
    *,
    deck_name: str = DEFAULT_DECK_NAME,
    format_type: FormatType | None = None,
) -> Deck:
    """
    Build a deck straight from parsed entries, without any lookup.

    Identifiers carry the set and collector number as written (empty when
    the dialect had none) and no scryfall_id.
    """
    now = datetime.now(UTC)
    pairs = []
    for entry in entries:
        card = DeckCardEntry(
            card=CardIdentifier(
                name=entry.name,
                set_code=entry.set_code or "",
                collector_number=entry.collector_number or "",
            ),
            quantity=entry.quantity,
            inclusion=(
                InclusionStatus.CONSIDERING if entry.is_maybeboard else InclusionStatus.CONFIRMED
            ),
            roles=entry.roles,
            added_at=now,
            added_by=AddedBy.IMPORT,
        )
        pairs.append((entry, card))

    return _assemble_deck(pairs, deck_name=deck_name, format_type=format_type)
