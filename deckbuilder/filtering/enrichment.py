"""
Metadata enrichment and derived card values.

INVARIANTS:
- Enrichment never fetches; a cache miss yields metadata=None
- Every derived value is defined for cards without metadata
"""

import math
import re
from collections.abc import Iterable, Mapping

from deckbuilder.models.card import CardMetadata
from deckbuilder.models.deck import DeckCardEntry
from deckbuilder.models.enriched import CMC_MAX_BUCKET, COLORLESS, EnrichedCard

OTHER_TYPE = "Other"

# Priority order: the first type present on the front face wins
CARD_TYPE_ORDER: tuple[str, ...] = (
    "Creature",
    "Planeswalker",
    "Instant",
    "Sorcery",
    "Enchantment",
    "Artifact",
    "Land",
    "Battle",
    OTHER_TYPE,
)

_WORD_PATTERN = re.compile(r"[A-Za-z]+")


def enrich_cards(
    cards: Iterable[DeckCardEntry],
    metadata_cache: Mapping[str, CardMetadata],
) -> list[EnrichedCard]:
    """Join deck entries with cached metadata by scryfall_id."""
    return [
        EnrichedCard(
            deck_card=card,
            metadata=metadata_cache.get(card.card.scryfall_id) if card.card.scryfall_id else None,
        )
        for card in cards
    ]


def _front_face_words(type_line: str) -> set[str]:
    front = type_line.split("//")[0]
    return {word.lower() for word in _WORD_PATTERN.findall(front)}


def get_primary_type(type_line: str | None) -> str:
    """
    Primary type of a type line.

    Examples:
        "Legendary Creature — Elf Druid" -> "Creature"
        "Artifact Land" -> "Artifact"
        "Kindred Instant — Elf" -> "Instant"
        "" -> "Other"
    """
    if not type_line:
        return OTHER_TYPE
    words = _front_face_words(type_line)
    for card_type in CARD_TYPE_ORDER[:-1]:
        if card_type.lower() in words:
            return card_type
    return OTHER_TYPE


def _type_line(card: EnrichedCard) -> str | None:
    if card.metadata is not None and card.metadata.type_line:
        return card.metadata.type_line
    return card.deck_card.type_line


def get_card_type(card: EnrichedCard) -> str:
    """Primary type from metadata, falling back to the type line stored at import."""
    return get_primary_type(_type_line(card))


def is_land(card: EnrichedCard) -> bool:
    """True when the front face is a Land (including "Artifact Land" and the like)."""
    type_line = _type_line(card)
    return bool(type_line) and "land" in _front_face_words(type_line)


def get_card_cmc(card: EnrichedCard) -> float:
    return card.metadata.cmc if card.metadata is not None else 0.0


def get_cmc_bucket(cmc: float) -> int:
    """Floor of cmc, with everything at or above the top bucket grouped into it."""
    return min(max(math.floor(cmc), 0), CMC_MAX_BUCKET)


def get_card_colors(card: EnrichedCard) -> tuple[str, ...]:
    """Colors, else color identity, else colorless."""
    metadata = card.metadata
    if metadata is None:
        return (COLORLESS,)
    if metadata.colors:
        return metadata.colors
    if metadata.color_identity:
        return metadata.color_identity
    return (COLORLESS,)
