"""
DeckBuilder services.

Card resolution, consolidation and the import flow.
"""

from deckbuilder.services.card_resolver import (
    CardIdentityResolver,
    CardLookup,
    ResolutionResult,
    ResolvedCard,
    resolve_card,
)
from deckbuilder.services.consolidation import (
    consolidate_duplicate_cards,
    find_card_by_name,
    find_card_index_by_name,
)
from deckbuilder.services.deck_import import (
    ImportResult,
    build_deck_card,
    build_deck_from_entries,
    import_deck_text,
    infer_format_type,
)
from deckbuilder.services.scryfall_lookup import ScryfallLookup, load_metadata_cache

__all__ = [
    # Resolution (untrusted entries -> canonical identity)
    "CardIdentityResolver",
    "CardLookup",
    "ResolutionResult",
    "ResolvedCard",
    "resolve_card",
    # Consolidation
    "consolidate_duplicate_cards",
    "find_card_by_name",
    "find_card_index_by_name",
    # Import flow
    "ImportResult",
    "build_deck_card",
    "build_deck_from_entries",
    "import_deck_text",
    "infer_format_type",
    # Scryfall adapter
    "ScryfallLookup",
    "load_metadata_cache",
]
