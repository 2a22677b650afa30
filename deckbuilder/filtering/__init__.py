"""
Enrichment, filtering and statistics over canonical deck cards.

Everything here is a pure function of the cards and an injected metadata
snapshot; nothing performs I/O.
"""

from deckbuilder.filtering.enrichment import (
    CARD_TYPE_ORDER,
    OTHER_TYPE,
    enrich_cards,
    get_card_cmc,
    get_card_colors,
    get_card_type,
    get_cmc_bucket,
    get_primary_type,
    is_land,
)
from deckbuilder.filtering.filters import apply_filters, matches_filter, parse_filters
from deckbuilder.filtering.statistics import (
    DeckSummary,
    count_mana_pips,
    get_cmc_distribution,
    get_type_distribution,
    group_by_role,
    group_by_type,
    summarize_deck,
)

__all__ = [
    "CARD_TYPE_ORDER",
    "OTHER_TYPE",
    "enrich_cards",
    "get_card_cmc",
    "get_card_colors",
    "get_card_type",
    "get_cmc_bucket",
    "get_primary_type",
    "is_land",
    "apply_filters",
    "matches_filter",
    "parse_filters",
    "DeckSummary",
    "count_mana_pips",
    "get_cmc_distribution",
    "get_type_distribution",
    "group_by_role",
    "group_by_type",
    "summarize_deck",
]
