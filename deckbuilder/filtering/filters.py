"""
Compositional card filters.

Filters combine with AND; values within one filter combine with OR.
A filter set is validated as a whole before any card is evaluated.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from deckbuilder.filtering.enrichment import (
    get_card_cmc,
    get_card_colors,
    get_card_type,
    get_cmc_bucket,
)
from deckbuilder.models.enriched import CardFilter, EnrichedCard, FilterMode, FilterType
from deckbuilder.models.failure import InvalidFilterSpecificationError

logger = logging.getLogger(__name__)


def parse_filters(raw: Iterable[Mapping[str, Any] | CardFilter]) -> list[CardFilter]:
    """
    Build CardFilter objects from dict specs.

    Every spec is validated before anything is returned, so one bad spec
    rejects the whole set.

    Args:
        raw: Dicts with "type", "mode" and "values" keys (CardFilter passes through)

    Raises:
        InvalidFilterSpecificationError: On a missing key, unknown type or
            mode, or invalid values
    """
    filters: list[CardFilter] = []
    for index, spec in enumerate(raw):
        if isinstance(spec, CardFilter):
            filters.append(spec)
            continue
        if not isinstance(spec, Mapping):
            raise InvalidFilterSpecificationError(
                "Filter specification must be an object",
                detail=f"Filter {index}: got {type(spec).__name__}",
            )

        missing = [key for key in ("type", "mode", "values") if key not in spec]
        if missing:
            raise InvalidFilterSpecificationError(
                f"Filter specification is missing: {', '.join(missing)}",
                detail=f"Filter {index}: {dict(spec)!r}",
            )

        filters.append(CardFilter(type=spec["type"], mode=spec["mode"], values=spec["values"]))

    return filters


def _derived_values(card: EnrichedCard, filter_type: FilterType) -> Iterable[Any]:
    if filter_type == FilterType.CMC:
        return (get_cmc_bucket(get_card_cmc(card)),)
    if filter_type == FilterType.COLOR:
        return get_card_colors(card)
    if filter_type == FilterType.CARD_TYPE:
        return (get_card_type(card),)
    return card.deck_card.roles


def matches_filter(card: EnrichedCard, card_filter: CardFilter) -> bool:
    """Include: derived value intersects the filter values. Exclude: it does not."""
    intersects = any(v in card_filter.values for v in _derived_values(card, card_filter.type))
    return intersects if card_filter.mode == FilterMode.INCLUDE else not intersects


def apply_filters(
    cards: Sequence[EnrichedCard],
    filters: Sequence[CardFilter],
) -> list[EnrichedCard]:
    """Keep cards matching every filter. No filters returns the input unchanged."""
    if not filters:
        return list(cards)

    result = [card for card in cards if all(matches_filter(card, f) for f in filters)]

    logger.debug(
        "filters_applied",
        extra={
            "filter_count": len(filters),
            "input_cards": len(cards),
            "output_cards": len(result),
        },
    )
    return result
