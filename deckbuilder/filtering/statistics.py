"""
Aggregate deck statistics over enriched cards.

All counts are weighted by deck quantity. Lands are left out of the mana
curve and pip counts.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from deckbuilder.filtering.enrichment import (
    CARD_TYPE_ORDER,
    get_card_cmc,
    get_card_type,
    get_cmc_bucket,
    is_land,
)
from deckbuilder.models.enriched import CMC_MAX_BUCKET, MANA_COLORS, EnrichedCard, ManaPipCounts

# "{2}", "{W}", "{W/U}", "{G/P}", "{X}"
MANA_SYMBOL_PATTERN = re.compile(r"\{([^}]+)\}")


def get_cmc_distribution(cards: Sequence[EnrichedCard]) -> dict[int, int]:
    """Mana curve for nonland cards; buckets 0 through 7 are always present."""
    distribution = dict.fromkeys(range(CMC_MAX_BUCKET + 1), 0)
    for card in cards:
        if is_land(card):
            continue
        distribution[get_cmc_bucket(get_card_cmc(card))] += card.deck_card.quantity
    return distribution


def count_mana_pips(cards: Sequence[EnrichedCard]) -> ManaPipCounts:
    """
    Count colored pips and generic mana in nonland mana costs.

    Each symbol adds the card quantity to every color letter it contains,
    so a hybrid "{W/U}" counts once for W and once for U. Numeric symbols
    add their value times quantity to C.
    """
    counts = dict.fromkeys((*MANA_COLORS, "C"), 0)

    for card in cards:
        if is_land(card) or card.metadata is None:
            continue

        quantity = card.deck_card.quantity
        for symbol in MANA_SYMBOL_PATTERN.findall(card.metadata.mana_cost or ""):
            if symbol.isdigit():
                counts["C"] += int(symbol) * quantity
                continue
            for color in MANA_COLORS:
                if color in symbol:
                    counts[color] += quantity

    return ManaPipCounts(**counts)


def group_by_type(cards: Sequence[EnrichedCard]) -> dict[str, list[EnrichedCard]]:
    """Cards grouped by primary type, in type order; empty types are left out."""
    groups: dict[str, list[EnrichedCard]] = {card_type: [] for card_type in CARD_TYPE_ORDER}
    for card in cards:
        groups[get_card_type(card)].append(card)
    return {card_type: group for card_type, group in groups.items() if group}


def group_by_role(cards: Sequence[EnrichedCard]) -> dict[str | None, list[EnrichedCard]]:
    """
    Cards grouped by role id in first-seen order.

    A card with several roles appears under each of them. Cards without
    roles are grouped under None, which always comes last.
    """
    groups: dict[str | None, list[EnrichedCard]] = {}
    unassigned: list[EnrichedCard] = []
    for card in cards:
        if not card.deck_card.roles:
            unassigned.append(card)
            continue
        for role in card.deck_card.roles:
            groups.setdefault(role, []).append(card)

    if unassigned:
        groups[None] = unassigned
    return groups


def get_type_distribution(cards: Sequence[EnrichedCard]) -> dict[str, int]:
    """Quantity per primary type, in type order; empty types are left out."""
    return {
        card_type: sum(c.deck_card.quantity for c in group)
        for card_type, group in group_by_type(cards).items()
    }


@dataclass
class DeckSummary:
    """Curve, pips and type breakdown for one card list."""

    cmc_distribution: dict[int, int]
    mana_pips: ManaPipCounts
    type_distribution: dict[str, int] = field(default_factory=dict)
    land_count: int = 0
    nonland_count: int = 0

    @property
    def total_cards(self) -> int:
        return self.land_count + self.nonland_count

    @property
    def average_cmc(self) -> float:
        """Average mana value of nonland cards, bucketed (7+ counts as 7)."""
        if self.nonland_count == 0:
            return 0.0
        weighted = sum(cmc * count for cmc, count in self.cmc_distribution.items())
        return round(weighted / self.nonland_count, 2)


def summarize_deck(cards: Sequence[EnrichedCard]) -> DeckSummary:
    land_count = sum(c.deck_card.quantity for c in cards if is_land(c))
    nonland_count = sum(c.deck_card.quantity for c in cards if not is_land(c))
    return DeckSummary(
        cmc_distribution=get_cmc_distribution(cards),
        mana_pips=count_mana_pips(cards),
        type_distribution=get_type_distribution(cards),
        land_count=land_count,
        nonland_count=nonland_count,
    )
