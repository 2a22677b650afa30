"""Builders and fakes shared by the test modules."""

from deckbuilder.models.card import CardIdentifier, CardMetadata
from deckbuilder.models.deck import DeckCardEntry
from deckbuilder.models.enriched import EnrichedCard


def card_id_for(name: str) -> str:
    return f"id-{name.lower().replace(' ', '-')}"


def make_metadata(
    name: str,
    cmc: float = 0.0,
    type_line: str = "Instant",
    mana_cost: str | None = None,
    colors: tuple[str, ...] | None = None,
    color_identity: tuple[str, ...] = (),
    set_code: str = "tst",
    collector_number: str = "1",
) -> CardMetadata:
    return CardMetadata(
        id=card_id_for(name),
        name=name,
        cmc=cmc,
        type_line=type_line,
        color_identity=color_identity,
        set=set_code,
        collector_number=collector_number,
        mana_cost=mana_cost,
        colors=colors,
    )


def make_entry(name: str, quantity: int = 1, **kwargs) -> DeckCardEntry:
    """DeckCardEntry whose scryfall_id matches make_metadata(name).id."""
    return DeckCardEntry(
        card=CardIdentifier(
            name=name,
            set_code="tst",
            collector_number="1",
            scryfall_id=card_id_for(name),
        ),
        quantity=quantity,
        **kwargs,
    )


def make_enriched(
    name: str,
    quantity: int = 1,
    roles: tuple[str, ...] = (),
    **metadata_kwargs,
) -> EnrichedCard:
    """EnrichedCard with metadata built from metadata_kwargs."""
    return EnrichedCard(
        deck_card=make_entry(name, quantity, roles=roles),
        metadata=make_metadata(name, **metadata_kwargs),
    )


class FakeLookup:
    """In-memory CardLookup that records every call."""

    def __init__(self, cards: list[CardMetadata]) -> None:
        self.by_name = {c.name.lower(): c for c in cards}
        self.by_printing = {(c.set.lower(), c.collector_number): c for c in cards}
        self.calls: list[tuple[str, ...]] = []

    async def lookup_by_name_fuzzy(self, name: str) -> CardMetadata | None:
        self.calls.append(("fuzzy", name))
        return self.by_name.get(name.lower())

    async def lookup_by_set_and_number(
        self, set_code: str, collector_number: str
    ) -> CardMetadata | None:
        self.calls.append(("exact", set_code, collector_number))
        return self.by_printing.get((set_code.lower(), collector_number))
