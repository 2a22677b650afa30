from datetime import UTC, datetime

import pytest
from factories import FakeLookup, make_metadata

from deckbuilder.models.card import CardMetadata


@pytest.fixture
def lightning_bolt() -> CardMetadata:
    return make_metadata(
        "Lightning Bolt",
        cmc=1,
        type_line="Instant",
        mana_cost="{R}",
        colors=("R",),
        color_identity=("R",),
        set_code="m21",
        collector_number="199",
    )


@pytest.fixture
def sample_cards(lightning_bolt: CardMetadata) -> list[CardMetadata]:
    """A handful of cards covering each type the pipeline distinguishes."""
    return [
        lightning_bolt,
        make_metadata(
            "Sol Ring",
            cmc=1,
            type_line="Artifact",
            mana_cost="{1}",
            colors=(),
            set_code="c21",
            collector_number="263",
        ),
        make_metadata(
            "Mountain",
            cmc=0,
            type_line="Basic Land — Mountain",
            colors=(),
            set_code="neo",
            collector_number="290",
        ),
        make_metadata(
            "Pyroblast",
            cmc=1,
            type_line="Instant",
            mana_cost="{R}",
            colors=("R",),
            color_identity=("R",),
            set_code="ema",
            collector_number="142",
        ),
        make_metadata(
            "Atraxa, Praetors' Voice",
            cmc=4,
            type_line="Legendary Creature — Phyrexian Angel Horror",
            mana_cost="{G}{W}{U}{B}",
            colors=("B", "G", "U", "W"),
            color_identity=("B", "G", "U", "W"),
            set_code="2x2",
            collector_number="190",
        ),
    ]


@pytest.fixture
def fake_lookup(sample_cards: list[CardMetadata]) -> FakeLookup:
    return FakeLookup(sample_cards)


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def sample_arena_export() -> str:
    """Sample Arena deck export for testing."""
    return """Deck
4 Lightning Bolt (M21) 199
1 Sol Ring (C21) 263
20 Mountain (NEO) 290

Sideboard
2 Pyroblast (EMA) 142"""
