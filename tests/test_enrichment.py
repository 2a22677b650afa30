"""Tests for metadata enrichment and derived card values."""

import pytest
from factories import make_enriched, make_entry, make_metadata

from deckbuilder.filtering import (
    enrich_cards,
    get_card_cmc,
    get_card_colors,
    get_card_type,
    get_cmc_bucket,
    get_primary_type,
    is_land,
)
from deckbuilder.models.card import CardIdentifier
from deckbuilder.models.deck import DeckCardEntry
from deckbuilder.models.enriched import EnrichedCard


class TestEnrichCards:
    def test_joins_by_scryfall_id(self) -> None:
        bolt = make_metadata("Lightning Bolt", cmc=1)
        cards = [make_entry("Lightning Bolt", 4), make_entry("Unknown Card")]

        enriched = enrich_cards(cards, {bolt.id: bolt})

        assert enriched[0].metadata is bolt
        assert enriched[0].deck_card is cards[0]
        assert enriched[1].metadata is None

    def test_entry_without_scryfall_id(self) -> None:
        entry = DeckCardEntry(card=CardIdentifier("Sol Ring", "c21", "263"))

        enriched = enrich_cards([entry], {"": make_metadata("Sol Ring")})

        assert enriched[0].metadata is None

    def test_preserves_order_and_length(self) -> None:
        cards = [make_entry(name) for name in ("C", "A", "B")]

        enriched = enrich_cards(cards, {})

        assert [e.deck_card.card.name for e in enriched] == ["C", "A", "B"]


class TestGetPrimaryType:
    @pytest.mark.parametrize(
        ("type_line", "expected"),
        [
            ("Legendary Creature — Elf Druid", "Creature"),
            ("Artifact Creature — Golem", "Creature"),
            ("Legendary Planeswalker — Jace", "Planeswalker"),
            ("Battle — Siege", "Battle"),
            ("Instant", "Instant"),
            ("Kindred Sorcery — Elf", "Sorcery"),
            ("Artifact — Equipment", "Artifact"),
            ("Artifact Land", "Artifact"),
            ("Enchantment — Aura", "Enchantment"),
            ("Legendary Enchantment Artifact", "Enchantment"),
            ("Basic Land — Mountain", "Land"),
            ("Land // Land", "Land"),
            ("Instant // Sorcery", "Instant"),
            ("Conspiracy", "Other"),
            ("", "Other"),
            (None, "Other"),
        ],
    )
    def test_priority_order(self, type_line: str | None, expected: str) -> None:
        assert get_primary_type(type_line) == expected

    def test_uses_front_face(self) -> None:
        assert get_primary_type("Sorcery // Land") == "Sorcery"
        assert get_primary_type("Creature — Human // Land") == "Creature"


class TestDerivedValues:
    def test_cmc_without_metadata_is_zero(self) -> None:
        card = EnrichedCard(deck_card=make_entry("Sol Ring"))

        assert get_card_cmc(card) == 0

    @pytest.mark.parametrize(
        ("cmc", "bucket"),
        [(0, 0), (0.5, 0), (3, 3), (3.9, 3), (6, 6), (7, 7), (12, 7), (1000000, 7)],
    )
    def test_cmc_bucket(self, cmc: float, bucket: int) -> None:
        assert get_cmc_bucket(cmc) == bucket

    def test_colors_prefer_colors(self) -> None:
        card = make_enriched("Dryad Arbor", colors=("G",), color_identity=("G", "W"))

        assert get_card_colors(card) == ("G",)

    def test_colors_fall_back_to_identity(self) -> None:
        card = make_enriched("Delver", colors=None, color_identity=("U",))

        assert get_card_colors(card) == ("U",)

    def test_empty_colors_fall_back_to_identity(self) -> None:
        card = make_enriched("Talisman", colors=(), color_identity=("B",))

        assert get_card_colors(card) == ("B",)

    def test_colorless(self) -> None:
        assert get_card_colors(make_enriched("Sol Ring", colors=())) == ("C",)
        assert get_card_colors(EnrichedCard(deck_card=make_entry("Sol Ring"))) == ("C",)

    def test_card_type_falls_back_to_stored_type_line(self) -> None:
        card = EnrichedCard(deck_card=make_entry("Forest", type_line="Basic Land — Forest"))

        assert get_card_type(card) == "Land"
        assert is_land(card) is True

    def test_is_land(self) -> None:
        assert is_land(make_enriched("Mountain", type_line="Basic Land — Mountain"))
        assert is_land(make_enriched("Seat of the Synod", type_line="Artifact Land"))
        assert is_land(make_enriched("Dryad Arbor", type_line="Land Creature — Forest Dryad"))
        assert not is_land(make_enriched("Sol Ring", type_line="Artifact"))
        assert not is_land(make_enriched("Landfall Thing", type_line="Creature — Landfolk"))
        assert not is_land(EnrichedCard(deck_card=make_entry("Unknown")))
