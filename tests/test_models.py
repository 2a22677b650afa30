"""Tests for core data models."""

from dataclasses import replace
from datetime import UTC

import pytest
from factories import make_entry

from deckbuilder.models.card import CardIdentifier, CardMetadata, CardReference
from deckbuilder.models.deck import (
    FORMAT_DEFAULTS,
    Deck,
    FormatType,
    InclusionStatus,
)
from deckbuilder.models.failure import (
    ApiResponse,
    CardNotFoundError,
    FailureKind,
    OutcomeType,
)
from deckbuilder.models.parsed import DeckSection, ParsedCardEntry


class TestCardIdentifier:
    def test_name_key_is_lowercase(self) -> None:
        assert CardIdentifier("Sol Ring", "c21", "263").name_key == "sol ring"


class TestCardMetadataFromScryfall:
    def test_minimal_card(self) -> None:
        metadata = CardMetadata.from_scryfall({"id": "abc", "name": "Island"})

        assert metadata.cmc == 0.0
        assert metadata.type_line == ""
        assert metadata.colors is None
        assert metadata.color_identity == ()

    def test_front_face_fallback(self) -> None:
        metadata = CardMetadata.from_scryfall(
            {
                "id": "abc",
                "name": "Fable of the Mirror-Breaker // Reflection of Kiki-Jiki",
                "card_faces": [
                    {
                        "mana_cost": "{2}{R}",
                        "type_line": "Enchantment — Saga",
                        "colors": ["R"],
                        "oracle_text": "(As this Saga enters...)",
                    },
                    {"mana_cost": "", "type_line": "Enchantment Creature — Goblin Shaman"},
                ],
            }
        )

        assert metadata.mana_cost == "{2}{R}"
        assert metadata.type_line == "Enchantment — Saga"
        assert metadata.colors == ("R",)
        assert metadata.oracle_text == "(As this Saga enters...)"


class TestDeckCardEntry:
    def test_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="quantity"):
            make_entry("Sol Ring", 0)

    def test_roles_must_be_unique(self) -> None:
        with pytest.raises(ValueError, match="duplicate"):
            make_entry("Sol Ring", roles=("ramp", "ramp"))

    def test_list_roles_stored_as_tuple(self) -> None:
        entry = make_entry("Sol Ring", roles=["ramp"])

        assert entry.roles == ("ramp",)

    def test_role_order_ignored_for_equality(self) -> None:
        first = make_entry("Sol Ring", roles=("ramp", "draw"))
        second = replace(first, roles=("draw", "ramp"))

        assert first == second
        assert hash(first) == hash(second)
        assert second.roles == ("draw", "ramp")

    def test_default_added_at_is_utc(self) -> None:
        assert make_entry("Sol Ring").added_at.tzinfo == UTC

    def test_entries_are_immutable(self) -> None:
        entry = make_entry("Sol Ring")

        with pytest.raises(AttributeError):
            entry.quantity = 3  # type: ignore[misc]


class TestDeck:
    def test_views(self) -> None:
        deck = Deck(
            name="Test",
            format=FORMAT_DEFAULTS[FormatType.COMMANDER],
            cards=[
                make_entry("Sol Ring"),
                make_entry("Shock", inclusion=InclusionStatus.CONSIDERING),
                make_entry("Old Card", inclusion=InclusionStatus.CUT),
            ],
            alternates=[make_entry("Lava Spike")],
            commanders=[CardIdentifier("Atraxa", "2x2", "190")],
        )

        assert [c.card.name for c in deck.confirmed_cards()] == ["Sol Ring"]
        assert [c.card.name for c in deck.maybeboard_cards()] == ["Shock", "Lava Spike"]
        assert deck.card_count() == 2
        assert deck.is_commander

    def test_default_format(self) -> None:
        deck = Deck(name="Test")

        assert deck.format.type == FormatType.KITCHEN_TABLE
        assert deck.format.deck_size == 60
        assert FORMAT_DEFAULTS[FormatType.COMMANDER].deck_size == 100

    def test_card_lists_are_not_shared(self) -> None:
        first = Deck(name="First")
        second = Deck(name="Second")

        first.commanders.append(CardIdentifier("Atraxa", "2x2", "190"))
        first.sideboard.append(make_entry("Pyroblast"))

        assert isinstance(first.commanders, list)
        assert second.commanders == []
        assert second.sideboard == []


class TestParsedCardEntry:
    def test_section_priority(self) -> None:
        assert ParsedCardEntry("A", 1).section == DeckSection.MAINBOARD
        assert ParsedCardEntry("A", 1, is_maybeboard=True).section == DeckSection.MAYBEBOARD
        assert ParsedCardEntry("A", 1, is_sideboard=True).section == DeckSection.SIDEBOARD
        ambiguous = ParsedCardEntry("A", 1, is_commander=True, is_sideboard=True)
        assert ambiguous.section == DeckSection.COMMANDER
        assert ambiguous.has_ambiguous_section is True

    def test_reference(self) -> None:
        entry = ParsedCardEntry("Lightning Bolt", 4, set_code="m21", collector_number="199")

        assert entry.reference == CardReference("Lightning Bolt", "m21", "199")


class TestFailureEnvelope:
    def test_card_not_found_response(self) -> None:
        error = CardNotFoundError("Lightning Bolt")

        response = error.to_response()

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure.kind == FailureKind.NOT_FOUND
        assert response.failure.message == "Card not found: Lightning Bolt"
        assert response.data is None

    def test_success_and_unknown(self) -> None:
        assert ApiResponse.success({"ok": True}).outcome == OutcomeType.SUCCESS
        unknown = ApiResponse.unknown_failure("trace")
        assert unknown.failure.kind == FailureKind.UNKNOWN
        assert unknown.failure.detail == "trace"
