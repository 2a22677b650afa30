"""Tests for aggregate deck statistics."""

from factories import make_enriched, make_entry

from deckbuilder.filtering import (
    count_mana_pips,
    get_cmc_distribution,
    get_type_distribution,
    group_by_role,
    group_by_type,
    summarize_deck,
)
from deckbuilder.models.enriched import EnrichedCard, ManaPipCounts


def _land(name: str = "Mountain", quantity: int = 1) -> EnrichedCard:
    return make_enriched(name, quantity, type_line="Basic Land — Mountain", colors=())


class TestCmcDistribution:
    def test_empty_has_all_buckets(self) -> None:
        assert get_cmc_distribution([]) == {i: 0 for i in range(8)}

    def test_weighted_by_quantity_and_excludes_lands(self) -> None:
        cards = [
            make_enriched("Lightning Bolt", 4, cmc=1),
            make_enriched("Bonecrusher Giant", 2, cmc=3, type_line="Creature — Giant"),
            make_enriched("Emrakul", 1, cmc=15, type_line="Creature — Eldrazi"),
            make_enriched("Ulamog", 1, cmc=10, type_line="Creature — Eldrazi"),
            _land(quantity=20),
        ]

        distribution = get_cmc_distribution(cards)

        assert distribution == {0: 0, 1: 4, 2: 0, 3: 2, 4: 0, 5: 0, 6: 0, 7: 2}

    def test_card_without_metadata_counts_as_zero(self) -> None:
        cards = [EnrichedCard(deck_card=make_entry("Unknown", 3))]

        assert get_cmc_distribution(cards)[0] == 3


class TestCountManaPips:
    def test_all_lands_is_zero(self) -> None:
        cards = [_land(quantity=10), _land("Island", 10)]

        assert count_mana_pips(cards) == ManaPipCounts()
        assert count_mana_pips(cards).total() == 0

    def test_counts_colored_and_generic(self) -> None:
        cards = [
            make_enriched("Lightning Bolt", 4, mana_cost="{R}"),
            make_enriched("Cryptic Command", 2, mana_cost="{1}{U}{U}{U}"),
            make_enriched("Ulamog", 1, mana_cost="{10}"),
        ]

        pips = count_mana_pips(cards)

        assert pips.R == 4
        assert pips.U == 6
        assert pips.C == 2 + 10

    def test_hybrid_counts_each_color_once(self) -> None:
        cards = [make_enriched("Kitchen Finks", 1, mana_cost="{1}{G/W}{G/W}")]

        assert count_mana_pips(cards).as_dict() == {
            "W": 2,
            "U": 0,
            "B": 0,
            "R": 0,
            "G": 2,
            "C": 1,
        }

    def test_phyrexian_and_variable_symbols(self) -> None:
        cards = [
            make_enriched("Dismember", 1, mana_cost="{1}{B/P}{B/P}"),
            make_enriched("Fireball", 1, mana_cost="{X}{R}"),
        ]

        pips = count_mana_pips(cards)

        assert pips.B == 2
        assert pips.R == 1
        assert pips.C == 1

    def test_skips_cards_without_metadata(self) -> None:
        cards = [EnrichedCard(deck_card=make_entry("Unknown", 4))]

        assert count_mana_pips(cards) == ManaPipCounts()


class TestGrouping:
    def test_group_by_type_in_type_order(self) -> None:
        cards = [
            _land(),
            make_enriched("Lightning Bolt", type_line="Instant"),
            make_enriched("Bonecrusher Giant", type_line="Creature — Giant"),
            make_enriched("Sol Ring", type_line="Artifact"),
        ]

        groups = group_by_type(cards)

        assert list(groups) == ["Creature", "Instant", "Artifact", "Land"]
        assert groups["Land"][0].deck_card.card.name == "Mountain"

    def test_group_by_role(self) -> None:
        cards = [
            make_enriched("Sol Ring", roles=("ramp",)),
            make_enriched("Mountain"),
            make_enriched("Arcane Signet", roles=("ramp", "fixing")),
        ]

        groups = group_by_role(cards)

        assert list(groups) == ["ramp", "fixing", None]
        assert [c.deck_card.card.name for c in groups["ramp"]] == ["Sol Ring", "Arcane Signet"]
        assert [c.deck_card.card.name for c in groups[None]] == ["Mountain"]

    def test_type_distribution_weighted(self) -> None:
        cards = [
            _land(quantity=20),
            make_enriched("Lightning Bolt", 4, type_line="Instant"),
            make_enriched("Shock", 2, type_line="Instant"),
        ]

        assert get_type_distribution(cards) == {"Instant": 6, "Land": 20}


class TestSummarizeDeck:
    def test_summary(self) -> None:
        cards = [
            make_enriched("Lightning Bolt", 4, cmc=1, mana_cost="{R}"),
            make_enriched(
                "Bonecrusher Giant", 2, cmc=3, mana_cost="{2}{R}", type_line="Creature — Giant"
            ),
            _land(quantity=18),
        ]

        summary = summarize_deck(cards)

        assert summary.land_count == 18
        assert summary.nonland_count == 6
        assert summary.total_cards == 24
        assert summary.mana_pips.R == 6
        assert summary.mana_pips.C == 4
        assert summary.cmc_distribution[1] == 4
        assert summary.type_distribution == {"Creature": 2, "Instant": 4, "Land": 18}
        assert summary.average_cmc == round((4 * 1 + 2 * 3) / 6, 2)

    def test_empty_summary(self) -> None:
        summary = summarize_deck([])

        assert summary.total_cards == 0
        assert summary.average_cmc == 0.0
