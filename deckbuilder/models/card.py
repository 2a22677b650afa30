"""
Card identity and external metadata models.

CardReference is a loosely identified card as it appears in foreign text.
CardIdentifier is the canonical identity stored in a deck.
CardMetadata is the read-only record supplied by the external card database.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CardReference:
    """
    A card as referenced by a third-party deck list.

    Attributes:
        name: Card name (mandatory)
        set_code: Set code disambiguator, lower-case (e.g., "m21")
        collector_number: Collector number, verbatim (e.g., "199", "81p")
    """

    name: str
    set_code: str | None = None
    collector_number: str | None = None


@dataclass(frozen=True, slots=True)
class CardIdentifier:
    """
    Canonical card identity.

    Attributes:
        name: Human-readable key, matched case-insensitively
        set_code: Set code of the chosen printing
        collector_number: Collector number of the chosen printing
        scryfall_id: Opaque external key, set only when resolution succeeded
    """

    name: str
    set_code: str
    collector_number: str
    scryfall_id: str | None = None

    @property
    def name_key(self) -> str:
        """Case-insensitive identity key."""
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class CardMetadata:
    """
    External card metadata (Scryfall card object subset).

    Attributes:
        id: Scryfall card id
        name: Canonical card name
        cmc: Converted mana cost / mana value
        type_line: Full type line (e.g., "Creature — Human Wizard")
        color_identity: Color identity letters
        set: Set code of this printing
        collector_number: Collector number of this printing
        mana_cost: Raw mana cost string (e.g., "{2}{W}{U}"), front face for DFCs
        colors: Color letters, None when Scryfall omits them (DFCs)
        rarity: common, uncommon, rare, mythic
        oracle_text: Rules text
    """

    id: str
    name: str
    cmc: float
    type_line: str
    color_identity: tuple[str, ...]
    set: str
    collector_number: str
    mana_cost: str | None = None
    colors: tuple[str, ...] | None = None
    rarity: str | None = None
    oracle_text: str | None = None

    @classmethod
    def from_scryfall(cls, card: dict[str, Any]) -> "CardMetadata":
        """Build metadata from a Scryfall card JSON object."""
        faces = card.get("card_faces") or []
        front = faces[0] if faces else {}

        mana_cost = card.get("mana_cost") or front.get("mana_cost") or None

        colors = card.get("colors")
        if colors is None:
            colors = front.get("colors")

        return cls(
            id=str(card["id"]),
            name=str(card["name"]),
            cmc=float(card.get("cmc", 0.0)),
            type_line=str(card.get("type_line") or front.get("type_line", "")),
            color_identity=tuple(card.get("color_identity", [])),
            set=str(card.get("set", "")),
            collector_number=str(card.get("collector_number", "")),
            mana_cost=mana_cost,
            colors=tuple(colors) if colors is not None else None,
            rarity=card.get("rarity"),
            oracle_text=card.get("oracle_text") or front.get("oracle_text"),
        )
