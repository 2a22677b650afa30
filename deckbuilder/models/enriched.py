"""
Enriched card and filter models.

EnrichedCard pairs a deck entry with cached external metadata. CardFilter is
a tagged variant: the `type` tag selects how the card's derived value is
computed, `mode` selects intersect (include) or disjoint (exclude).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from deckbuilder.models.card import CardMetadata
from deckbuilder.models.deck import DeckCardEntry
from deckbuilder.models.failure import InvalidFilterSpecificationError

# Highest CMC bucket; holds every mana value of 7 or more
CMC_MAX_BUCKET = 7

COLORLESS = "C"

MANA_COLORS: tuple[str, ...] = ("W", "U", "B", "R", "G")


@dataclass(frozen=True, slots=True)
class EnrichedCard:
    """A deck entry joined with its cached metadata (None on cache miss)."""

    deck_card: DeckCardEntry
    metadata: CardMetadata | None = None


class FilterType(str, Enum):
    CMC = "cmc"
    COLOR = "color"
    CARD_TYPE = "card-type"
    ROLE = "role"


class FilterMode(str, Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"


def _coerce_values(filter_type: FilterType, values: Any) -> frozenset[Any]:
    if not isinstance(values, list | tuple | set | frozenset):
        raise InvalidFilterSpecificationError(
            f"Filter values for '{filter_type.value}' must be a list",
            detail=f"Got {type(values).__name__} {values!r}",
        )

    if filter_type == FilterType.CMC:
        buckets: set[int] = set()
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidFilterSpecificationError(
                    "CMC filter values must be integers",
                    detail=f"Got {value!r}",
                )
            if not 0 <= value <= CMC_MAX_BUCKET:
                raise InvalidFilterSpecificationError(
                    f"CMC filter values must be between 0 and {CMC_MAX_BUCKET}",
                    detail=f"Got {value}",
                )
            buckets.add(value)
        return frozenset(buckets)

    strings: set[str] = set()
    for value in values:
        if not isinstance(value, str) or not value:
            raise InvalidFilterSpecificationError(
                f"Filter values for '{filter_type.value}' must be non-empty strings",
                detail=f"Got {value!r}",
            )
        strings.add(value.upper() if filter_type == FilterType.COLOR else value)
    return frozenset(strings)


@dataclass(frozen=True, slots=True)
class CardFilter:
    """
    One compositional filter.

    Accepts plain strings for type and mode; both are validated and coerced
    at construction so evaluation never meets an unknown tag.
    """

    type: FilterType
    mode: FilterMode
    values: frozenset[Any]

    def __post_init__(self) -> None:
        try:
            filter_type = FilterType(self.type)
        except ValueError:
            raise InvalidFilterSpecificationError(
                f"Unknown filter type: {self.type!r}",
                detail=f"Expected one of: {', '.join(t.value for t in FilterType)}",
            ) from None
        try:
            mode = FilterMode(self.mode)
        except ValueError:
            raise InvalidFilterSpecificationError(
                f"Unknown filter mode: {self.mode!r}",
                detail=f"Expected one of: {', '.join(m.value for m in FilterMode)}",
            ) from None

        object.__setattr__(self, "type", filter_type)
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "values", _coerce_values(filter_type, self.values))


@dataclass(frozen=True, slots=True)
class ManaPipCounts:
    """Colored pip and generic mana totals, weighted by quantity."""

    W: int = 0
    U: int = 0
    B: int = 0
    R: int = 0
    G: int = 0
    C: int = 0

    def total(self) -> int:
        return self.W + self.U + self.B + self.R + self.G + self.C

    def as_dict(self) -> dict[str, int]:
        return {"W": self.W, "U": self.U, "B": self.B, "R": self.R, "G": self.G, "C": self.C}
