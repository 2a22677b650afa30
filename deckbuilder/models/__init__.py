from deckbuilder.models.card import CardIdentifier, CardMetadata, CardReference
from deckbuilder.models.deck import (
    FORMAT_DEFAULTS,
    AddedBy,
    Deck,
    DeckCardEntry,
    DeckFormat,
    FormatType,
    InclusionStatus,
    OwnershipStatus,
    RenderOptions,
)
from deckbuilder.models.enriched import (
    CMC_MAX_BUCKET,
    COLORLESS,
    MANA_COLORS,
    CardFilter,
    EnrichedCard,
    FilterMode,
    FilterType,
    ManaPipCounts,
)
from deckbuilder.models.failure import (
    ApiResponse,
    CardNotFoundError,
    FailureDetail,
    FailureKind,
    InvalidFilterSpecificationError,
    KnownError,
    LookupServiceError,
    OutcomeType,
    UnknownFormatError,
)
from deckbuilder.models.parsed import (
    DeckSection,
    MalformedLine,
    ParsedCardEntry,
    ParsedDeckText,
)

__all__ = [
    "CardIdentifier",
    "CardMetadata",
    "CardReference",
    "FORMAT_DEFAULTS",
    "AddedBy",
    "Deck",
    "DeckCardEntry",
    "DeckFormat",
    "FormatType",
    "InclusionStatus",
    "OwnershipStatus",
    "RenderOptions",
    "CMC_MAX_BUCKET",
    "COLORLESS",
    "MANA_COLORS",
    "CardFilter",
    "EnrichedCard",
    "FilterMode",
    "FilterType",
    "ManaPipCounts",
    # Failure taxonomy
    "ApiResponse",
    "CardNotFoundError",
    "FailureDetail",
    "FailureKind",
    "InvalidFilterSpecificationError",
    "KnownError",
    "LookupServiceError",
    "OutcomeType",
    "UnknownFormatError",
    # Parsed (untrusted) structures
    "DeckSection",
    "MalformedLine",
    "ParsedCardEntry",
    "ParsedDeckText",
]
