"""
Deck analysis endpoint.

Applies filters to a card list joined with client-supplied metadata and
returns the filtered cards with curve, pip and type statistics.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from deckbuilder.api.payloads import CardMetadataPayload, DeckCardPayload
from deckbuilder.filtering import (
    apply_filters,
    enrich_cards,
    get_card_type,
    parse_filters,
    summarize_deck,
)

router = APIRouter(prefix="/analysis", tags=["analysis"])


class FilterPayload(BaseModel):
    """One filter; values are validated by the filter model, not here."""

    type: str
    mode: str
    values: list[Any] = Field(default_factory=list)


class AnalysisRequest(BaseModel):
    cards: list[DeckCardPayload]
    metadata: dict[str, CardMetadataPayload] = Field(default_factory=dict)
    filters: list[FilterPayload] = Field(default_factory=list)


class AnalyzedCard(BaseModel):
    card: DeckCardPayload
    primary_type: str
    has_metadata: bool


class SummaryPayload(BaseModel):
    cmc_distribution: dict[int, int]
    mana_pips: dict[str, int]
    type_distribution: dict[str, int]
    land_count: int
    nonland_count: int
    total_cards: int
    average_cmc: float


class AnalysisResponse(BaseModel):
    cards: list[AnalyzedCard]
    total_input: int
    total_matched: int
    summary: SummaryPayload


@router.post("/view", response_model=AnalysisResponse)
async def analysis_view(request: AnalysisRequest) -> AnalysisResponse:
    """
    Filter and summarize a card list.

    The summary covers the filtered cards. An invalid filter rejects the
    whole request with 400 before any card is evaluated.
    """
    filters = parse_filters(f.model_dump() for f in request.filters)

    cache = {key: m.to_metadata() for key, m in request.metadata.items()}
    enriched = enrich_cards((c.to_entry() for c in request.cards), cache)
    matched = apply_filters(enriched, filters)

    summary = summarize_deck(matched)
    return AnalysisResponse(
        cards=[
            AnalyzedCard(
                card=DeckCardPayload.from_entry(e.deck_card),
                primary_type=get_card_type(e),
                has_metadata=e.metadata is not None,
            )
            for e in matched
        ],
        total_input=len(enriched),
        total_matched=len(matched),
        summary=SummaryPayload(
            cmc_distribution=summary.cmc_distribution,
            mana_pips=summary.mana_pips.as_dict(),
            type_distribution=summary.type_distribution,
            land_count=summary.land_count,
            nonland_count=summary.nonland_count,
            total_cards=summary.total_cards,
            average_cmc=summary.average_cmc,
        ),
    )
