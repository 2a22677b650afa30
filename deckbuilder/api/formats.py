"""
Deck list format endpoints.

List the registered dialects, detect the dialect of a text, parse text
into unresolved entries and render a deck into any dialect.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from deckbuilder.api.payloads import (
    DeckPayload,
    MalformedLinePayload,
    ParsedCardPayload,
)
from deckbuilder.formats import AUTO_FORMAT, FORMATS, detect_format, get_format, parse_deck_text
from deckbuilder.models.deck import RenderOptions
from deckbuilder.models.failure import UnknownFormatError

router = APIRouter(prefix="/formats", tags=["formats"])


class FormatInfo(BaseModel):
    """A registered dialect."""

    id: str
    name: str
    description: str


class DetectRequest(BaseModel):
    text: str


class DetectResponse(BaseModel):
    format_id: str
    name: str


class ParseRequest(BaseModel):
    text: str
    format_id: str = AUTO_FORMAT


class ParseResponse(BaseModel):
    """Parsed entries; nothing here has been checked against a card database."""

    format_id: str
    cards: list[ParsedCardPayload]
    malformed_lines: list[MalformedLinePayload]
    section_counts: dict[str, int] = Field(default_factory=dict)


class RenderRequest(BaseModel):
    deck: DeckPayload
    format_id: str
    include_sideboard: bool = False
    include_maybeboard: bool = False


class RenderResponse(BaseModel):
    format_id: str
    text: str


@router.get("", response_model=list[FormatInfo])
async def list_formats() -> list[FormatInfo]:
    """Registered dialects in detection order."""
    return [FormatInfo(id=f.id, name=f.name, description=f.description) for f in FORMATS]


@router.post("/detect", response_model=DetectResponse)
async def detect(request: DetectRequest) -> DetectResponse:
    """Detect the dialect of a deck list. Always succeeds."""
    handler = detect_format(request.text)
    return DetectResponse(format_id=handler.id, name=handler.name)


@router.post("/parse", response_model=ParseResponse)
async def parse(request: ParseRequest) -> ParseResponse:
    """
    Parse deck list text.

    Malformed lines are reported, not rejected. Returns 400 for an unknown
    format id.
    """
    parsed = parse_deck_text(request.text, request.format_id)
    return ParseResponse(
        format_id=parsed.format_id,
        cards=[ParsedCardPayload.from_entry(c) for c in parsed.cards],
        malformed_lines=[MalformedLinePayload.from_line(m) for m in parsed.malformed_lines],
        section_counts={
            section.value: count for section, count in parsed.count_by_section().items()
        },
    )


@router.post("/render", response_model=RenderResponse)
async def render(request: RenderRequest) -> RenderResponse:
    """Render a deck in the requested dialect. Returns 400 for an unknown format id."""
    handler = get_format(request.format_id)
    if handler is None:
        raise UnknownFormatError(request.format_id, [f.id for f in FORMATS])

    text = handler.render(
        request.deck.to_deck(),
        RenderOptions(
            include_maybeboard=request.include_maybeboard,
            include_sideboard=request.include_sideboard,
        ),
    )
    return RenderResponse(format_id=handler.id, text=text)
