"""
Failure classification for deck import, export and analysis.

Every error the core surfaces to a caller is a KnownError subclass with a
FailureKind. Transport layers (the HTTP API, the CLI job) turn these into
the ApiResponse envelope or an exit message; the core never decides whether
a failure aborts the surrounding operation.

Recovered conditions (a malformed line, an ambiguous section) are data,
not exceptions. See MalformedLine and ParsedCardEntry.has_ambiguous_section.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """What went wrong, independent of the HTTP status used to report it."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    EXTERNAL_API_ERROR = "external_api_error"
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


DataT = TypeVar("DataT")


class FailureDetail(BaseModel):
    """The failure half of the envelope."""

    kind: FailureKind
    message: str = Field(description="Short explanation shown to the user")
    detail: str | None = Field(default=None, description="Technical context, if any")
    suggestion: str | None = Field(default=None, description="What the user can try next")


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Envelope returned by the HTTP surface.

    Exactly one of `data` and `failure` is set, depending on `outcome`.
    """

    outcome: OutcomeType
    data: DataT | None = None
    failure: FailureDetail | None = None

    @classmethod
    def success(cls, data: DataT) -> "ApiResponse[DataT]":
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def from_error(cls, error: "KnownError") -> "ApiResponse[Any]":
        return cls(outcome=OutcomeType.KNOWN_FAILURE, failure=error.failure)

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse[Any]":
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong while handling the deck.",
                detail=detail,
            ),
        )


class KnownError(Exception):
    """
    A failure the package can explain.

    Carries the HTTP status the API should answer with, so handlers never
    map exception types to codes themselves.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        *,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code

    @property
    def failure(self) -> FailureDetail:
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )

    def to_response(self) -> ApiResponse[Any]:
        return ApiResponse.from_error(self)


class CardNotFoundError(KnownError):
    """
    The lookup service has no match for a card reference.

    Scoped to a single entry; the import decides whether to skip or abort.
    """

    def __init__(
        self,
        name: str,
        set_code: str | None = None,
        collector_number: str | None = None,
        detail: str | None = None,
    ):
        self.name = name
        self.set_code = set_code
        self.collector_number = collector_number

        printing = (
            f" ({set_code.upper()}) {collector_number}" if set_code and collector_number else ""
        )
        super().__init__(
            FailureKind.NOT_FOUND,
            f"Card not found: {name}{printing}",
            detail=detail,
            suggestion="Check the card name spelling, set code and collector number.",
            status_code=404,
        )


class InvalidFilterSpecificationError(KnownError):
    """A filter set contains an unknown type, mode or value. Nothing was filtered."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            FailureKind.INVALID_INPUT,
            message,
            detail=detail,
            suggestion="Valid filter types: cmc, color, card-type, role. "
            "Valid modes: include, exclude.",
        )


class UnknownFormatError(KnownError):
    """A deck list dialect id is not registered."""

    def __init__(self, format_id: str, known: list[str]):
        self.format_id = format_id
        super().__init__(
            FailureKind.INVALID_INPUT,
            f"Unknown deck format: {format_id}",
            detail=f"Known formats: {', '.join(known)}",
            suggestion="Use 'auto' to detect the format from the text.",
        )


class LookupServiceError(KnownError):
    """The card lookup service failed for a reason other than 'no match'."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            FailureKind.EXTERNAL_API_ERROR,
            message,
            detail=detail,
            suggestion="Retry later; the card database may be temporarily unavailable.",
            status_code=502,
        )
