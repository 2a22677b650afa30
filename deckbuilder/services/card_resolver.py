"""
Card Identity Resolution Service.

Resolves UNTRUSTED parsed card entries to canonical card identifiers using
an injected lookup capability.

INVARIANTS:
1. Set + collector number present -> exact printing lookup; otherwise fuzzy name
2. A lookup miss is a CardNotFoundError for that entry, never a silent skip
3. The resolver never retries or rate limits; that belongs to the lookup
4. Parsed set/collector values win over the printing the lookup returned
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from deckbuilder.models.card import CardIdentifier, CardMetadata
from deckbuilder.models.failure import CardNotFoundError
from deckbuilder.models.parsed import ParsedCardEntry

logger = logging.getLogger(__name__)


class CardLookup(Protocol):
    """External card database capability. Both methods return None on no match."""

    async def lookup_by_name_fuzzy(self, name: str) -> CardMetadata | None: ...

    async def lookup_by_set_and_number(
        self, set_code: str, collector_number: str
    ) -> CardMetadata | None: ...


@dataclass(frozen=True, slots=True)
class ResolvedCard:
    """A parsed entry together with its canonical identity and metadata."""

    entry: ParsedCardEntry
    identifier: CardIdentifier
    metadata: CardMetadata


@dataclass
class ResolutionResult:
    """Result of resolving a batch of parsed entries."""

    resolved: list[ResolvedCard] = field(default_factory=list)
    """Successfully resolved entries, in input order."""

    unresolved: list[CardNotFoundError] = field(default_factory=list)
    """One error per entry the lookup could not match."""

    @property
    def all_resolved(self) -> bool:
        return not self.unresolved


async def resolve_card(entry: ParsedCardEntry, lookup: CardLookup) -> ResolvedCard:
    """
    Resolve one parsed entry.

    Args:
        entry: Parsed card entry
        lookup: Card lookup capability

    Returns:
        ResolvedCard with canonical identifier and metadata

    Raises:
        CardNotFoundError: If the lookup returns nothing
    """
    ref = entry.reference
    if ref.set_code and ref.collector_number:
        metadata = await lookup.lookup_by_set_and_number(ref.set_code, ref.collector_number)
    else:
        metadata = await lookup.lookup_by_name_fuzzy(ref.name)

    if metadata is None:
        raise CardNotFoundError(
            name=ref.name,
            set_code=ref.set_code,
            collector_number=ref.collector_number,
        )

    identifier = CardIdentifier(
        name=metadata.name,
        set_code=ref.set_code or metadata.set,
        collector_number=ref.collector_number or metadata.collector_number,
        scryfall_id=metadata.id,
    )
    return ResolvedCard(entry=entry, identifier=identifier, metadata=metadata)


class CardIdentityResolver:
    """
    Resolves ParsedCardEntry -> CardIdentifier for a whole import.

    CONTRACT:
    - Input: Untrusted ParsedCardEntry list
    - Output: ResolutionResult with per-entry failures collected, or a
      CardNotFoundError from resolve_or_fail
    """

    def __init__(self, lookup: CardLookup) -> None:
        self._lookup = lookup

    async def resolve(self, entries: Sequence[ParsedCardEntry]) -> ResolutionResult:
        """
        Resolve entries one by one, collecting failures.

        Lookups are awaited sequentially so the lookup service sees one
        request at a time.
        """
        result = ResolutionResult()

        for entry in entries:
            try:
                result.resolved.append(await resolve_card(entry, self._lookup))
            except CardNotFoundError as e:
                logger.warning(
                    "card_not_found",
                    extra={
                        "card_name": e.name,
                        "set_code": e.set_code,
                        "collector_number": e.collector_number,
                    },
                )
                result.unresolved.append(e)

        return result

    async def resolve_or_fail(self, entries: Sequence[ParsedCardEntry]) -> list[ResolvedCard]:
        """
        Resolve entries, raising if ANY entry cannot be resolved.

        Raises:
            CardNotFoundError: The first failure, with every failed name in detail
        """
        result = await self.resolve(entries)

        if result.unresolved:
            first = result.unresolved[0]
            raise CardNotFoundError(
                name=first.name,
                set_code=first.set_code,
                collector_number=first.collector_number,
                detail="Unresolved: " + ", ".join(e.name for e in result.unresolved),
            )

        return result.resolved
