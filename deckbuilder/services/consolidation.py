"""
Duplicate consolidation for deck card lists.

Entries are keyed by case-insensitive card name. For each group:
- quantity: sum
- roles: union in first-seen order
- added_at: earliest
- is_pinned: any
- notes: distinct non-empty notes joined by newline, in group order
- everything else: first entry
"""

from collections.abc import Sequence
from dataclasses import replace
from typing import Protocol, TypeVar

from deckbuilder.models.deck import DeckCardEntry


class _NamedCard(Protocol):
    @property
    def name_key(self) -> str: ...


NamedT = TypeVar("NamedT", bound=_NamedCard)


def find_card_index_by_name(entries: Sequence[NamedT], name: str) -> int:
    """Index of the entry matching `name` case-insensitively, -1 if absent."""
    key = name.lower()
    for index, entry in enumerate(entries):
        if entry.name_key == key:
            return index
    return -1


def find_card_by_name(entries: Sequence[NamedT], name: str) -> NamedT | None:
    """Entry matching `name` case-insensitively."""
    index = find_card_index_by_name(entries, name)
    return entries[index] if index >= 0 else None


def _merge_group(group: list[DeckCardEntry]) -> DeckCardEntry:
    first = group[0]
    if len(group) == 1:
        return first

    roles: list[str] = []
    notes: list[str] = []
    for entry in group:
        for role in entry.roles:
            if role not in roles:
                roles.append(role)
        if entry.notes and entry.notes not in notes:
            notes.append(entry.notes)

    return replace(
        first,
        quantity=sum(e.quantity for e in group),
        roles=tuple(roles),
        added_at=min(e.added_at for e in group),
        is_pinned=any(e.is_pinned for e in group),
        notes="\n".join(notes) if notes else None,
    )


def consolidate_duplicate_cards(entries: Sequence[DeckCardEntry]) -> list[DeckCardEntry]:
    """
    Merge entries that refer to the same card name.

    Does not mutate its input. Output order is the first-seen order of each
    distinct name. Idempotent.
    """
    groups: dict[str, list[DeckCardEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.name_key, []).append(entry)

    return [_merge_group(group) for group in groups.values()]
