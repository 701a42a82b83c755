"""Ordered timeline operations shared by experience and education."""

from typing import Sequence, TypeVar
from uuid import UUID

from domain.entities.profile import Education, Experience

EntryT = TypeVar("EntryT", Experience, Education)


def prepend_entry(entries: Sequence[EntryT], entry: EntryT) -> list[EntryT]:
    """Return a new list with ``entry`` first, so newest entries lead."""
    return [entry, *entries]


def find_entry(entries: Sequence[EntryT], entry_id: UUID | None) -> int | None:
    """Position of the entry with ``entry_id``, or None if there is none.

    A None id stands for an id that could not be read and matches nothing.
    """
    for position, entry in enumerate(entries):
        if entry.id == entry_id:
            return position
    return None


def remove_entry(entries: Sequence[EntryT], entry_id: UUID | None) -> list[EntryT]:
    """Return a new list without the entry whose id is ``entry_id``.

    An unknown id leaves the sequence unchanged.
    """
    position = find_entry(entries, entry_id)
    if position is None:
        return list(entries)
    return [*entries[:position], *entries[position + 1 :]]
