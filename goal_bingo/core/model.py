from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


CARD_SIZE = 25
GRID_WIDTH = 5
FREE_SPACE_INDEX = 12


class UnknownPersonError(KeyError):
    def __str__(self) -> str:
        return f"No bingo card found for {self.args[0]}"


class Mark(Enum):
    """Completion state of one card entry, valued by its wire token."""

    ACHIEVED = "true"
    DISQUALIFIED = "false"
    UNSET = "null"

    @classmethod
    def from_token(cls, token: str) -> Mark:
        # Anything other than true/false collapses to UNSET.
        if token == cls.ACHIEVED.value:
            return cls.ACHIEVED
        if token == cls.DISQUALIFIED.value:
            return cls.DISQUALIFIED
        return cls.UNSET

    @property
    def token(self) -> str:
        return self.value

    def cycle(self) -> Mark:
        return _CYCLE[self]


_CYCLE = {
    Mark.UNSET: Mark.ACHIEVED,
    Mark.ACHIEVED: Mark.DISQUALIFIED,
    Mark.DISQUALIFIED: Mark.UNSET,
}


@dataclass
class Entry:
    text: str
    mark: Mark = Mark.UNSET


@dataclass(eq=False)
class CardSet:
    people: dict[str, list[Entry]] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CardSet):
            return NotImplemented
        # Person order is part of the value; plain dict equality ignores it.
        return list(self.people.items()) == list(other.people.items())

    def names(self) -> list[str]:
        return list(self.people)

    def card(self, name: str) -> list[Entry]:
        try:
            return self.people[name]
        except KeyError:
            raise UnknownPersonError(name) from None

    def entry(self, name: str, index: int) -> Entry:
        entries = self.card(name)
        # Negative indexes are rejected rather than counted from the end.
        if not 0 <= index < len(entries):
            raise IndexError(f"{name} has no item {index} (card has {len(entries)} items)")
        return entries[index]

    def set_mark(self, name: str, index: int, mark: Mark) -> Entry:
        entry = self.entry(name, index)
        entry.mark = mark
        return entry

    def toggle(self, name: str, index: int) -> Entry:
        entry = self.entry(name, index)
        entry.mark = entry.mark.cycle()
        return entry

    def size_anomalies(self) -> dict[str, int]:
        return {name: len(entries) for name, entries in self.people.items() if len(entries) != CARD_SIZE}
