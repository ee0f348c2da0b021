from __future__ import annotations

from typing import Sequence

from .model import CardSet


DEFAULT_HEADER = (
    "# Bingo cards configuration for 2026",
    "# Mark items as complete with: true, incomplete with: false",
)


def _escape(text: str) -> str:
    # Only double quotes are escaped; embedded newlines are not representable.
    return text.replace('"', '\\"')


def serialize(card_set: CardSet, *, header: Sequence[str] = DEFAULT_HEADER) -> str:
    lines: list[str] = [*header, "", "people:"]
    for name, entries in card_set.people.items():
        lines.append(f"  {name}:")
        lines.append("    items:")
        for entry in entries:
            lines.append(f'      - text: "{_escape(entry.text)}"')
            lines.append(f"        marked: {entry.mark.token}")
        lines.append("")
    return "\n".join(lines) + "\n"
