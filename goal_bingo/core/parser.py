from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from .model import CardSet, Entry, Mark


logger = logging.getLogger(__name__)

_PERSON_RE = re.compile(r"^[A-Za-z]+:$")
_ENTRY_PREFIX = " " * 6 + "- text:"
_MARKED_PREFIX = " " * 8 + "marked:"


@dataclass(frozen=True)
class ParseResult:
    card_set: CardSet
    ignored_lines: list[str]


def _at_indent(raw: str, line: str, width: int) -> bool:
    # Exactly `width` spaces; tabs or extra spaces do not count.
    return raw.rstrip() == " " * width + line


def _quoted_text(line: str) -> str | None:
    """Return the text between the first and last double quote, unescaped.

    ``None`` means the line has no quoted value and should be skipped.
    """
    opening = line.find('"')
    if opening == -1:
        return None
    closing = line.rfind('"')
    if closing == opening:
        return None
    return line[opening + 1 : closing].replace('\\"', '"')


def parse_bingo_text(text: str) -> ParseResult:
    card_set = CardSet()
    ignored: list[str] = []
    current: list[Entry] | None = None
    current_entry: Entry | None = None

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line == "people:":
            continue

        if _at_indent(raw, line, 2) and _PERSON_RE.match(line):
            current = card_set.people[line[:-1]] = []
            current_entry = None
            continue

        if _at_indent(raw, line, 4) and line == "items:":
            continue

        if raw.startswith(_ENTRY_PREFIX):
            value = _quoted_text(line)
            if value is None or current is None:
                logger.debug("Skipping entry line without a value or person: %r", raw)
                ignored.append(raw)
                continue
            current_entry = Entry(text=value)
            current.append(current_entry)
            continue

        if raw.startswith(_MARKED_PREFIX):
            if current_entry is not None:
                current_entry.mark = Mark.from_token(line.partition(":")[2].strip())
            else:
                ignored.append(raw)
            # A marked line only ever applies to the entry right above it.
            current_entry = None
            continue

        logger.debug("Ignoring unrecognized line: %r", raw)
        ignored.append(raw)

    logger.debug(
        "Parsed %d people, ignored %d lines",
        len(card_set.people),
        len(ignored),
    )
    return ParseResult(card_set=card_set, ignored_lines=ignored)


def parse(text: str) -> CardSet:
    return parse_bingo_text(text).card_set
