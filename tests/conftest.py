import pytest

from goal_bingo.core.model import CardSet, Entry, Mark


def _card_text(people: dict[str, list[tuple[str, str]]]) -> str:
    lines = ["people:"]
    for name, items in people.items():
        lines.append(f"  {name}:")
        lines.append("    items:")
        for text, marked in items:
            lines.append(f'      - text: "{text}"')
            lines.append(f"        marked: {marked}")
    return "\n".join(lines) + "\n"


def _entries_with(achieved=(), disqualified=()) -> list[Entry]:
    entries = [Entry(text=f"Goal {i}") for i in range(25)]
    for i in achieved:
        entries[i].mark = Mark.ACHIEVED
    for i in disqualified:
        entries[i].mark = Mark.DISQUALIFIED
    return entries


@pytest.fixture
def card_text():
    return _card_text


@pytest.fixture
def entries_with():
    return _entries_with


@pytest.fixture
def dad_text() -> str:
    return _card_text({"Dad": [("Wash the car", "true")] + [(f"Goal {i}", "null") for i in range(1, 25)]})


@pytest.fixture
def card_set() -> CardSet:
    return CardSet(
        people={
            "Dad": _entries_with(achieved=[0, 1, 2, 3]),
            "Kid": [Entry("Only one", Mark.DISQUALIFIED)],
        }
    )
