from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from goal_bingo.config import load_settings
from goal_bingo.core.model import CARD_SIZE, FREE_SPACE_INDEX, GRID_WIDTH, CardSet, Entry, Mark
from goal_bingo.core.parser import parse_bingo_text
from goal_bingo.core.serializer import serialize
from goal_bingo.core.wins import CardSizeError, winning_lines


logger = logging.getLogger(__name__)

CELL_WIDTH = 22
_CHECKBOX = {Mark.ACHIEVED: "[x]", Mark.DISQUALIFIED: "[-]", Mark.UNSET: "[ ]"}


def _read_card_set(path: Path) -> CardSet:
    if not path.exists():
        raise RuntimeError(
            "Bingo file not found:\n"
            f"  {path}\n"
            "\n"
            "Tip: pass --file /path/to/bingo.yaml or set BINGO_FILE"
        )
    result = parse_bingo_text(path.read_text(encoding="utf-8"))
    for line in result.ignored_lines:
        logger.info("Ignored line: %s", line.strip())
    return result.card_set


def _full_card(card_set: CardSet, name: str) -> list[Entry]:
    entries = card_set.card(name)
    if len(entries) != CARD_SIZE:
        raise CardSizeError(len(entries))
    return entries


def _cell(index: int, entry: Entry) -> str:
    text = entry.text
    width = CELL_WIDTH - 5
    if len(text) > width:
        text = text[: width - 1] + "…"
    star = "*" if index == FREE_SPACE_INDEX else " "
    return f"{_CHECKBOX[entry.mark]}{star}{text:<{width}}"


def format_grid(entries: list[Entry]) -> str:
    rows = []
    for start in range(0, CARD_SIZE, GRID_WIDTH):
        cells = [_cell(i, entries[i]) for i in range(start, start + GRID_WIDTH)]
        rows.append(" | ".join(cells).rstrip())
    return "\n".join(rows)


def _parse_state(value: str) -> Mark:
    if value not in {mark.token for mark in Mark}:
        raise argparse.ArgumentTypeError("state must be one of: true, false, null")
    return Mark.from_token(value)


def _cmd_people(card_set: CardSet, args: argparse.Namespace) -> int:
    for name in card_set.names():
        print(name)
    return 0


def _cmd_show(card_set: CardSet, args: argparse.Namespace) -> int:
    print(format_grid(_full_card(card_set, args.name)))
    return 0


def _cmd_check(card_set: CardSet, args: argparse.Namespace) -> int:
    lines = winning_lines(_full_card(card_set, args.name))
    if not lines:
        print("no bingo")
        return 1
    print("BINGO")
    for line in lines:
        print(" ".join(str(i) for i in line))
    return 0


def _cmd_mark(card_set: CardSet, args: argparse.Namespace) -> int:
    if args.state is None:
        entry = card_set.toggle(args.name, args.index)
    else:
        entry = card_set.set_mark(args.name, args.index, args.state)
    logger.info("%s item %d is now %s", args.name, args.index, entry.mark.token)

    text = serialize(card_set)
    if args.output:
        Path(args.output).expanduser().write_text(text, encoding="utf-8")
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text)
    return 0


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description="Inspect and update bingo cards stored in a bingo.yaml file.")
    parser.add_argument("--file", default=None, help="Path to the bingo file (default: BINGO_FILE or bingo.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log parsing details")
    commands = parser.add_subparsers(dest="command", required=True)

    people = commands.add_parser("people", help="List people in file order")
    people.set_defaults(func=_cmd_people)

    show = commands.add_parser("show", help="Print a person's card as a 5x5 grid")
    show.add_argument("name")
    show.set_defaults(func=_cmd_show)

    check = commands.add_parser("check", help="Report whether a card has a bingo (exit 1 if not)")
    check.add_argument("name")
    check.set_defaults(func=_cmd_check)

    mark = commands.add_parser("mark", help="Set or toggle one item and print the updated file")
    mark.add_argument("name")
    mark.add_argument("index", type=int)
    mark.add_argument("state", nargs="?", type=_parse_state, default=None, help="true, false or null (omit to toggle)")
    mark.add_argument("-o", "--output", default=None, help="Write the updated file here instead of stdout")
    mark.set_defaults(func=_cmd_mark)

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(message)s")

    path = Path(args.file).expanduser() if args.file else load_settings().data_path
    card_set = _read_card_set(path)
    return args.func(card_set, args)


def run() -> None:
    try:
        raise SystemExit(main(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        raise SystemExit(130)
    except Exception as exc:
        msg = str(exc).rstrip() or repr(exc)
        if "\n" in msg:
            first, rest = msg.split("\n", 1)
            print(f"ERROR: {first}", file=sys.stderr)
            print(rest, file=sys.stderr)
        else:
            print(f"ERROR: {msg}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    run()
