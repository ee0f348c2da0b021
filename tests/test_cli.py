import sys

import pytest

from goal_bingo.cli import format_grid, main, run
from goal_bingo.core.model import Mark
from goal_bingo.core.parser import parse


@pytest.fixture
def bingo_file(tmp_path, dad_text, card_text):
    path = tmp_path / "bingo.yaml"
    path.write_text(dad_text + card_text({"Kid": [("Tidy room", "false")]})[len("people:\n") :], encoding="utf-8")
    return path


def test_people(bingo_file, capsys):
    assert main(["--file", str(bingo_file), "people"]) == 0
    assert capsys.readouterr().out == "Dad\nKid\n"


def test_show_prints_grid(bingo_file, capsys):
    assert main(["--file", str(bingo_file), "show", "Dad"]) == 0
    rows = capsys.readouterr().out.splitlines()
    assert len(rows) == 5
    assert rows[0].startswith("[x] Wash the car")
    assert "[ ]*Goal 12" in rows[2]


def test_format_grid_truncates_long_text(entries_with):
    entries = entries_with(achieved=[0], disqualified=[1])
    entries[0].text = "A very long goal that will not fit in a cell"
    first_row = format_grid(entries).splitlines()[0]
    assert first_row.startswith("[x] A very long goal…")
    assert "[-] Goal 1" in first_row


def test_check_without_bingo(bingo_file, capsys):
    assert main(["--file", str(bingo_file), "check", "Dad"]) == 1
    assert capsys.readouterr().out == "no bingo\n"


def test_check_with_bingo(tmp_path, capsys, card_text):
    items = [(f"Goal {i}", "true" if i % 5 == 0 else "null") for i in range(25)]
    path = tmp_path / "bingo.yaml"
    path.write_text(card_text({"Mum": items}), encoding="utf-8")
    assert main(["--file", str(path), "check", "Mum"]) == 0
    assert capsys.readouterr().out == "BINGO\n0 5 10 15 20\n"


def test_mark_prints_updated_file(bingo_file, capsys):
    assert main(["--file", str(bingo_file), "mark", "Dad", "3", "false"]) == 0
    card_set = parse(capsys.readouterr().out)
    assert card_set.card("Dad")[3].mark is Mark.DISQUALIFIED
    assert card_set.names() == ["Dad", "Kid"]


def test_mark_toggles_and_writes_output(bingo_file, tmp_path):
    out = tmp_path / "out.yaml"
    assert main(["--file", str(bingo_file), "mark", "Dad", "0", "-o", str(out)]) == 0
    assert parse(out.read_text(encoding="utf-8")).card("Dad")[0].mark is Mark.DISQUALIFIED


def test_mark_rejects_unknown_state(bingo_file):
    with pytest.raises(SystemExit) as exc_info:
        main(["--file", str(bingo_file), "mark", "Dad", "0", "maybe"])
    assert exc_info.value.code == 2


@pytest.mark.parametrize(
    "args,message",
    [
        (["show", "Kid"], "ERROR: Bingo card must have exactly 25 items (found 1)"),
        (["check", "Nobody"], "ERROR: No bingo card found for Nobody"),
        (["mark", "Dad", "30"], "ERROR: Dad has no item 30 (card has 25 items)"),
    ],
)
def test_run_reports_errors(bingo_file, monkeypatch, capsys, args, message):
    monkeypatch.setattr(sys, "argv", ["goal-bingo", "--file", str(bingo_file), *args])
    with pytest.raises(SystemExit) as exc_info:
        run()
    assert exc_info.value.code == 2
    assert capsys.readouterr().err.strip() == message


def test_run_reports_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["goal-bingo", "--file", str(tmp_path / "nope.yaml"), "people"])
    with pytest.raises(SystemExit) as exc_info:
        run()
    assert exc_info.value.code == 2
    err = capsys.readouterr().err
    assert err.startswith("ERROR: Bingo file not found:")
    assert "BINGO_FILE" in err


def test_default_file_comes_from_settings(bingo_file, monkeypatch, capsys):
    monkeypatch.setenv("BINGO_FILE", str(bingo_file))
    assert main(["people"]) == 0
    assert capsys.readouterr().out == "Dad\nKid\n"
