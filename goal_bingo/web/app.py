from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request

from goal_bingo.config import load_settings
from goal_bingo.core.model import CARD_SIZE, FREE_SPACE_INDEX, CardSet, Entry, Mark, UnknownPersonError
from goal_bingo.core.parser import parse_bingo_text
from goal_bingo.core.serializer import serialize
from goal_bingo.core.wins import CardSizeError, winning_lines


logger = logging.getLogger(__name__)

_JSON_TO_MARK = {True: Mark.ACHIEVED, False: Mark.DISQUALIFIED, None: Mark.UNSET}
_MARK_TO_JSON = {mark: value for value, mark in _JSON_TO_MARK.items()}


settings = load_settings()

app = Flask(__name__)
app.secret_key = settings.secret_key
app.config["BINGO_FILE"] = settings.data_path


def _load_card_set() -> CardSet:
    path = app.config["BINGO_FILE"]
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Unable to load bingo data from %s: %s", path, e)
        return CardSet()

    result = parse_bingo_text(text)
    for name, count in result.card_set.size_anomalies().items():
        logger.warning("%s has %d items; cards need exactly 25", name, count)
    return result.card_set


def _card_set() -> CardSet:
    # One card set per process: loaded on first use, then mutated in place.
    if app.config.get("CARD_SET") is None:
        app.config["CARD_SET"] = _load_card_set()
    return app.config["CARD_SET"]


def _item_json(index: int, entry: Entry) -> dict:
    return {
        "index": index,
        "text": entry.text,
        "marked": _MARK_TO_JSON[entry.mark],
        "free_space": index == FREE_SPACE_INDEX,
    }


def _error(message: str, status: int, **extra) -> tuple[Response, int]:
    return jsonify(error=message, **extra), status


@app.errorhandler(UnknownPersonError)
def unknown_person(e: UnknownPersonError) -> tuple[Response, int]:
    return _error(str(e), 404)


@app.errorhandler(CardSizeError)
def wrong_card_size(e: CardSizeError) -> tuple[Response, int]:
    return _error(str(e), 422, count=e.count)


@app.get("/api/people")
def people() -> Response:
    return jsonify(people=_card_set().names())


@app.get("/api/people/<name>")
def card(name: str) -> Response:
    entries = _card_set().card(name)
    lines = winning_lines(entries)
    return jsonify(
        name=name,
        items=[_item_json(i, entry) for i, entry in enumerate(entries)],
        bingo=bool(lines),
        winning_lines=[list(line) for line in lines],
    )


@app.post("/api/people/<name>/items/<int:index>")
def mark_item(name: str, index: int) -> Response | tuple[Response, int]:
    card_set = _card_set()
    body = request.get_json(silent=True)

    try:
        if isinstance(body, dict) and "marked" in body:
            value = body["marked"]
            # bool check first: 1 == True would otherwise pass the lookup.
            if value is not None and not isinstance(value, bool):
                return _error("marked must be true, false or null", 400)
            entry = card_set.set_mark(name, index, _JSON_TO_MARK[value])
        else:
            entry = card_set.toggle(name, index)
    except IndexError as e:
        return _error(str(e), 400)

    logger.info("%s item %d is now %s", name, index, entry.mark.token)

    entries = card_set.card(name)
    bingo = bool(winning_lines(entries)) if len(entries) == CARD_SIZE else None
    return jsonify(item=_item_json(index, entry), bingo=bingo)


@app.get("/bingo.yaml")
def download() -> Response:
    return Response(
        serialize(_card_set()),
        mimetype="text/yaml",
        headers={"Content-Disposition": 'attachment; filename="bingo.yaml"'},
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)
