from __future__ import annotations

from typing import Sequence

from .model import CARD_SIZE, GRID_WIDTH, Entry, Mark


class CardSizeError(ValueError):
    def __init__(self, count: int) -> None:
        super().__init__(f"Bingo card must have exactly {CARD_SIZE} items (found {count})")
        self.count = count


_ROWS = tuple(tuple(range(r * GRID_WIDTH, r * GRID_WIDTH + GRID_WIDTH)) for r in range(GRID_WIDTH))
_COLUMNS = tuple(tuple(r * GRID_WIDTH + c for r in range(GRID_WIDTH)) for c in range(GRID_WIDTH))

# The second diagonal is kept exactly as cards have always been scored;
# it is not the geometric anti-diagonal (4, 8, 12, 16, 20).
_DIAGONALS = (
    (0, 6, 12, 18, 24),
    (4, 10, 16, 22, 20),
)

WIN_LINES: tuple[tuple[int, ...], ...] = _ROWS + _COLUMNS + _DIAGONALS


def winning_lines(entries: Sequence[Entry]) -> list[tuple[int, ...]]:
    if len(entries) != CARD_SIZE:
        raise CardSizeError(len(entries))
    marked = [entry.mark is Mark.ACHIEVED for entry in entries]
    return [line for line in WIN_LINES if all(marked[i] for i in line)]


def has_win(entries: Sequence[Entry]) -> bool:
    return bool(winning_lines(entries))
