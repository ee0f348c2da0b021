"""
Core modules (card model, parser, serializer, win detection).

Import submodules directly:
- `goal_bingo.core.model`
- `goal_bingo.core.parser`
- `goal_bingo.core.serializer`
- `goal_bingo.core.wins`
"""

__all__ = []
