"""Game management layer: controller, configuration effects, settings.

Quick start::

    from chessarbiter.game import Game

    game = Game()
    for san in ("f3", "e5", "g4", "Qh4"):
        game.apply_move_text(san)
    print(game.outcome, game.method)  # 0-1 checkmate
"""

from chessarbiter.game.controller import Game
from chessarbiter.game.models import MoveHistory, Verdict
from chessarbiter.game.options import (
    GameOption,
    fen,
    ignore_automatic_draws,
    pgn,
    use_notation,
)
from chessarbiter.game.settings import DEFAULT_MAX_PLIES, GameSettings

__all__ = [
    "DEFAULT_MAX_PLIES",
    "Game",
    "GameOption",
    "GameSettings",
    "MoveHistory",
    "Verdict",
    # Options
    "fen",
    "ignore_automatic_draws",
    "pgn",
    "use_notation",
]
