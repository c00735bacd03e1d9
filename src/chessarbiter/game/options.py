"""Configuration effects applied, in order, by the :class:`Game` constructor.

Parsing happens when the option is created, so malformed text raises
``ParseError`` before any game is touched::

    game = Game(fen("8/8/4k3/8/8/4K3/3R4/8 w - - 0 1"), use_notation(UCINotation()))
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from chessarbiter.notation.fen import decode_fen
from chessarbiter.notation.pgn import decode_pgn, read_pgn

if TYPE_CHECKING:
    from chessarbiter.core.interfaces import INotation
    from chessarbiter.game.controller import Game

GameOption = Callable[["Game"], None]


def pgn(source: str | Path | TextIO, notation: INotation | None = None) -> GameOption:
    """Replace the whole history with the game read from *source*.

    The moves are replayed under the receiving game's automatic draw flag,
    so give ``ignore_automatic_draws`` before this option.
    """
    text = read_pgn(source)
    imported = decode_pgn(text, notation)

    def apply(game: Game) -> None:
        replay = imported
        if replay.ignores_automatic_draws != game.ignores_automatic_draws:
            replay = decode_pgn(
                text,
                notation,
                game.settings,
                ignore_automatic_draws=game.ignores_automatic_draws,
            )
        game.replace_with(replay)

    return apply


def fen(text: str) -> GameOption:
    """Set the sole position; the resulting game has no move history."""
    position = decode_fen(text)

    def apply(game: Game) -> None:
        game._reset(position)

    return apply


def use_notation(notation: INotation) -> GameOption:
    """Select the strategy for move text input and PGN output."""

    def apply(game: Game) -> None:
        game._notation = notation

    return apply


def ignore_automatic_draws(flag: bool = True) -> GameOption:
    """Turn fivefold, 75-move and insufficient-material draws off (or on)."""

    def apply(game: Game) -> None:
        game._ignore_automatic_draws = flag

    return apply
