"""chessarbiter — chess game-state controller with outcome adjudication."""

from chessarbiter.core import (
    ChessArbiterError,
    Color,
    DrawPreconditionNotMet,
    GameAlreadyDecided,
    HistoryOverflow,
    InvalidMove,
    Method,
    Outcome,
    ParseError,
    Position,
    UnsupportedDrawMethod,
)
from chessarbiter.game import Game, GameSettings

__all__ = [
    "ChessArbiterError",
    "Color",
    "DrawPreconditionNotMet",
    "Game",
    "GameAlreadyDecided",
    "GameSettings",
    "HistoryOverflow",
    "InvalidMove",
    "Method",
    "Outcome",
    "ParseError",
    "Position",
    "UnsupportedDrawMethod",
]
