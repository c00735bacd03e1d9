"""Core domain layer: enums, errors, capability interfaces and positions.

Quick start::

    from chessarbiter.core import Position

    pos = Position.initial()
    for move in pos.legal_moves():
        print(move.uci())
"""

from chessarbiter.core.enums import Color, Method, Outcome, TerminalStatus
from chessarbiter.core.errors import (
    ChessArbiterError,
    DrawPreconditionNotMet,
    GameAlreadyDecided,
    HistoryOverflow,
    InvalidMove,
    ParseError,
    UnsupportedDrawMethod,
)
from chessarbiter.core.interfaces import INotation, IPosition
from chessarbiter.core.position import Position

__all__ = [
    # Enums
    "Color",
    "Method",
    "Outcome",
    "TerminalStatus",
    # Errors
    "ChessArbiterError",
    "DrawPreconditionNotMet",
    "GameAlreadyDecided",
    "HistoryOverflow",
    "InvalidMove",
    "ParseError",
    "UnsupportedDrawMethod",
    # Interfaces
    "INotation",
    "IPosition",
    # Domain objects
    "Position",
]
