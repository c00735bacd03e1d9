"""Exception hierarchy shared by the core, notation and game layers."""

from __future__ import annotations


class ChessArbiterError(Exception):
    """Base class for every error raised by chessarbiter."""


class ParseError(ChessArbiterError, ValueError):
    """Malformed FEN, PGN or move text."""


class InvalidMove(ChessArbiterError, ValueError):
    """The move is not legal in the current position."""


class HistoryOverflow(ChessArbiterError):
    """The ply history is already at capacity."""


class UnsupportedDrawMethod(ChessArbiterError, ValueError):
    """The requested method cannot be claimed as a draw."""


class DrawPreconditionNotMet(ChessArbiterError):
    """The draw claim is valid in principle but not in this position."""


class GameAlreadyDecided(ChessArbiterError):
    """A claim was made on a game that already has an outcome."""
