"""Core enumerations for the game-state domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum, auto

import chess


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @classmethod
    def from_chess(cls, color: chess.Color) -> Color:
        """Map a python-chess colour (``True`` is white) onto :class:`Color`."""
        return cls.WHITE if color == chess.WHITE else cls.BLACK

    def __str__(self) -> str:
        return self.name.lower()


class Outcome(StrEnum):
    """Result of a game; values are the PGN result tokens."""

    IN_PROGRESS = "*"
    WHITE_WON = "1-0"
    BLACK_WON = "0-1"
    DRAW = "1/2-1/2"

    @property
    def is_decided(self) -> bool:
        return self is not Outcome.IN_PROGRESS

    @classmethod
    def win_for(cls, color: Color) -> Outcome:
        return cls.WHITE_WON if color == Color.WHITE else cls.BLACK_WON


class Method(IntEnum):
    """How the outcome came about."""

    NONE = 0
    CHECKMATE = auto()
    RESIGNATION = auto()
    DRAW_OFFER = auto()
    STALEMATE = auto()
    THREEFOLD_REPETITION = auto()  # claimed
    FIVEFOLD_REPETITION = auto()  # automatic
    FIFTY_MOVE_RULE = auto()  # claimed
    SEVENTY_FIVE_MOVE_RULE = auto()  # automatic
    INSUFFICIENT_MATERIAL = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


class TerminalStatus(IntEnum):
    """Terminal state reported by the position engine."""

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()
