"""FEN parsing and serialization."""

from __future__ import annotations

import chess

from chessarbiter.core.errors import ParseError
from chessarbiter.core.interfaces import IPosition
from chessarbiter.core.position import Position

STARTING_FEN = chess.STARTING_FEN


def decode_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The halfmove clock and fullmove number are optional and default to
    ``0`` and ``1``.  Boards that python-chess reports as invalid (missing
    kings, pawns on the back rank, the side not to move in check) are
    rejected as well.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ParseError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    try:
        board = chess.Board(" ".join(parts))
    except ValueError as exc:
        raise ParseError(f"Invalid FEN {fen!r}: {exc}") from exc

    status = board.status()
    if status != chess.STATUS_VALID:
        raise ParseError(f"Invalid FEN position {fen!r}: {_describe_status(status)}")

    return Position(board, copy=False)


def encode_fen(position: IPosition) -> str:
    """Serialise a position to FEN."""
    return position.fen()


_STATUS_NAMES: tuple[tuple[chess.Status, str], ...] = (
    (chess.STATUS_NO_WHITE_KING, "no white king"),
    (chess.STATUS_NO_BLACK_KING, "no black king"),
    (chess.STATUS_TOO_MANY_KINGS, "too many kings"),
    (chess.STATUS_TOO_MANY_WHITE_PAWNS, "too many white pawns"),
    (chess.STATUS_TOO_MANY_BLACK_PAWNS, "too many black pawns"),
    (chess.STATUS_PAWNS_ON_BACKRANK, "pawns on the back rank"),
    (chess.STATUS_TOO_MANY_WHITE_PIECES, "too many white pieces"),
    (chess.STATUS_TOO_MANY_BLACK_PIECES, "too many black pieces"),
    (chess.STATUS_BAD_CASTLING_RIGHTS, "bad castling rights"),
    (chess.STATUS_INVALID_EP_SQUARE, "invalid en-passant square"),
    (chess.STATUS_OPPOSITE_CHECK, "side not to move is in check"),
    (chess.STATUS_EMPTY, "empty board"),
    (chess.STATUS_RACE_CHECK, "race check"),
    (chess.STATUS_RACE_OVER, "race over"),
    (chess.STATUS_RACE_MATERIAL, "race material"),
    (chess.STATUS_TOO_MANY_CHECKERS, "too many checkers"),
    (chess.STATUS_IMPOSSIBLE_CHECK, "impossible check"),
)


def _describe_status(status: chess.Status) -> str:
    reasons = [name for flag, name in _STATUS_NAMES if status & flag]
    return ", ".join(reasons) or "invalid position"
