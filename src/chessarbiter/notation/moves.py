"""Move-text strategies: SAN, long algebraic and UCI."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

import chess

from chessarbiter.core.errors import ParseError
from chessarbiter.core.interfaces import INotation, IPosition
from chessarbiter.core.position import Position

_ANNOTATION_SUFFIX = "!?"
_CASTLING_TOKENS = frozenset({"O-O", "O-O-O", "0-0", "0-0-0"})
_LAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?(?P<from>[a-h][1-8])[-x]?(?P<to>[a-h][1-8])"
    r"(?:=?(?P<promotion>[NBRQnbrq]))?[+#]?$"
)


def _board_for(position: IPosition) -> chess.Board:
    if isinstance(position, Position):
        return position.board
    return chess.Board(position.fen())


def _clean(text: str) -> str:
    clean = text.strip().rstrip(_ANNOTATION_SUFFIX)
    if not clean:
        raise ParseError(f"Empty move text: {text!r}")
    return clean


@dataclass(frozen=True, slots=True)
class AlgebraicNotation:
    """Standard Algebraic Notation, e.g. ``Nf3``, ``exd5``, ``O-O``, ``e8=Q+``."""

    name: ClassVar[str] = "algebraic"

    def decode(self, position: IPosition, text: str) -> chess.Move:
        san = _clean(text)
        board = _board_for(position)
        try:
            return board.parse_san(san)
        except chess.AmbiguousMoveError as exc:
            raise ParseError(f"Ambiguous SAN move {san!r}") from exc
        except chess.IllegalMoveError as exc:
            raise ParseError(f"Illegal SAN move {san!r}") from exc
        except ValueError as exc:
            raise ParseError(f"Invalid SAN move {san!r}") from exc

    def encode(self, position: IPosition, move: chess.Move) -> str:
        return _board_for(position).san(move)


@dataclass(frozen=True, slots=True)
class LongAlgebraicNotation:
    """Long algebraic notation, e.g. ``Ng1-f3``, ``e4xd5``, ``e7-e8=Q``."""

    name: ClassVar[str] = "long-algebraic"

    def decode(self, position: IPosition, text: str) -> chess.Move:
        lan = _clean(text)
        board = _board_for(position)

        if lan.rstrip("+#") in _CASTLING_TOKENS:
            return AlgebraicNotation().decode(position, lan)

        match = _LAN_RE.match(lan)
        if match is None:
            raise ParseError(f"Invalid long algebraic move {lan!r}")

        from_sq = chess.parse_square(match["from"])
        to_sq = chess.parse_square(match["to"])
        promotion = None
        if match["promotion"]:
            promotion = chess.Piece.from_symbol(match["promotion"].upper()).piece_type

        piece = board.piece_at(from_sq)
        expected = chess.PAWN
        if match["piece"]:
            expected = chess.Piece.from_symbol(match["piece"]).piece_type
        if piece is None or piece.piece_type != expected:
            raise ParseError(f"Illegal long algebraic move {lan!r}")

        move = chess.Move(from_sq, to_sq, promotion)
        if move not in board.legal_moves:
            raise ParseError(f"Illegal long algebraic move {lan!r}")
        return move

    def encode(self, position: IPosition, move: chess.Move) -> str:
        return _board_for(position).lan(move)


@dataclass(frozen=True, slots=True)
class UCINotation:
    """UCI coordinates, e.g. ``g1f3``, ``e7e8q``."""

    name: ClassVar[str] = "uci"

    def decode(self, position: IPosition, text: str) -> chess.Move:
        uci = _clean(text)
        board = _board_for(position)
        try:
            return board.parse_uci(uci)
        except chess.IllegalMoveError as exc:
            raise ParseError(f"Illegal UCI move {uci!r}") from exc
        except ValueError as exc:
            raise ParseError(f"Invalid UCI move {uci!r}") from exc

    def encode(self, position: IPosition, move: chess.Move) -> str:
        return _board_for(position).uci(move)


NOTATIONS: dict[str, type[INotation]] = {
    AlgebraicNotation.name: AlgebraicNotation,
    LongAlgebraicNotation.name: LongAlgebraicNotation,
    UCINotation.name: UCINotation,
}


def notation_for_name(name: str) -> INotation:
    """Instantiate the notation registered under *name*."""
    try:
        return NOTATIONS[name]()
    except KeyError:
        known = ", ".join(sorted(NOTATIONS))
        raise ValueError(f"Unknown notation {name!r} (expected one of: {known})") from None
