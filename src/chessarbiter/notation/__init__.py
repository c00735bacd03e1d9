"""Notation package: move text, FEN and PGN parsing and serialization."""

from chessarbiter.notation.fen import STARTING_FEN, decode_fen, encode_fen
from chessarbiter.notation.models import ParsedPgn, PgnMove, TagPair
from chessarbiter.notation.moves import (
    NOTATIONS,
    AlgebraicNotation,
    LongAlgebraicNotation,
    UCINotation,
    notation_for_name,
)
from chessarbiter.notation.pgn import (
    build_pgn,
    decode_pgn,
    encode_pgn,
    parse_pgn_game,
    pgn_movetext,
    read_pgn,
)

__all__ = [
    "STARTING_FEN",
    "decode_fen",
    "encode_fen",
    "TagPair",
    "PgnMove",
    "ParsedPgn",
    "NOTATIONS",
    "AlgebraicNotation",
    "LongAlgebraicNotation",
    "UCINotation",
    "notation_for_name",
    "build_pgn",
    "decode_pgn",
    "encode_pgn",
    "parse_pgn_game",
    "pgn_movetext",
    "read_pgn",
]
