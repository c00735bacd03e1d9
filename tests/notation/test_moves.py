"""Tests for the SAN, long algebraic and UCI move strategies."""

import chess
import pytest

from chessarbiter.core.errors import ParseError
from chessarbiter.core.position import Position
from chessarbiter.notation.fen import decode_fen
from chessarbiter.notation.moves import (
    AlgebraicNotation,
    LongAlgebraicNotation,
    UCINotation,
    notation_for_name,
)

CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


class TestAlgebraic:
    def test_decode_pawn_push(self) -> None:
        move = AlgebraicNotation().decode(Position.initial(), "e4")
        assert move == chess.Move.from_uci("e2e4")

    def test_decode_knight(self) -> None:
        move = AlgebraicNotation().decode(Position.initial(), "Nf3")
        assert move == chess.Move.from_uci("g1f3")

    def test_decode_zero_castling(self) -> None:
        move = AlgebraicNotation().decode(decode_fen(CASTLING_FEN), "0-0")
        assert move == chess.Move.from_uci("e1g1")

    def test_decode_strips_annotation(self) -> None:
        move = AlgebraicNotation().decode(Position.initial(), "e4!?")
        assert move == chess.Move.from_uci("e2e4")

    def test_decode_promotion_with_check(self) -> None:
        move = AlgebraicNotation().decode(decode_fen("k7/6P1/8/8/8/8/8/4K3 w - - 0 1"), "g8=Q+")
        assert move == chess.Move.from_uci("g7g8q")

    def test_illegal_raises(self) -> None:
        with pytest.raises(ParseError, match="Illegal"):
            AlgebraicNotation().decode(Position.initial(), "Ke5")

    def test_ambiguous_raises(self) -> None:
        pos = decode_fen("7k/8/8/8/8/8/8/K1N3N1 w - - 0 1")
        with pytest.raises(ParseError, match="Ambiguous"):
            AlgebraicNotation().decode(pos, "Ne2")

    def test_garbage_raises(self) -> None:
        with pytest.raises(ParseError):
            AlgebraicNotation().decode(Position.initial(), "hello")

    def test_empty_raises(self) -> None:
        with pytest.raises(ParseError, match="Empty"):
            AlgebraicNotation().decode(Position.initial(), "   ")

    def test_encode_disambiguation(self) -> None:
        pos = decode_fen("7k/8/8/8/8/8/8/K1N3N1 w - - 0 1")
        assert AlgebraicNotation().encode(pos, chess.Move.from_uci("c1e2")) == "Nce2"

    def test_encode_castling(self) -> None:
        pos = decode_fen(CASTLING_FEN)
        assert AlgebraicNotation().encode(pos, chess.Move.from_uci("e1c1")) == "O-O-O"


class TestLongAlgebraic:
    def test_decode_knight(self) -> None:
        move = LongAlgebraicNotation().decode(Position.initial(), "Ng1-f3")
        assert move == chess.Move.from_uci("g1f3")

    def test_decode_pawn(self) -> None:
        move = LongAlgebraicNotation().decode(Position.initial(), "e2-e4")
        assert move == chess.Move.from_uci("e2e4")

    def test_decode_castling(self) -> None:
        move = LongAlgebraicNotation().decode(decode_fen(CASTLING_FEN), "O-O")
        assert move == chess.Move.from_uci("e1g1")

    def test_decode_promotion(self) -> None:
        pos = decode_fen("k7/6P1/8/8/8/8/8/4K3 w - - 0 1")
        move = LongAlgebraicNotation().decode(pos, "g7-g8=N")
        assert move == chess.Move.from_uci("g7g8n")

    def test_wrong_piece_raises(self) -> None:
        with pytest.raises(ParseError, match="Illegal"):
            LongAlgebraicNotation().decode(Position.initial(), "Bg1-f3")

    def test_illegal_raises(self) -> None:
        with pytest.raises(ParseError, match="Illegal"):
            LongAlgebraicNotation().decode(Position.initial(), "e2-e5")

    def test_malformed_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid"):
            LongAlgebraicNotation().decode(Position.initial(), "Nf3")

    def test_encode(self) -> None:
        assert LongAlgebraicNotation().encode(Position.initial(), chess.Move.from_uci("g1f3")) == "Ng1-f3"


class TestUCI:
    def test_decode(self) -> None:
        assert UCINotation().decode(Position.initial(), "e2e4") == chess.Move.from_uci("e2e4")

    def test_illegal_raises(self) -> None:
        with pytest.raises(ParseError, match="Illegal"):
            UCINotation().decode(Position.initial(), "e2e5")

    def test_malformed_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid"):
            UCINotation().decode(Position.initial(), "zz99")

    def test_encode(self) -> None:
        assert UCINotation().encode(Position.initial(), chess.Move.from_uci("b1c3")) == "b1c3"


class TestRegistry:
    def test_lookup(self) -> None:
        assert isinstance(notation_for_name("uci"), UCINotation)
        assert isinstance(notation_for_name("long-algebraic"), LongAlgebraicNotation)

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown notation"):
            notation_for_name("descriptive")

    def test_strategies_compare_by_type(self) -> None:
        assert AlgebraicNotation() == AlgebraicNotation()
        assert AlgebraicNotation() != UCINotation()
