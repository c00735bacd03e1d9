"""Position — immutable per-ply board snapshot backed by python-chess."""

from __future__ import annotations

import chess

from chessarbiter.core.enums import Color, TerminalStatus
from chessarbiter.core.interfaces import IPosition

RepetitionKey = tuple[str, chess.Color, chess.Bitboard, chess.Square | None]


class Position:
    """Board + side to move + castling + en passant + clocks.

    A position is never mutated once created: :meth:`update` returns a new
    snapshot and :attr:`board` hands out a copy.  This is what allows game
    histories to share positions freely.
    """

    __slots__ = ("_board", "_legal_moves", "_key")

    def __init__(self, board: chess.Board | None = None, *, copy: bool = True) -> None:
        if board is None:
            board = chess.Board()
        elif copy:
            board = board.copy(stack=False)
        self._board = board
        self._legal_moves: tuple[chess.Move, ...] | None = None
        self._key: RepetitionKey | None = None

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls(chess.Board(), copy=False)

    # ── Engine capabilities ──────────────────────────────────────────────

    def update(self, move: chess.Move) -> Position:
        """Return the successor position after *move*."""
        board = self._board.copy(stack=False)
        board.push(move)
        return Position(board, copy=False)

    def legal_moves(self) -> tuple[chess.Move, ...]:
        if self._legal_moves is None:
            self._legal_moves = tuple(self._board.legal_moves)
        return self._legal_moves

    def is_legal(self, move: chess.Move) -> bool:
        return move in self.legal_moves()

    def terminal_status(self) -> TerminalStatus:
        if self.legal_moves():
            return TerminalStatus.NONE
        if self._board.is_check():
            return TerminalStatus.CHECKMATE
        return TerminalStatus.STALEMATE

    def same_as(self, other: IPosition) -> bool:
        if isinstance(other, Position):
            return self.repetition_key == other.repetition_key
        # Foreign snapshots only share FEN text: compare its first four fields.
        return self.fen().split()[:4] == other.fen().split()[:4]

    def fen(self) -> str:
        return self._board.fen()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> chess.Board:
        """A private copy of the underlying board."""
        return self._board.copy(stack=False)

    @property
    def turn(self) -> Color:
        return Color.from_chess(self._board.turn)

    @property
    def in_check(self) -> bool:
        return self._board.is_check()

    @property
    def halfmove_clock(self) -> int:
        return self._board.halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self._board.fullmove_number

    @property
    def has_sufficient_material(self) -> bool:
        return not self._board.is_insufficient_material()

    @property
    def repetition_key(self) -> RepetitionKey:
        """Identity for repetition purposes; move counters are excluded.

        The en-passant square only counts when a capture on it is legal.
        """
        if self._key is None:
            board = self._board
            ep_square = board.ep_square if board.has_legal_en_passant() else None
            self._key = (
                board.board_fen(),
                board.turn,
                board.clean_castling_rights(),
                ep_square,
            )
        return self._key

    # ── Value semantics ──────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.fen() == other.fen()

    def __hash__(self) -> int:
        return hash(self.fen())

    def __repr__(self) -> str:
        return f"Position({self.fen()!r})"
