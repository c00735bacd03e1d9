"""Game — owns the ply history of one chess game and adjudicates its outcome.

After every position change the controller re-runs a fixed, first-match
adjudication chain on the current ply:

1. checkmate / stalemate reported by the position engine;
2. fivefold repetition;
3. the 75-move rule;
4. insufficient material.

Rules 2-4 are skipped while automatic draws are ignored.  Draw claims and
resignation are layered on top by :meth:`Game.claim_draw` and
:meth:`Game.resign`.

Thread-safety: none.  A game must be confined to one thread or guarded by
the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from chessarbiter.core.enums import Color, Method, Outcome, TerminalStatus
from chessarbiter.core.errors import (
    DrawPreconditionNotMet,
    GameAlreadyDecided,
    HistoryOverflow,
    InvalidMove,
    UnsupportedDrawMethod,
)
from chessarbiter.core.position import Position
from chessarbiter.game.models import IN_PROGRESS, MoveHistory, Verdict
from chessarbiter.game.settings import GameSettings
from chessarbiter.notation.models import TagPair
from chessarbiter.notation.pgn import decode_pgn, encode_pgn, read_pgn

if TYPE_CHECKING:
    import chess

    from chessarbiter.core.interfaces import INotation, IPosition
    from chessarbiter.game.options import GameOption

_LOGGER = logging.getLogger(__name__)

_THREEFOLD = 3
_FIVEFOLD = 5
_FIFTY_MOVES = 100  # half-moves
_SEVENTY_FIVE_MOVES = 150  # half-moves
_CLAIMABLE_DRAWS = (Method.DRAW_OFFER, Method.THREEFOLD_REPETITION, Method.FIFTY_MOVE_RULE)


class Game:
    """A single chess game: bounded history, current ply and verdicts.

    ``positions[i]`` exists for every ``i`` up to :attr:`ply`, ``moves[i]``
    leads from ``positions[i]`` to ``positions[i + 1]`` and ``comments[i]``
    belongs to ``moves[i]``.  Each position slot carries its own
    :class:`Verdict`; only the one at the current ply is authoritative.
    :meth:`undo` only moves the pointer back, the tail is overwritten by
    the next :meth:`apply_move`.
    """

    __slots__ = (
        "_settings",
        "_positions",
        "_moves",
        "_comments",
        "_verdicts",
        "_ply",
        "_notation",
        "_ignore_automatic_draws",
        "_tag_pairs",
    )

    def __init__(self, *options: GameOption | None, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._notation: INotation = self._settings.make_notation()
        self._ignore_automatic_draws = self._settings.ignore_automatic_draws
        self._tag_pairs: list[TagPair] = []
        self._positions: list[IPosition] = []
        self._moves: list[chess.Move] = []
        self._comments: list[list[str]] = []
        self._verdicts: list[Verdict] = []
        self._ply = 0
        self._reset(Position.initial())

        for option in options:
            if option is not None:
                option(self)

    @classmethod
    def from_pgn(
        cls,
        source: str | Path | TextIO,
        *options: GameOption | None,
        settings: GameSettings | None = None,
    ) -> Game:
        """Game replayed from *source*; *options* are applied before the replay."""
        from chessarbiter.game.options import pgn

        return cls(*options, pgn(source), settings=settings)

    @classmethod
    def from_fen(
        cls,
        text: str,
        *options: GameOption | None,
        settings: GameSettings | None = None,
    ) -> Game:
        """Game starting at *text*; *options* are applied before the position."""
        from chessarbiter.game.options import fen

        return cls(*options, fen(text), settings=settings)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def ply(self) -> int:
        """Index of the current position in the history."""
        return self._ply

    @property
    def position(self) -> IPosition:
        return self._positions[self._ply]

    @property
    def outcome(self) -> Outcome:
        return self._verdicts[self._ply].outcome

    @property
    def method(self) -> Method:
        return self._verdicts[self._ply].method

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_decided

    @property
    def notation(self) -> INotation:
        return self._notation

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def ignores_automatic_draws(self) -> bool:
        return self._ignore_automatic_draws

    def fen(self) -> str:
        """FEN of the current position."""
        return self.position.fen()

    # ── History views ────────────────────────────────────────────────────

    def positions(self) -> tuple[IPosition, ...]:
        return tuple(self._positions[: self._ply + 1])

    def moves(self) -> tuple[chess.Move, ...]:
        return tuple(self._moves[: self._ply])

    def comments(self) -> tuple[tuple[str, ...], ...]:
        return tuple(tuple(c) for c in self._comments[: self._ply])

    def valid_moves(self) -> tuple[chess.Move, ...]:
        return tuple(self.position.legal_moves())

    def move_history(self) -> list[MoveHistory]:
        """Every played move with its pre/post positions, in ply order."""
        return [
            MoveHistory(
                pre_position=self._positions[i],
                move=self._moves[i],
                post_position=self._positions[i + 1],
                comments=tuple(self._comments[i]),
            )
            for i in range(self._ply)
        ]

    # ── Moves ────────────────────────────────────────────────────────────

    def apply_move(self, move: chess.Move) -> None:
        """Play *move* from the current position and re-adjudicate.

        Raises:
            HistoryOverflow: the history already holds ``max_plies`` positions.
            InvalidMove: *move* is not legal in the current position.
        """
        capacity = self._settings.max_plies
        if self._ply >= capacity - 1:
            raise HistoryOverflow(f"history is full: at most {capacity} positions per game")

        position = self.position
        if move not in position.legal_moves():
            raise InvalidMove(f"{move} is not a legal move in {position.fen()}")

        successor = position.update(move)

        # Drop the stale tail left behind by undo().
        del self._positions[self._ply + 1 :]
        del self._verdicts[self._ply + 1 :]
        del self._moves[self._ply :]
        del self._comments[self._ply :]

        self._moves.append(move)
        self._comments.append([])
        self._positions.append(successor)
        self._verdicts.append(IN_PROGRESS)
        self._ply += 1
        _LOGGER.debug("Ply %d: %s -> %s", self._ply, move, successor.fen())

        self._adjudicate()

    def apply_move_text(self, text: str) -> None:
        """Decode *text* with the active notation, then :meth:`apply_move`."""
        self.apply_move(self._notation.decode(self.position, text))

    def undo(self) -> bool:
        """Step back one ply. Returns ``False`` at ply 0."""
        if self._ply == 0:
            return False
        self._ply -= 1
        _LOGGER.debug("Undo to ply %d", self._ply)
        return True

    def add_comment(self, text: str) -> None:
        """Attach a comment to the move that produced the current position."""
        if self._ply == 0:
            raise ValueError("no move to comment on at ply 0")
        self._comments[self._ply - 1].append(text)

    # ── Draws / resignation ──────────────────────────────────────────────

    def repetition_count(self) -> int:
        """How often the current position occurred in plies ``0..ply``."""
        current = self.position
        return sum(1 for pos in self._positions[: self._ply + 1] if current.same_as(pos))

    def eligible_draws(self) -> list[Method]:
        """Methods :meth:`claim_draw` would currently accept."""
        draws = [Method.DRAW_OFFER]
        if self._can_claim_threefold():
            draws.append(Method.THREEFOLD_REPETITION)
        if self._can_claim_fifty_moves():
            draws.append(Method.FIFTY_MOVE_RULE)
        return draws

    def claim_draw(self, method: Method) -> None:
        """Draw the game by *method*.

        Raises:
            UnsupportedDrawMethod: *method* is not a claimable draw.
            GameAlreadyDecided: the current ply already has an outcome.
            DrawPreconditionNotMet: the repetition count or half-move clock
                is too low for the claim.
        """
        if method not in _CLAIMABLE_DRAWS:
            raise UnsupportedDrawMethod(f"unsupported draw method {method}")
        if self.is_game_over:
            _LOGGER.debug("Draw claim %s rejected: game already %s", method, self.outcome)
            raise GameAlreadyDecided(f"game is already decided ({self.outcome} by {self.method})")

        if method == Method.THREEFOLD_REPETITION and not self._can_claim_threefold():
            raise DrawPreconditionNotMet(
                "draw by threefold repetition requires at least three repetitions "
                f"of the current position, found {self.repetition_count()}"
            )
        if method == Method.FIFTY_MOVE_RULE and not self._can_claim_fifty_moves():
            raise DrawPreconditionNotMet(
                "draw by the fifty-move rule requires the half-move clock to be at "
                f"{_FIFTY_MOVES} or greater but is {self.position.halfmove_clock}"
            )

        self._set_verdict(Verdict(Outcome.DRAW, method))

    def resign(self, color: Color | None) -> None:
        """*color* resigns; a no-op on a decided game or without a color."""
        if self.is_game_over or color is None:
            return
        self._set_verdict(Verdict(Outcome.win_for(color.opposite), Method.RESIGNATION))

    # ── Tag pairs ────────────────────────────────────────────────────────

    def tag_pairs(self) -> tuple[TagPair, ...]:
        return tuple(self._tag_pairs)

    def get_tag_pair(self, key: str) -> TagPair | None:
        for pair in self._tag_pairs:
            if pair.key == key:
                return pair
        return None

    def add_tag_pair(self, key: str, value: str) -> bool:
        """Set a tag, keeping its place if present. Returns ``True`` on replace."""
        for idx, pair in enumerate(self._tag_pairs):
            if pair.key == key:
                self._tag_pairs[idx] = TagPair(key, value)
                return True
        self._tag_pairs.append(TagPair(key, value))
        return False

    def remove_tag_pair(self, key: str) -> bool:
        before = len(self._tag_pairs)
        self._tag_pairs = [pair for pair in self._tag_pairs if pair.key != key]
        return len(self._tag_pairs) != before

    # ── Duplication ──────────────────────────────────────────────────────

    def duplicate(self) -> Game:
        """Independent copy: same history, pointer, verdicts and notation."""
        clone = Game(settings=self._settings)
        clone._assign_from(self, keep_notation=False)
        return clone

    def replace_with(self, other: Game, *, keep_notation: bool = True) -> None:
        """Take over *other*'s history, verdicts and automatic draw flag.

        The flag always travels with the verdicts it produced.  With
        *keep_notation* this game keeps its own move-text strategy.
        """
        self._assign_from(other, keep_notation=keep_notation)

    def _assign_from(self, source: Game, *, keep_notation: bool) -> None:
        capacity = self._settings.max_plies
        if source._ply >= capacity:
            raise HistoryOverflow(
                f"cannot hold {source._ply + 1} positions: at most {capacity} per game"
            )

        # Positions and moves are immutable and shared; comments are not.
        self._positions = source._positions[:capacity]
        self._verdicts = source._verdicts[:capacity]
        self._moves = source._moves[: capacity - 1]
        self._comments = [list(c) for c in source._comments[: capacity - 1]]
        self._ply = source._ply
        self._tag_pairs = list(source._tag_pairs)
        self._ignore_automatic_draws = source._ignore_automatic_draws
        if not keep_notation:
            self._notation = source._notation

    # ── PGN text ─────────────────────────────────────────────────────────

    def to_pgn(self) -> str:
        return encode_pgn(self)

    def load_pgn(self, source: str | Path | TextIO) -> None:
        """Replace this game with the PGN in *source*.

        Moves may be written in any supported notation, as with the ``pgn``
        option; this game keeps its own notation and automatic draw flag.
        On ``ParseError`` the game is left untouched.
        """
        imported = decode_pgn(
            read_pgn(source),
            settings=self._settings,
            ignore_automatic_draws=self._ignore_automatic_draws,
        )
        self.replace_with(imported)

    def __str__(self) -> str:
        return self.to_pgn()

    def __repr__(self) -> str:
        return (
            f"Game(ply={self._ply}, outcome={self.outcome.value!r}, "
            f"method={self.method}, fen={self.fen()!r})"
        )

    # ── Internal helpers ─────────────────────────────────────────────────

    def _reset(self, position: IPosition) -> None:
        """Make *position* the only entry of a fresh history."""
        self._positions = [position]
        self._verdicts = [IN_PROGRESS]
        self._moves = []
        self._comments = []
        self._ply = 0
        self._adjudicate()

    def _can_claim_threefold(self) -> bool:
        return self.repetition_count() >= _THREEFOLD

    def _can_claim_fifty_moves(self) -> bool:
        return self.position.halfmove_clock >= _FIFTY_MOVES

    def _adjudicate(self) -> None:
        """Decide the verdict of the current ply; first matching rule wins."""
        position = self.position
        status = position.terminal_status()
        if status == TerminalStatus.STALEMATE:
            verdict = Verdict(Outcome.DRAW, Method.STALEMATE)
        elif status == TerminalStatus.CHECKMATE:
            verdict = Verdict(Outcome.win_for(position.turn.opposite), Method.CHECKMATE)
        else:
            verdict = IN_PROGRESS

        if not verdict.is_decided and not self._ignore_automatic_draws:
            if self.repetition_count() >= _FIVEFOLD:
                verdict = Verdict(Outcome.DRAW, Method.FIVEFOLD_REPETITION)
            elif position.halfmove_clock >= _SEVENTY_FIVE_MOVES:
                verdict = Verdict(Outcome.DRAW, Method.SEVENTY_FIVE_MOVE_RULE)
            elif not position.has_sufficient_material:
                verdict = Verdict(Outcome.DRAW, Method.INSUFFICIENT_MATERIAL)

        self._set_verdict(verdict)

    def _declare_outcome(self, outcome: Outcome) -> None:
        """Record an outcome whose method is unknown (e.g. a PGN result tag)."""
        self._set_verdict(Verdict(outcome, Method.NONE))

    def _set_verdict(self, verdict: Verdict) -> None:
        previous = self._verdicts[self._ply]
        self._verdicts[self._ply] = verdict
        if verdict.is_decided and verdict != previous:
            _LOGGER.info(
                "Game decided at ply %d: %s by %s", self._ply, verdict.outcome.value, verdict.method
            )
