"""Value objects recorded in, and produced from, the game history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessarbiter.core.enums import Method, Outcome

if TYPE_CHECKING:
    import chess

    from chessarbiter.core.interfaces import IPosition


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome and method recorded for one history slot."""

    outcome: Outcome = Outcome.IN_PROGRESS
    method: Method = Method.NONE

    @property
    def is_decided(self) -> bool:
        return self.outcome.is_decided


IN_PROGRESS = Verdict()


@dataclass(frozen=True, slots=True)
class MoveHistory:
    """A played move with the positions around it and its comments."""

    pre_position: IPosition
    move: chess.Move
    post_position: IPosition
    comments: tuple[str, ...] = ()
