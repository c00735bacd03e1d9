"""Capability interfaces consumed by the game controller.

The controller depends on these protocols, not on the concrete
python-chess backed :class:`~chessarbiter.core.position.Position`, so a
rule variant only has to provide the same capabilities to be substituted.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import chess

    from chessarbiter.core.enums import Color, TerminalStatus


@runtime_checkable
class IPosition(Protocol):
    """Immutable board snapshot produced by a position engine."""

    @property
    def turn(self) -> Color: ...

    @property
    def in_check(self) -> bool: ...

    @property
    def halfmove_clock(self) -> int: ...

    @property
    def has_sufficient_material(self) -> bool: ...

    def update(self, move: chess.Move) -> IPosition:
        """Return the successor snapshot after *move*."""
        ...

    def legal_moves(self) -> Sequence[chess.Move]: ...

    def terminal_status(self) -> TerminalStatus: ...

    def same_as(self, other: IPosition) -> bool:
        """Repetition equality: placement, turn, castling, en passant."""
        ...

    def fen(self) -> str: ...


@runtime_checkable
class INotation(Protocol):
    """Move-text strategy used for decoding input and encoding PGN."""

    name: str

    def decode(self, position: IPosition, text: str) -> chess.Move:
        """Parse *text* against *position*; raise ``ParseError`` on failure."""
        ...

    def encode(self, position: IPosition, move: chess.Move) -> str:
        """Render a legal *move* played from *position*."""
        ...
