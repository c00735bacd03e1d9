"""Game-wide configuration defaults."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from chessarbiter.core.interfaces import INotation
from chessarbiter.notation.moves import NOTATIONS, notation_for_name

DEFAULT_MAX_PLIES = 600
_ENV_PREFIX = "CHESSARBITER_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class GameSettings:
    """All configurable knobs of a :class:`~chessarbiter.game.Game`."""

    # History capacity, counted in positions (ply 0 included)
    max_plies: int = DEFAULT_MAX_PLIES

    # Skip fivefold / 75-move / insufficient-material adjudication
    ignore_automatic_draws: bool = False

    # Move-text strategy name, see ``chessarbiter.notation.NOTATIONS``
    notation: str = "algebraic"

    def __post_init__(self) -> None:
        if self.max_plies < 1:
            raise ValueError(f"max_plies must be at least 1, got {self.max_plies}")
        if self.notation not in NOTATIONS:
            known = ", ".join(sorted(NOTATIONS))
            raise ValueError(f"Unknown notation {self.notation!r} (expected one of: {known})")

    def make_notation(self) -> INotation:
        return notation_for_name(self.notation)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GameSettings:
        """Read ``CHESSARBITER_*`` variables, falling back to the defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        raw_plies = env.get(f"{_ENV_PREFIX}MAX_PLIES")
        try:
            max_plies = int(raw_plies) if raw_plies is not None else defaults.max_plies
        except ValueError:
            raise ValueError(f"{_ENV_PREFIX}MAX_PLIES must be an integer, got {raw_plies!r}") from None

        raw_ignore = env.get(f"{_ENV_PREFIX}IGNORE_AUTOMATIC_DRAWS")
        ignore = defaults.ignore_automatic_draws
        if raw_ignore is not None:
            flag = raw_ignore.strip().lower()
            if flag in _TRUE:
                ignore = True
            elif flag in _FALSE:
                ignore = False
            else:
                raise ValueError(
                    f"{_ENV_PREFIX}IGNORE_AUTOMATIC_DRAWS must be a boolean, got {raw_ignore!r}"
                )

        notation = env.get(f"{_ENV_PREFIX}NOTATION", defaults.notation)
        return cls(max_plies=max_plies, ignore_automatic_draws=ignore, notation=notation)
