"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class TagPair:
    """PGN metadata in a key/value pairing, e.g. ``[Event "Casual"]``."""

    key: str
    value: str

    def __str__(self) -> str:
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'[{self.key} "{escaped}"]'


@dataclass(slots=True)
class PgnMove:
    """A single mainline move extracted from PGN movetext."""

    text: str
    comments: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ParsedPgn:
    """Structured PGN payload before the moves are replayed."""

    tag_pairs: list[TagPair]
    moves: list[PgnMove]
    result_token: str

    def tag(self, key: str) -> str | None:
        for pair in self.tag_pairs:
            if pair.key == key:
                return pair.value
        return None
