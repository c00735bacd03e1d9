"""PGN parsing and serialization helpers."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from chessarbiter.core.enums import Outcome
from chessarbiter.core.errors import ChessArbiterError, ParseError
from chessarbiter.notation.fen import STARTING_FEN
from chessarbiter.notation.models import ParsedPgn, PgnMove, TagPair
from chessarbiter.notation.moves import AlgebraicNotation

if TYPE_CHECKING:
    from chessarbiter.core.interfaces import INotation
    from chessarbiter.game.controller import Game
    from chessarbiter.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_PGN_RESULT_TOKENS = {"1-0", "0-1", "1/2-1/2", "*"}
_MOVE_NUMBER_PREFIX_RE = re.compile(r"^\d*\.+")
_NAG_RE = re.compile(r"^\$\d+$")
_MOVETEXT_TOKEN_RE = re.compile(
    r"""
      \{(?P<comment>[^}]*)\}
    | (?P<open_comment>\{)
    | ;(?P<line_comment>[^\n]*)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<word>[^\s{};()]+)
    """,
    re.VERBOSE,
)


# ── Movetext ─────────────────────────────────────────────────────────────────


def pgn_movetext(
    moves: list[PgnMove],
    result_token: str,
    *,
    fullmove_number: int = 1,
    black_to_move: bool = False,
) -> str:
    """Build PGN movetext from mainline moves with optional comments.

    *fullmove_number* and *black_to_move* describe the starting position so
    that games set up from FEN are numbered correctly (``12... Kf7``).
    """
    parts: list[str] = []
    offset = 1 if black_to_move else 0
    for idx, move in enumerate(moves):
        ply = idx + offset
        number = fullmove_number + ply // 2
        if ply % 2 == 0:
            parts.append(f"{number}.")
        elif idx == 0 or moves[idx - 1].comments:
            parts.append(f"{number}...")
        parts.append(move.text)
        for comment in move.comments:
            # PGN comments cannot contain a closing brace.
            safe_comment = comment.replace("}", "]")
            parts.append(f"{{{safe_comment}}}")
    parts.append(result_token)
    return " ".join(parts)


def build_pgn(
    tag_pairs: list[TagPair],
    moves: list[PgnMove],
    result_token: str,
    *,
    fullmove_number: int = 1,
    black_to_move: bool = False,
) -> str:
    """Build a single-game PGN document."""
    lines = [str(pair) for pair in tag_pairs]
    if lines:
        lines.append("")
    lines.append(
        pgn_movetext(
            moves,
            result_token,
            fullmove_number=fullmove_number,
            black_to_move=black_to_move,
        )
    )
    lines.append("")
    return "\n".join(lines)


def _append_comment(move: PgnMove, comment: str) -> None:
    clean = " ".join(comment.split())
    if clean:
        move.comments.append(clean)


def _parse_tag_line(line: str) -> TagPair:
    match = _PGN_HEADER_RE.match(line)
    if match is None:
        raise ParseError(f"Invalid PGN header line: {line}")
    key, raw_value = match.groups()
    return TagPair(key, raw_value.replace('\\"', '"').replace("\\\\", "\\"))


def _parse_pgn_movetext_mainline(movetext: str) -> tuple[list[PgnMove], str]:
    """Parse movetext and return mainline moves/comments plus result token.

    Variations are skipped with everything inside them, comments attach
    to the preceding mainline move.
    """
    moves: list[PgnMove] = []
    result_token = "*"
    depth = 0

    for match in _MOVETEXT_TOKEN_RE.finditer(movetext):
        kind = match.lastgroup
        if kind == "open_comment":
            raise ParseError("Unterminated PGN comment")
        if kind == "open":
            depth += 1
        elif kind == "close":
            if depth == 0:
                raise ParseError("Unbalanced ')' in PGN variation")
            depth -= 1
        elif depth:
            continue
        elif kind in ("comment", "line_comment"):
            if moves:
                _append_comment(moves[-1], match[kind])
        else:
            word = match["word"]
            if word in _PGN_RESULT_TOKENS:
                result_token = word
                continue
            san = _MOVE_NUMBER_PREFIX_RE.sub("", word)
            if san and not _NAG_RE.match(san):
                moves.append(PgnMove(text=san))

    if depth:
        raise ParseError("Unterminated variation in PGN movetext")
    return moves, result_token


def parse_pgn_game(pgn_text: str) -> ParsedPgn:
    """Parse a single PGN game into tag pairs, mainline moves and result."""
    lines = [line.strip() for line in pgn_text.splitlines()]
    tag_pairs: list[TagPair] = []

    # Header section: leading tag lines, ended by the first blank line after them.
    body = 0
    while body < len(lines) and (not lines[body] or lines[body].startswith("[")):
        if lines[body]:
            tag_pairs.append(_parse_tag_line(lines[body]))
        elif tag_pairs:
            break
        body += 1

    movetext = "\n".join(line for line in lines[body:] if not line.startswith("%"))
    moves, result_token = _parse_pgn_movetext_mainline(movetext)
    parsed = ParsedPgn(tag_pairs=tag_pairs, moves=moves, result_token=result_token)
    header_result = parsed.tag("Result")
    if result_token == "*" and header_result in _PGN_RESULT_TOKENS:
        parsed.result_token = header_result
    return parsed


# ── Game codec ───────────────────────────────────────────────────────────────


def read_pgn(source: str | Path | TextIO) -> str:
    """Return PGN text from a string, a path or an open text stream."""
    if isinstance(source, Path):
        return source.read_text(encoding="utf-8")
    if isinstance(source, str):
        return source
    return source.read()


def decode_pgn(
    pgn_text: str,
    notation: INotation | None = None,
    settings: GameSettings | None = None,
    *,
    ignore_automatic_draws: bool | None = None,
) -> Game:
    """Replay a PGN game into a new :class:`Game`.

    Moves are decoded with *notation*.  When omitted, the SAN decoder is
    used, which also accepts long algebraic and UCI move text, so a PGN in
    any supported notation imports the same way.  *ignore_automatic_draws*
    overrides the flag from *settings* for the replay.  A decisive
    result token that the replayed position does not already account for
    (a resignation, an agreed draw) is recorded with ``Method.NONE``.
    """
    from chessarbiter.game import options
    from chessarbiter.game.controller import Game

    parsed = parse_pgn_game(pgn_text)
    start_fen = parsed.tag("FEN")
    decoder = notation if notation is not None else AlgebraicNotation()
    game = Game(
        options.ignore_automatic_draws(ignore_automatic_draws)
        if ignore_automatic_draws is not None
        else None,
        options.fen(start_fen) if start_fen and start_fen != STARTING_FEN else None,
        options.use_notation(notation) if notation is not None else None,
        settings=settings,
    )

    for pgn_move in parsed.moves:
        move = decoder.decode(game.position, pgn_move.text)
        try:
            game.apply_move(move)
        except ChessArbiterError as exc:
            raise ParseError(f"Cannot replay PGN move {pgn_move.text!r}: {exc}") from exc
        for comment in pgn_move.comments:
            game.add_comment(comment)

    for pair in parsed.tag_pairs:
        game.add_tag_pair(pair.key, pair.value)

    declared = Outcome(parsed.result_token)
    if declared.is_decided and not game.outcome.is_decided:
        game._declare_outcome(declared)

    _LOGGER.debug(
        "Decoded PGN game: %d plies, %d tag pairs, result %s",
        game.ply,
        len(parsed.tag_pairs),
        game.outcome,
    )
    return game


def encode_pgn(game: Game) -> str:
    """Serialise *game* (up to its current ply) as a PGN document."""
    first = game.positions()[0]
    fields = first.fen().split()

    tag_pairs = _sync_tags(list(game.tag_pairs()), game.outcome.value, first.fen())
    moves = [
        PgnMove(text=game.notation.encode(entry.pre_position, entry.move), comments=list(entry.comments))
        for entry in game.move_history()
    ]
    return build_pgn(
        tag_pairs,
        moves,
        game.outcome.value,
        fullmove_number=int(fields[5]) if len(fields) > 5 else 1,
        black_to_move=fields[1] == "b",
    )


def _sync_tags(tag_pairs: list[TagPair], result_token: str, start_fen: str) -> list[TagPair]:
    """Keep ``Result`` and the set-up tags consistent with the game."""
    synced: list[TagPair] = []
    for pair in tag_pairs:
        if pair.key == "Result":
            pair = TagPair("Result", result_token)
        elif pair.key in ("SetUp", "FEN"):
            continue
        synced.append(pair)
    if start_fen != STARTING_FEN:
        synced.append(TagPair("SetUp", "1"))
        synced.append(TagPair("FEN", start_fen))
    return synced
