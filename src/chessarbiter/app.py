"""Command-line entry point: replay a game and report how it stands."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from chessarbiter.core.enums import Color, Method
from chessarbiter.core.errors import ChessArbiterError
from chessarbiter.game import Game, GameSettings, fen, pgn, use_notation
from chessarbiter.notation.moves import NOTATIONS, notation_for_name

_LOGGER = logging.getLogger(__name__)
_CLAIMS = {str(m): m for m in (Method.DRAW_OFFER, Method.THREEFOLD_REPETITION, Method.FIFTY_MOVE_RULE)}
_COLORS = {str(c): c for c in Color}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessarbiter",
        description="Replay a chess game and print its position, outcome and draw options.",
    )
    parser.add_argument("pgn_file", nargs="?", help="PGN file to load ('-' reads stdin)")
    parser.add_argument("--fen", help="start from this FEN instead of a PGN file")
    parser.add_argument("--moves", nargs="*", default=[], help="extra moves to play")
    parser.add_argument(
        "--notation",
        choices=sorted(NOTATIONS),
        help="move notation for --moves and PGN output",
    )
    parser.add_argument("--claim", choices=sorted(_CLAIMS), help="claim a draw afterwards")
    parser.add_argument("--resign", choices=sorted(_COLORS), help="resign for a color afterwards")
    parser.add_argument("--pgn-out", action="store_true", help="print the game as PGN")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    return parser


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = GameSettings.from_env()
        notation = notation_for_name(args.notation) if args.notation else settings.make_notation()
        options = [use_notation(notation)]
        if args.pgn_file == "-":
            options.append(pgn(sys.stdin))
        elif args.pgn_file:
            options.append(pgn(Path(args.pgn_file)))
        if args.fen:
            options.append(fen(args.fen))

        game = Game(*options, settings=settings)
        for text in args.moves:
            game.apply_move_text(text)
        if args.claim:
            game.claim_draw(_CLAIMS[args.claim])
        if args.resign:
            game.resign(_COLORS[args.resign])
    except (ChessArbiterError, ValueError, OSError) as exc:
        _LOGGER.debug("Replay failed", exc_info=True)
        print(f"chessarbiter: {exc}", file=sys.stderr)
        return 2

    print(f"fen: {game.fen()}")
    print(f"outcome: {game.outcome.value}")
    print(f"method: {game.method}")
    print(f"eligible draws: {', '.join(str(m) for m in game.eligible_draws())}")
    if args.pgn_out:
        print()
        print(game.to_pgn(), end="")
    return 0


def main() -> None:
    """Launch the chessarbiter CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()
