"""Tests for automatic adjudication after each position change."""

import pytest

from chessarbiter.core.enums import Method, Outcome
from chessarbiter.game import Game, GameSettings, fen, ignore_automatic_draws, pgn

KNIGHT_SHUFFLE = ("Nf3", "Nf6", "Ng1", "Ng8")
SEVENTY_FIVE_FEN = "8/8/4k3/8/8/4K3/3R4/8 w - - 149 120"
KNIGHT_ENDING_FEN = "8/8/4k3/8/8/4K3/3N4/8 w - - 0 1"
BARE_KINGS_PGN = '[SetUp "1"]\n[FEN "8/8/4k3/8/8/3rK3/8/8 w - - 0 1"]\n\n1. Kxd3 *\n'


class TestTerminalPositions:
    def test_stalemate_from_fen(self) -> None:
        game = Game.from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert game.outcome == Outcome.DRAW
        assert game.method == Method.STALEMATE

    def test_stalemate_by_move(self, play) -> None:
        game = play(Game.from_fen("7k/8/5K2/6Q1/8/8/8/8 w - - 0 1"), "Qg6")
        assert game.outcome == Outcome.DRAW
        assert game.method == Method.STALEMATE

    def test_checkmate_from_fen(self) -> None:
        game = Game.from_fen("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
        assert game.outcome == Outcome.BLACK_WON
        assert game.method == Method.CHECKMATE

    def test_checkmate_beats_seventy_five_moves(self, play) -> None:
        game = play(Game.from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 149 120"), "Ra8#")
        assert game.position.halfmove_clock == 150
        assert game.method == Method.CHECKMATE
        assert game.outcome == Outcome.WHITE_WON


class TestAutomaticDraws:
    def test_insufficient_material_by_capture(self, play) -> None:
        game = Game.from_fen("8/8/4k3/8/8/3rK3/8/8 w - - 0 1")
        assert game.outcome == Outcome.IN_PROGRESS
        play(game, "Kxd3")
        assert game.outcome == Outcome.DRAW
        assert game.method == Method.INSUFFICIENT_MATERIAL

    def test_seventy_five_move_rule(self, play) -> None:
        game = play(Game.from_fen(SEVENTY_FIVE_FEN), "Rd1")
        assert game.position.halfmove_clock == 150
        assert game.outcome == Outcome.DRAW
        assert game.method == Method.SEVENTY_FIVE_MOVE_RULE

    def test_seventy_five_beats_insufficient_material(self) -> None:
        game = Game.from_fen("8/8/4k3/8/8/4K3/3B4/8 w - - 150 120")
        assert game.method == Method.SEVENTY_FIVE_MOVE_RULE

    def test_fivefold_repetition(self, game: Game, play) -> None:
        play(game, *KNIGHT_SHUFFLE * 3)
        assert game.repetition_count() == 4
        assert game.outcome == Outcome.IN_PROGRESS
        play(game, *KNIGHT_SHUFFLE)
        assert game.repetition_count() == 5
        assert game.outcome == Outcome.DRAW
        assert game.method == Method.FIVEFOLD_REPETITION

    def test_fivefold_beats_insufficient_material(self, play) -> None:
        game = Game.from_fen(KNIGHT_ENDING_FEN)
        assert game.method == Method.INSUFFICIENT_MATERIAL
        for _ in range(4):
            play(game, "Nf3", "Ke7", "Nd2", "Ke6")
        assert game.ply == 16
        assert game.method == Method.FIVEFOLD_REPETITION
        game.undo()
        assert game.method == Method.INSUFFICIENT_MATERIAL

    def test_moves_after_decision_are_readjudicated(self, play) -> None:
        game = play(Game.from_fen(SEVENTY_FIVE_FEN), "Rd1")
        assert game.is_game_over
        play(game, "Kf5")
        assert game.position.halfmove_clock == 151
        assert game.method == Method.SEVENTY_FIVE_MOVE_RULE


class TestIgnoreAutomaticDraws:
    def test_option_before_position(self) -> None:
        game = Game(ignore_automatic_draws(), fen("8/8/4k3/8/8/4K3/3B4/8 w - - 150 120"))
        assert game.outcome == Outcome.IN_PROGRESS
        assert game.ignores_automatic_draws

    def test_setting(self, play) -> None:
        settings = GameSettings(ignore_automatic_draws=True)
        game = play(Game(fen(SEVENTY_FIVE_FEN), settings=settings), "Rd1")
        assert game.outcome == Outcome.IN_PROGRESS
        # Claims stay available.
        game.claim_draw(Method.FIFTY_MOVE_RULE)
        assert game.method == Method.FIFTY_MOVE_RULE

    def test_fivefold_not_automatic(self, play) -> None:
        game = play(Game(ignore_automatic_draws()), *KNIGHT_SHUFFLE * 4)
        assert game.outcome == Outcome.IN_PROGRESS
        assert Method.THREEFOLD_REPETITION in game.eligible_draws()

    def test_insufficient_material_not_automatic(self, play) -> None:
        game = play(Game(ignore_automatic_draws(), fen("8/8/4k3/8/8/3rK3/8/8 w - - 0 1")), "Kxd3")
        assert game.outcome == Outcome.IN_PROGRESS

    @pytest.mark.parametrize("flag", [True, False])
    def test_terminal_positions_still_adjudicated(self, flag: bool) -> None:
        game = Game(ignore_automatic_draws(flag), fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1"))
        assert game.method == Method.STALEMATE


class TestImportedGames:
    def test_pgn_option_after_flag(self) -> None:
        game = Game(ignore_automatic_draws(), pgn(BARE_KINGS_PGN))
        assert game.ignores_automatic_draws
        assert (game.outcome, game.method) == (Outcome.IN_PROGRESS, Method.NONE)

    def test_pgn_option_without_flag(self) -> None:
        game = Game(pgn(BARE_KINGS_PGN))
        assert game.method == Method.INSUFFICIENT_MATERIAL

    def test_from_pgn_with_settings(self) -> None:
        settings = GameSettings(ignore_automatic_draws=True)
        game = Game.from_pgn(BARE_KINGS_PGN, settings=settings)
        assert (game.outcome, game.method) == (Outcome.IN_PROGRESS, Method.NONE)

    def test_from_pgn_with_option(self) -> None:
        game = Game.from_pgn(BARE_KINGS_PGN, ignore_automatic_draws())
        assert (game.outcome, game.method) == (Outcome.IN_PROGRESS, Method.NONE)

    def test_load_pgn(self) -> None:
        game = Game(ignore_automatic_draws())
        game.load_pgn(BARE_KINGS_PGN)
        assert game.ignores_automatic_draws
        assert (game.outcome, game.method) == (Outcome.IN_PROGRESS, Method.NONE)

    def test_load_pgn_without_flag(self, game: Game) -> None:
        game.load_pgn(BARE_KINGS_PGN)
        assert game.method == Method.INSUFFICIENT_MATERIAL

    def test_declared_draw_is_kept(self) -> None:
        game = Game(ignore_automatic_draws(), pgn(BARE_KINGS_PGN.replace("*", "1/2-1/2")))
        assert (game.outcome, game.method) == (Outcome.DRAW, Method.NONE)
