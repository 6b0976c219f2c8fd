from __future__ import annotations

import threading

from discriminant.config import MatchSettings
from discriminant.engine import BoardEngine
from discriminant.match import MatchRunner
from discriminant.search import SearchEngine
from discriminant.session import GameSession
from discriminant.types import Move, Piece, PieceType, Player

RED, BLUE = Player.RED, Player.BLUE


def capture_session():
    engine = BoardEngine.empty(current_player=BLUE, stalemate_policy="none")
    engine.place_piece(4, 2, Piece(BLUE, PieceType.QUADRATIC, 1))
    engine.place_piece(4, 4, Piece(RED, PieceType.CONSTANT, -4))
    engine.place_piece(0, 7, Piece(RED, PieceType.QUADRATIC, 2))
    return GameSession(human_side=BLUE, engine=engine)


def test_end_to_end_search_then_move():
    engine = BoardEngine()
    move = SearchEngine(engine).choose_move(2)
    assert move is not None
    outcome = engine.apply_move(move)
    if outcome.pending:
        assert engine.current_player is BLUE
        engine.complete_turn(outcome.events)
    assert engine.current_player is RED


def test_session_quiet_move_and_undo():
    session = GameSession(human_side=BLUE)
    assert session.is_human_turn()
    assert session.select(6, 2) == [(5, 2)]

    outcome = session.play(Move(6, 2, 5, 2))
    assert outcome is not None and not outcome.pending
    assert session.move_number == 1
    assert not session.is_human_turn()

    assert session.undo_move()
    assert session.engine.get_piece(6, 2) is not None
    assert session.engine.current_player is BLUE
    assert session.move_number == 0
    assert not session.undo_move()


def test_session_rejects_illegal_move():
    session = GameSession()
    assert session.play(Move(6, 2, 4, 2)) is None
    assert session.history == []


def test_session_pending_move_blocks_until_committed():
    session = capture_session()
    outcome = session.play(Move(4, 2, 4, 3))
    assert outcome.pending
    assert session.has_pending
    assert session.select(0, 7) == []
    assert session.play(Move(0, 7, 0, 6)) is None

    session.commit_pending()
    assert not session.has_pending
    assert session.engine.get_piece(4, 4) is None
    assert session.engine.current_player is RED
    assert session.move_number == 1


def test_session_undo_pending_move():
    session = capture_session()
    session.play(Move(4, 2, 4, 3))
    assert session.undo_move()
    assert not session.has_pending
    assert session.engine.get_piece(4, 2) is not None
    assert session.engine.get_piece(4, 4) is not None


def test_session_engine_move_does_not_touch_live_board():
    session = GameSession()
    before = session.engine.snapshot()
    move = session.engine_move(depth=1)
    assert move is not None
    assert session.engine.snapshot() == before
    assert session.play(move) is not None


def test_session_async_engine_move():
    session = GameSession()
    done = threading.Event()
    result = {}

    def on_complete(move, elapsed):
        result['move'] = move
        result['elapsed'] = elapsed
        done.set()

    assert session.request_engine_move_async(on_complete, depth=1)
    assert done.wait(timeout=30)
    assert isinstance(result['move'], Move)
    assert result['elapsed'] >= 0
    assert session.play(result['move']) is not None


def test_match_runner_plays_short_games():
    settings = MatchSettings(max_moves=6, epsilon=0.5, depths=(1,))
    runner = MatchRunner(settings=settings, seed=7)
    progress = []
    stats = runner.run(2, progress_callback=lambda done, total: progress.append((done, total)))

    assert progress == [(1, 2), (2, 2)]
    assert stats.games_played == 2
    assert stats.red_wins + stats.blue_wins + stats.draws == 2
    assert all(length <= 6 for length in stats.game_lengths)
    assert len(stats.final_scores) == 2

    summary = stats.summary()
    assert summary['games_played'] == 2
    assert 0.0 <= summary['backfire_rate'] <= 1.0
    assert summary['avg_game_length'] <= 6


def test_match_game_record():
    runner = MatchRunner(settings=MatchSettings(max_moves=4, epsilon=0.0, depths=(1,)), seed=1)
    game = runner.play_game()
    assert game.depth == 1
    assert game.random_moves == 0
    assert game.moves == 4
    assert game.winner is None
    assert game.final_board is not None
