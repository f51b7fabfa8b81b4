import pytest
import random

from reversi.config import SearchConfig
from reversi.game import GameSession
from reversi.othello.board import BLACK, WHITE, Board, GameState, IllegalMove
from reversi.search.playout import Difficulty


@pytest.fixture
def session() -> GameSession:
    search_config = SearchConfig(max_iterations=2, time_budget=60.0, workers=1)
    return GameSession(Difficulty.EASY, search_config, rng=random.Random(0))


def test_new_session(session: GameSession) -> None:
    assert session.human == BLACK
    assert session.computer == WHITE
    assert session.is_human_turn()
    assert session.state() == GameState.IN_PROGRESS
    assert not session.is_game_end()
    assert session.get_board() == Board.start()


def test_play_human(session: GameSession) -> None:
    flipped = session.play_human(19)

    assert flipped == [27]
    assert len(session.history) == 2
    assert not session.is_human_turn()
    assert session.history[0] == Board.start()


def test_play_human_illegal(session: GameSession) -> None:
    with pytest.raises(IllegalMove):
        session.play_human(0)

    assert len(session.history) == 1
    assert session.is_human_turn()


def test_play_computer(session: GameSession) -> None:
    session.play_human(19)
    result = session.play_computer()

    assert result.move in {18, 20, 34}
    assert result.rounds == 2
    assert len(session.history) == 3
    assert session.is_human_turn()
    assert session.get_board().get_square(result.move) == WHITE


def test_undo(session: GameSession) -> None:
    assert not session.undo()

    session.play_human(19)
    session.play_computer()

    assert session.undo()
    assert len(session.history) == 1
    assert session.get_board() == Board.start()


def test_undo_before_computer_reply(session: GameSession) -> None:
    session.play_human(26)

    assert session.undo()
    assert session.get_board() == Board.start()
    assert session.is_human_turn()


def test_restart(session: GameSession) -> None:
    session.play_human(37)
    session.restart()
    assert session.history == [Board.start()]


def test_full_game(session: GameSession) -> None:
    while not session.is_game_end():
        if session.is_human_turn():
            session.play_human(min(session.get_board().legal_moves()))
        else:
            session.play_computer()

    black, white = session.get_board().score()
    expected = {True: GameState.BLACK_WINS, False: GameState.WHITE_WINS}
    if black == white:
        assert session.state() == GameState.DRAW
    else:
        assert session.state() == expected[black > white]


def test_is_game_end(session: GameSession) -> None:
    rows = ["XXXXXXXX"] * 4 + ["OOOOOOOO"] * 4
    cells = [BLACK if char == "X" else WHITE for char in "".join(rows)]
    session.history = [Board.from_cells(cells, BLACK)]

    assert session.is_game_end()
    assert session.state() == GameState.DRAW
