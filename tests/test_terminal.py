import click
import pytest

from reversi.arguments import Arguments
from reversi.config import SearchConfig
from reversi.othello.board import BLACK, EMPTY, WHITE, Board
from reversi.search.playout import Difficulty, MoveStats, SearchResult
from reversi.terminal import Terminal, render_board, render_search_result

SQUARE_CHARS = {"-": EMPTY, "X": BLACK, "O": WHITE}


@pytest.fixture
def terminal() -> Terminal:
    search_config = SearchConfig(max_iterations=1, time_budget=60.0, workers=1)
    return Terminal(Arguments(Difficulty.EASY, search_config, False))


def test_render_board_start() -> None:
    lines = click.unstyle(render_board(Board.start(), BLACK)).split("\n")

    assert lines[0] == "     A B C D E F G H"
    assert lines[3] == "  3  - - - * - - - -"
    assert lines[4] == "  4  - - * ● ● - - -"
    assert lines[5] == "  5  - - - ● ● * - -"
    assert lines[6] == "  6  - - - - * - - -"
    assert lines[-1] == "     You: 2, Computer: 2"


def test_render_board_moves_for_white() -> None:
    lines = click.unstyle(render_board(Board.start(), WHITE)).split("\n")
    assert lines[3] == "  3  - - - - * - - -"


def test_render_search_result() -> None:
    result = SearchResult(
        move=19,
        rounds=2,
        elapsed=0.5,
        stats=[MoveStats(move=19, wins=2), MoveStats(move=26, losses=1, draws=1)],
    )
    lines = render_search_result(result).split("\n")

    assert lines[0] == (
        "Rounds: 2, playouts: 4, elapsed: 0.50s, playouts per second: 8"
    )
    assert lines[1] == "  d3: 2 wins, 0 losses, 0 draws"
    assert lines[2] == "  c4: 0 wins, 1 losses, 1 draws"


@pytest.mark.parametrize(
    ["command", "expected"],
    [
        pytest.param("help", "Commands:", id="help"),
        pytest.param("actions", "Your moves: d3 c4 f5 e6", id="actions"),
        pytest.param("rules", "Rules", id="rules"),
        pytest.param("debug", "Debug turned ON", id="debug"),
        pytest.param("undo", "Nothing to undo", id="undo"),
        pytest.param("restart", "Started a new game", id="restart"),
        pytest.param("a1", "ERROR: a1 is not a valid move", id="illegal-move"),
        pytest.param("z9", "ERROR: invalid input", id="invalid-field"),
        pytest.param("quit", "ERROR: invalid input", id="unknown-command"),
    ],
)
def test_on_input(
    terminal: Terminal, capsys: pytest.CaptureFixture[str], command: str, expected: str
) -> None:
    assert terminal.on_input(command)
    assert expected in click.unstyle(capsys.readouterr().out)


def test_on_input_exit(terminal: Terminal) -> None:
    assert not terminal.on_input("exit")
    assert not terminal.on_input("EXIT")


def test_on_input_move(terminal: Terminal) -> None:
    assert terminal.on_input("D3")
    assert terminal.session.get_board().get_square(19) == BLACK
    assert not terminal.session.is_human_turn()


def test_restart(terminal: Terminal) -> None:
    terminal.on_input("d3")
    assert terminal.on_input("restart")

    assert terminal.session.history == [Board.start()]
    assert terminal.session.is_human_turn()


def test_debug_toggle(terminal: Terminal) -> None:
    terminal.on_input("debug")
    assert terminal.debug
    terminal.on_input("debug")
    assert not terminal.debug


def test_on_computer_turn_debug(
    terminal: Terminal, capsys: pytest.CaptureFixture[str]
) -> None:
    terminal.debug = True
    terminal.on_input("d3")
    terminal.on_computer_turn()

    out = click.unstyle(capsys.readouterr().out)
    assert "Rounds: 1" in out
    assert "Computer plays" in out
    assert terminal.session.is_human_turn()


@pytest.mark.parametrize(
    ["rows", "expected"],
    [
        pytest.param(["XXXXXXXX"] * 5 + ["OOOOOOOO"] * 3, "You have won", id="won"),
        pytest.param(
            ["XXXXXXXX"] * 3 + ["OOOOOOOO"] * 5, "Computer has won", id="lost"
        ),
        pytest.param(["XXXXXXXX"] * 4 + ["OOOOOOOO"] * 4, "Game is a draw", id="draw"),
    ],
)
def test_run_game_end(
    terminal: Terminal,
    capsys: pytest.CaptureFixture[str],
    rows: list[str],
    expected: str,
) -> None:
    cells = [SQUARE_CHARS[char] for char in "".join(rows)]
    terminal.session.history = [Board.from_cells(cells, BLACK)]

    terminal.run()

    assert expected in capsys.readouterr().out
