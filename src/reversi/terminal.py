from __future__ import annotations

import re
import typer

from reversi.arguments import Arguments
from reversi.game import GameSession
from reversi.othello.board import BLACK, EMPTY, WHITE, Board, GameState, IllegalMove
from reversi.search.playout import Difficulty, SearchResult

FIELD_REGEX = re.compile("^[a-hA-H][1-8]$")

RULES = [
    " * {human} discs are yours, {computer} discs belong to the computer.",
    " * Place a disc so that it encloses a line of computer discs with one of\n"
    "   your own. Possible moves are marked with an asterisk (*).",
    " * The game ends when either player cannot play a disc or the board is\n"
    "   full. The player with the most discs wins.",
]

COMMANDS = {
    "actions": "print the moves you can currently play",
    "rules": "show the game rules",
    "debug": "toggle showing search statistics",
    "undo": "take back your last move",
    "restart": "start a new game",
    "exit": "quit the game",
}


def bold(text: str) -> str:
    return typer.style(text, bold=True)


def paint(color: int, text: str) -> str:
    if color == BLACK:
        return typer.style(text, fg=typer.colors.RED)
    return typer.style(text, fg=typer.colors.GREEN)


def render_board(board: Board, show_moves_for: int) -> str:
    lines = ["     " + bold("A B C D E F G H")]
    moves = board.legal_moves(show_moves_for)

    for y in range(board.height):
        squares: list[str] = []

        for x in range(board.width):
            index = y * board.width + x
            square = board.get_square(index)

            if square != EMPTY:
                squares.append(paint(square, "●"))
            elif index in moves:
                squares.append(bold("*"))
            else:
                squares.append("-")

        lines.append(f"  {bold(str(y + 1))}  " + " ".join(squares))

    black, white = board.score()
    lines.append("")
    lines.append(
        f"     You: {paint(BLACK, str(black))}, Computer: {paint(WHITE, str(white))}"
    )
    return "\n".join(lines)


def render_search_result(result: SearchResult) -> str:
    lines = [
        f"Rounds: {result.rounds}, playouts: {result.playouts()}, "
        f"elapsed: {result.elapsed:.2f}s, "
        f"playouts per second: {result.playouts_per_second():.0f}"
    ]
    for move_stats in result.stats:
        field = Board.index_to_field(move_stats.move)
        lines.append(
            f"  {field}: {move_stats.wins} wins, {move_stats.losses} losses, "
            f"{move_stats.draws} draws"
        )
    return "\n".join(lines)


def print_title() -> None:
    typer.echo("#" * 64)
    typer.echo("#" + " " * 62 + "#")
    typer.echo("#" + bold("Welcome to Reversi against the computer!".center(62)) + "#")
    typer.echo("#" + " " * 62 + "#")
    typer.echo("#" * 64 + "\n")


def print_rules() -> None:
    typer.echo(bold("Rules") + "\n")
    for rule in RULES:
        human = paint(BLACK, "Red")
        computer = paint(WHITE, "Green")
        typer.echo(rule.format(human=human, computer=computer))
    typer.echo()


def print_help() -> None:
    typer.echo("\nCommands:\n")
    for command, description in COMMANDS.items():
        typer.echo(f"  {bold(command.ljust(8))} - {description}")
    typer.echo("\nEnter a field such as d3 to place a disc.\n")


def print_actions(board: Board, player: int) -> None:
    moves = sorted(board.legal_moves(player))
    typer.echo("\nYour moves: " + bold(Board.indexes_to_fields(moves)) + "\n")


def prompt_difficulty() -> Difficulty:
    while True:
        typer.echo("\n[1] Easy")
        typer.echo("[2] Hard\n")
        raw = typer.prompt("Select computer difficulty (1, 2)")

        try:
            return Difficulty.parse(raw)
        except ValueError:
            typer.echo("ERROR: Invalid difficulty")


def start(args: Arguments) -> None:
    print_title()
    print_rules()

    Terminal(args).run()


class Terminal:
    def __init__(self, args: Arguments) -> None:
        self.args = args
        self.debug = args.debug

        difficulty = args.difficulty
        if difficulty is None:
            difficulty = prompt_difficulty()

        self.session = GameSession(difficulty, args.search)

    def run(self) -> None:
        while True:
            board = self.session.get_board()
            state = board.terminal_state()

            if state != GameState.IN_PROGRESS:
                self.print_game_end(state)
                return

            if self.session.is_human_turn():
                typer.echo(render_board(board, self.session.human) + "\n")
                line = typer.prompt("Place disc at")
                if not self.on_input(line.strip()):
                    return
            else:
                self.on_computer_turn()

    def on_input(self, line: str) -> bool:
        """Handles one line of user input. Returns False when the game should stop."""
        if FIELD_REGEX.match(line):
            self.on_move(Board.field_to_index(line))
            return True

        command = line.lower()

        if command == "exit":
            return False

        if command == "help":
            print_help()
        elif command == "actions":
            print_actions(self.session.get_board(), self.session.human)
        elif command == "rules":
            print_rules()
        elif command == "debug":
            self.debug = not self.debug
            typer.echo(f"Debug turned {'ON' if self.debug else 'OFF'}")
        elif command == "undo":
            if not self.session.undo():
                typer.echo("Nothing to undo")
        elif command == "restart":
            self.session.restart()
            typer.echo("Started a new game")
        else:
            typer.echo("ERROR: invalid input, enter 'help' for command information")

        return True

    def on_move(self, move: int) -> None:
        try:
            self.session.play_human(move)
        except IllegalMove:
            field = Board.index_to_field(move)
            typer.echo(f"ERROR: {field} is not a valid move")

    def on_computer_turn(self) -> None:
        typer.echo("Computer is thinking...")
        result = self.session.play_computer()

        if self.debug:
            typer.echo(render_search_result(result))

        typer.echo(f"\nComputer plays {bold(Board.index_to_field(result.move))}\n")

    def print_game_end(self, state: GameState) -> None:
        board = self.session.get_board()
        typer.echo(render_board(board, self.session.human) + "\n")

        if state == GameState.DRAW:
            typer.echo("Game is a draw")
        elif (state == GameState.BLACK_WINS) == (self.session.human == BLACK):
            typer.echo("You have won")
        else:
            typer.echo("Computer has won")
