from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from reversi.othello.directions import COLS, DIRECTIONS, ROWS, neighbours, ray

BLACK = -1
WHITE = 1
EMPTY = 0


def opponent(color: int) -> int:
    assert color in [BLACK, WHITE]
    return -color


class IllegalMove(Exception):
    pass


class GameState(Enum):
    IN_PROGRESS = "in_progress"
    BLACK_WINS = "black_wins"
    WHITE_WINS = "white_wins"
    DRAW = "draw"


class Board:
    """
    Mutable Reversi board.

    Besides the squares, the board keeps track of the perimeter (empty squares
    next to at least one disc) and of the legal moves of both players. Only
    perimeter squares can ever become legal, so after a move only those are
    re-checked instead of the whole board.
    """

    def __init__(self, width: int = COLS, height: int = ROWS) -> None:
        assert width >= 4 and width % 2 == 0
        assert height >= 4 and height % 2 == 0

        self.width = width
        self.height = height
        self.cells = [EMPTY] * width * height

        # Player to move, black always starts.
        self.turn = BLACK

        top_left = (height // 2 - 1) * width + (width // 2 - 1)
        self.cells[top_left] = WHITE
        self.cells[top_left + 1] = BLACK
        self.cells[top_left + width] = BLACK
        self.cells[top_left + width + 1] = WHITE

        self.perimeter: set[int] = set()
        self._legal_moves: dict[int, set[int]] = {BLACK: set(), WHITE: set()}
        self._derive_tracking()

    @classmethod
    def start(cls) -> Board:
        return Board()

    @classmethod
    def from_cells(
        cls, cells: list[int], turn: int, width: int = COLS, height: int = ROWS
    ) -> Board:
        assert len(cells) == width * height
        assert turn in [BLACK, WHITE]
        assert all(cell in [EMPTY, BLACK, WHITE] for cell in cells)

        board = Board(width, height)
        board.cells = list(cells)
        board.turn = turn
        board._derive_tracking()
        return board

    def _derive_tracking(self) -> None:
        self.perimeter = {
            index
            for index, cell in enumerate(self.cells)
            if cell == EMPTY
            and any(
                self.cells[neighbour] != EMPTY
                for neighbour in neighbours(index, self.width, self.height)
            )
        }
        self._legal_moves = {BLACK: set(), WHITE: set()}
        self._update_legal_moves(self.perimeter)

    def _update_legal_moves(self, indexes: Iterable[int]) -> None:
        for index in indexes:
            for player in [BLACK, WHITE]:
                if self.is_legal(index, player):
                    self._legal_moves[player].add(index)
                else:
                    self._legal_moves[player].discard(index)

    def clone(self) -> Board:
        board = Board.__new__(Board)
        board.width = self.width
        board.height = self.height
        board.cells = list(self.cells)
        board.turn = self.turn
        board.perimeter = set(self.perimeter)
        board._legal_moves = {
            BLACK: set(self._legal_moves[BLACK]),
            WHITE: set(self._legal_moves[WHITE]),
        }
        return board

    def __repr__(self) -> str:
        squares = "".join({EMPTY: "-", BLACK: "X", WHITE: "O"}[c] for c in self.cells)
        return f"Board({squares}, {self.turn})"

    def get_square(self, index: int) -> int:
        return self.cells[index]

    def legal_moves(self, player: Optional[int] = None) -> set[int]:
        if player is None:
            player = self.turn

        assert player in [BLACK, WHITE]
        return set(self._legal_moves[player])

    def has_moves(self, player: Optional[int] = None) -> bool:
        if player is None:
            player = self.turn

        assert player in [BLACK, WHITE]
        return len(self._legal_moves[player]) != 0

    def get_flips(self, index: int, player: int) -> list[int]:
        """Returns the discs that `player` would flip by playing on `index`."""
        assert player in [BLACK, WHITE]

        if self.cells[index] != EMPTY:
            return []

        flipped: list[int] = []
        for direction in DIRECTIONS:
            line: list[int] = []

            for square in ray(index, direction, self.width, self.height):
                cell = self.cells[square]

                if cell == opponent(player):
                    line.append(square)
                    continue

                if cell == player:
                    flipped += line
                break

        return flipped

    def is_legal(self, index: int, player: int) -> bool:
        return len(self.get_flips(index, player)) != 0

    def apply_move(self, index: int, player: Optional[int] = None) -> list[int]:
        """
        Places a disc of `player` on `index`, flips the enclosed discs and
        hands the turn to the opponent. Returns the flipped squares.

        Raises IllegalMove without touching the board if the move is not legal.
        """
        if player is None:
            player = self.turn

        assert player in [BLACK, WHITE]

        if index not in self._legal_moves[player]:
            raise IllegalMove(f"{index} is not a legal move")

        flipped = self.get_flips(index, player)

        self.cells[index] = player
        for square in flipped:
            self.cells[square] = player

        self.perimeter.discard(index)
        for neighbour in neighbours(index, self.width, self.height):
            if self.cells[neighbour] == EMPTY:
                self.perimeter.add(neighbour)

        self._legal_moves[BLACK].discard(index)
        self._legal_moves[WHITE].discard(index)
        self._update_legal_moves(self.perimeter)

        self.turn = opponent(player)
        return flipped

    def pass_turn(self) -> None:
        self.turn = opponent(self.turn)

    def count(self, color: int) -> int:
        assert color in [WHITE, BLACK]
        return self.cells.count(color)

    def score(self) -> tuple[int, int]:
        return self.count(BLACK), self.count(WHITE)

    def terminal_state(self) -> GameState:
        # The game ends as soon as either player runs out of moves,
        # even if the other one could still play.
        if self.has_moves(BLACK) and self.has_moves(WHITE):
            return GameState.IN_PROGRESS

        black, white = self.score()

        if black > white:
            return GameState.BLACK_WINS
        if white > black:
            return GameState.WHITE_WINS
        return GameState.DRAW

    def is_game_end(self) -> bool:
        return self.terminal_state() != GameState.IN_PROGRESS

    @classmethod
    def index_to_field(cls, index: int) -> str:
        if index not in range(ROWS * COLS):
            raise ValueError
        return "abcdefgh"[index % COLS] + "12345678"[index // COLS]

    @classmethod
    def indexes_to_fields(cls, indexes: Iterable[int]) -> str:
        return " ".join(cls.index_to_field(index) for index in indexes)

    @classmethod
    def field_to_index(cls, field: str) -> int:
        if len(field) != 2:
            raise ValueError(f'Invalid move length "{len(field)}"')

        field = field.lower()

        if not ("a" <= field[0] <= "h" and "1" <= field[1] <= "8"):
            raise ValueError(f'Invalid field "{field}"')

        x = ord(field[0]) - ord("a")
        y = ord(field[1]) - ord("1")
        return y * COLS + x

    def as_tuple(self) -> tuple[tuple[int, ...], int]:
        return (tuple(self.cells), self.turn)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            raise TypeError(f"Cannot compare Board with {type(other)}")

        return self.as_tuple() == other.as_tuple()
