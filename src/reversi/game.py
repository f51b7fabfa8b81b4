from __future__ import annotations

import random
from typing import Optional

from reversi.config import SearchConfig
from reversi.othello.board import BLACK, Board, GameState, opponent
from reversi.search.playout import Difficulty, SearchResult, search


class GameSession:
    """
    Human against computer game. Every move is applied to a copy of the
    current board, so the history can be used to undo moves.
    """

    def __init__(
        self,
        difficulty: Difficulty,
        search_config: SearchConfig,
        human: int = BLACK,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.difficulty = difficulty
        self.search_config = search_config
        self.human = human
        self.computer = opponent(human)
        self.rng = rng
        self.history = [Board.start()]

    def get_board(self) -> Board:
        return self.history[-1]

    def is_human_turn(self) -> bool:
        return self.get_board().turn == self.human

    def state(self) -> GameState:
        return self.get_board().terminal_state()

    def is_game_end(self) -> bool:
        return self.get_board().is_game_end()

    def play_human(self, move: int) -> list[int]:
        assert self.is_human_turn()

        # Raises IllegalMove, the copy is dropped in that case.
        child = self.get_board().clone()
        flipped = child.apply_move(move, self.human)

        self.history.append(child)
        return flipped

    def play_computer(self) -> SearchResult:
        assert not self.is_human_turn()
        assert not self.is_game_end()

        board = self.get_board()
        result = search(
            board,
            self.search_config.max_iterations,
            self.search_config.time_budget,
            self.difficulty,
            rng=self.rng,
            workers=self.search_config.workers,
        )

        child = board.clone()
        child.apply_move(result.move, self.computer)
        self.history.append(child)
        return result

    def undo(self) -> bool:
        """Goes back to the previous position where the human was to move."""
        if len(self.history) == 1:
            return False

        self.history.pop()
        while len(self.history) > 1 and not self.is_human_turn():
            self.history.pop()
        return True

    def restart(self) -> None:
        self.history = [Board.start()]
