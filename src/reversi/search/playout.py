from __future__ import annotations

import multiprocessing
import random
import time
from contextlib import nullcontext
from enum import Enum
from multiprocessing.pool import Pool
from pydantic import BaseModel
from typing import Optional

from reversi.othello.board import BLACK, WHITE, Board, GameState


class Difficulty(str, Enum):
    # Opponent plays uniformly random moves in playouts.
    EASY = "easy"

    # Opponent greedily maximizes its disc count in playouts.
    HARD = "hard"

    @classmethod
    def parse(cls, value: str) -> Difficulty:
        value = value.strip().lower()

        aliases = {"1": cls.EASY, "2": cls.HARD}
        if value in aliases:
            return aliases[value]

        try:
            return cls(value)
        except ValueError:
            raise ValueError(f'Unknown difficulty "{value}"') from None


class Outcome(Enum):
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class MoveStats(BaseModel):
    move: int
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome == Outcome.WIN:
            self.wins += 1
        elif outcome == Outcome.LOSS:
            self.losses += 1
        else:
            self.draws += 1

    def playouts(self) -> int:
        return self.wins + self.losses + self.draws


class SearchResult(BaseModel):
    move: int
    rounds: int
    elapsed: float
    stats: list[MoveStats]

    def playouts(self) -> int:
        return sum(move_stats.playouts() for move_stats in self.stats)

    def playouts_per_second(self) -> float:
        if self.elapsed == 0.0:
            return 0.0
        return self.playouts() / self.elapsed


def outcome_for(state: GameState, player: int) -> Outcome:
    assert state != GameState.IN_PROGRESS
    assert player in [BLACK, WHITE]

    if state == GameState.DRAW:
        return Outcome.DRAW

    winner = BLACK if state == GameState.BLACK_WINS else WHITE
    if winner == player:
        return Outcome.WIN
    return Outcome.LOSS


def random_move(board: Board, rng: random.Random) -> int:
    # Sets have no positional access, sort for a reproducible choice.
    return rng.choice(sorted(board.legal_moves()))


def greedy_move(board: Board) -> Optional[int]:
    """
    Returns the move that leaves the player to move with the most discs after
    one ply, preferring the lowest index on ties. Returns None without moves.
    """
    player = board.turn
    discs = board.count(player)

    best_move: Optional[int] = None
    best_discs = discs

    for move in sorted(board.legal_moves(player)):
        move_discs = discs + 1 + len(board.get_flips(move, player))
        if move_discs > best_discs:
            best_move = move
            best_discs = move_discs

    return best_move


def playout(
    board: Board, move: int, difficulty: Difficulty, rng: random.Random
) -> Outcome:
    """
    Plays `move` on a copy of `board` and finishes the game with simulated
    moves. Returns the result from the perspective of the player to move on
    `board`. The passed board is never modified.
    """
    player = board.turn

    board = board.clone()
    board.apply_move(move)

    while True:
        state = board.terminal_state()
        if state != GameState.IN_PROGRESS:
            return outcome_for(state, player)

        if board.turn != player and difficulty == Difficulty.HARD:
            next_move = greedy_move(board)
        elif board.has_moves():
            next_move = random_move(board, rng)
        else:
            next_move = None

        if next_move is None:
            board.pass_turn()
            continue

        board.apply_move(next_move)


def _playout_task(args: tuple[Board, int, Difficulty]) -> tuple[int, Outcome]:
    board, move, difficulty = args

    # Seeded from OS randomness, so forked workers don't share a sequence.
    rng = random.Random()
    return move, playout(board, move, difficulty, rng)


def _run_round(
    board: Board,
    candidates: list[int],
    difficulty: Difficulty,
    rng: random.Random,
    pool: Optional[Pool],
) -> list[tuple[int, Outcome]]:
    if pool is None:
        return [
            (move, playout(board, move, difficulty, rng)) for move in candidates
        ]

    tasks = [(board, move, difficulty) for move in candidates]
    return pool.map(_playout_task, tasks)


def search(
    board: Board,
    max_iterations: int,
    time_budget: float,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
    workers: int = 1,
) -> SearchResult:
    """
    Runs rounds of playouts, one per legal move per round, until either
    `max_iterations` rounds are done or `time_budget` seconds have passed.
    The time budget is only checked between rounds.

    Picks the move with the most winning playouts, or a random legal move if
    no playout was won.
    """
    candidates = sorted(board.legal_moves())
    assert candidates, "Cannot search a board without legal moves"
    assert workers >= 1

    if rng is None:
        rng = random.Random()

    stats = {move: MoveStats(move=move) for move in candidates}
    start = time.monotonic()
    rounds = 0

    pool_context = multiprocessing.Pool(workers) if workers > 1 else nullcontext()

    with pool_context as pool:
        for _ in range(max_iterations):
            if time.monotonic() - start >= time_budget:
                break

            for move, outcome in _run_round(board, candidates, difficulty, rng, pool):
                stats[move].record(outcome)

            rounds += 1

    elapsed = time.monotonic() - start

    winning = [move_stats for move_stats in stats.values() if move_stats.wins > 0]

    if winning:
        # max() keeps the first maximum, which is the lowest index.
        best_move = max(winning, key=lambda move_stats: move_stats.wins).move
    else:
        best_move = rng.choice(candidates)

    return SearchResult(
        move=best_move,
        rounds=rounds,
        elapsed=elapsed,
        stats=list(stats.values()),
    )


def choose_move(
    board: Board,
    max_iterations: int,
    time_budget: float,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
    workers: int = 1,
) -> int:
    return search(board, max_iterations, time_budget, difficulty, rng, workers).move
