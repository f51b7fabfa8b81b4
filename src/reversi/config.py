import os
from dotenv import load_dotenv
from typing import Optional

from reversi.search.playout import Difficulty

load_dotenv()

DEFAULT_MAX_ITERATIONS = 1000

# Seconds
DEFAULT_TIME_BUDGET = 5.0

DEFAULT_WORKERS = 1


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got "{raw}"') from None

    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def get_difficulty() -> Optional[Difficulty]:
    raw = os.getenv("REVERSI_DIFFICULTY")
    if raw is None:
        return None
    return Difficulty.parse(raw)


def get_max_iterations() -> int:
    return _get_int("REVERSI_MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS)


def get_time_budget() -> float:
    raw = os.getenv("REVERSI_TIME_BUDGET")
    if raw is None:
        return DEFAULT_TIME_BUDGET

    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f'REVERSI_TIME_BUDGET must be a number, got "{raw}"') from None

    if value < 0:
        raise ValueError(f"REVERSI_TIME_BUDGET must not be negative, got {value}")
    return value


def get_workers() -> int:
    return _get_int("REVERSI_WORKERS", DEFAULT_WORKERS)


def get_debug() -> bool:
    return os.getenv("REVERSI_DEBUG", "0") != "0"


class SearchConfig:
    def __init__(
        self,
        max_iterations: Optional[int] = None,
        time_budget: Optional[float] = None,
        workers: Optional[int] = None,
    ) -> None:
        self.max_iterations = (
            max_iterations if max_iterations is not None else get_max_iterations()
        )
        self.time_budget = time_budget if time_budget is not None else get_time_budget()
        self.workers = workers if workers is not None else get_workers()

    def __repr__(self) -> str:
        return (
            f"SearchConfig({self.max_iterations}, {self.time_budget}, {self.workers})"
        )
