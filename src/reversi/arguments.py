from typing import Optional

from reversi.config import SearchConfig
from reversi.search.playout import Difficulty


class Arguments:
    def __init__(
        self,
        difficulty: Optional[Difficulty],
        search: SearchConfig,
        debug: bool,
    ) -> None:
        # None means the player still has to pick one.
        self.difficulty = difficulty
        self.search = search
        self.debug = debug
