import typer
from typing import Annotated, Optional

from reversi import terminal
from reversi.arguments import Arguments
from reversi.config import SearchConfig, get_debug, get_difficulty
from reversi.search.playout import Difficulty

app = typer.Typer()


def parse_difficulty(value: Optional[str]) -> Optional[Difficulty]:
    if value is None:
        return None

    try:
        return Difficulty.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command()
def main(
    difficulty: Annotated[Optional[str], typer.Option("--difficulty", "-d")] = None,
    max_iterations: Annotated[
        Optional[int], typer.Option("--max-iterations", "-n", min=1)
    ] = None,
    time_budget: Annotated[
        Optional[float], typer.Option("--time-budget", "-t", min=0.0)
    ] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", "-w", min=1)] = None,
    debug: Annotated[bool, typer.Option("--debug")] = False,
) -> None:
    chosen_difficulty = parse_difficulty(difficulty)
    if chosen_difficulty is None:
        chosen_difficulty = get_difficulty()

    search_config = SearchConfig(max_iterations, time_budget, workers)
    args = Arguments(chosen_difficulty, search_config, debug or get_debug())

    terminal.start(args)


if __name__ == "__main__":
    app()
