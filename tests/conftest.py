import pytest

CONFIG_VARIABLES = [
    "REVERSI_DIFFICULTY",
    "REVERSI_MAX_ITERATIONS",
    "REVERSI_TIME_BUDGET",
    "REVERSI_WORKERS",
    "REVERSI_DEBUG",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
