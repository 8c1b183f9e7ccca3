"""Command line interface, driven through typer's test runner."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from backend.models.codec import load_board, parse_board
from main import app

runner = CliRunner()

ONE_AWAY = """5 4
1 2 2 3
1 2 2 3
4 5 5 6
4 7 8 6
9 0 10 0
"""

BOTTOM_SQUARE = """5 4
1 0 0 3
1 4 5 3
6 7 7 8
6 2 2 8
9 2 2 10
"""


# -- helpers ------------------------------------------------------------------


@pytest.fixture
def board_file(tmp_path: Path):
    def write(text: str, name: str = "board.txt") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return write


# -- search -------------------------------------------------------------------


@pytest.mark.parametrize("algorithm", ["iddfs", "idastar"])
def test_search_prints_solution(board_file, algorithm: str) -> None:
    result = runner.invoke(app, ["search", "-i", str(board_file(ONE_AWAY)), "-a", algorithm])

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("Total run time = ")
    assert "An optimal solution has 1 moves:\n10L\n" in result.stdout


def test_search_defaults_to_iddfs_and_writes_output(board_file, tmp_path: Path) -> None:
    out = tmp_path / "out" / "solution.txt"
    result = runner.invoke(app, ["search", "-i", str(board_file(ONE_AWAY)), "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert out.read_text().endswith("An optimal solution has 1 moves:\n10L\n")


def test_search_unsolvable(board_file) -> None:
    result = runner.invoke(app, ["search", "-i", str(board_file("1 3\n2 0 1\n")), "-a", "idastar"])

    assert result.exit_code == 0
    assert result.stdout == "no solution\n"


def test_search_max_depth(board_file) -> None:
    tail = ONE_AWAY.replace("9 0 10 0", "0 9 0 10")
    result = runner.invoke(app, ["search", "-i", str(board_file(tail)), "--max-depth", "2"])

    assert result.exit_code == 0
    assert result.stdout == "no solution\n"


@pytest.mark.parametrize(
    "text",
    ["", "2 2\n1 0\n", "1 3\n1 0 1\n", "1 3\n1 0 3\n"],
    ids=["empty", "short", "malformed", "missing_id"],
)
def test_search_invalid_input_exits_1(board_file, text: str) -> None:
    result = runner.invoke(app, ["search", "-i", str(board_file(text))])
    assert result.exit_code == 1
    assert "Invalid input file" in result.output


def test_search_non_utf8_file_exits_1(tmp_path: Path) -> None:
    path = tmp_path / "binary.txt"
    path.write_bytes(b"1 2\n1 \xff\n")

    result = runner.invoke(app, ["search", "-i", str(path)])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Invalid input file" in result.output
    assert "UTF-8" in result.output


@pytest.mark.parametrize("command", ["search", "generate"])
def test_unwritable_output_exits_1(board_file, tmp_path: Path, command: str) -> None:
    target = tmp_path / "taken"
    target.mkdir()
    args = {
        "search": ["search", "-i", str(board_file(ONE_AWAY))],
        "generate": ["generate", "-s", "3,3", "-n", "4", "--seed", "1"],
    }[command]

    result = runner.invoke(app, [*args, "-o", str(target)])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Cannot write" in result.output


def test_search_missing_file_exits_1(tmp_path: Path) -> None:
    result = runner.invoke(app, ["search", "-i", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "Cannot read" in result.output


@pytest.mark.parametrize("algorithm", ["iddfs", "idastar"])
def test_search_timeout_exits_2(board_file, algorithm: str) -> None:
    result = runner.invoke(
        app,
        ["search", "-i", str(board_file(BOTTOM_SQUARE)), "-a", algorithm, "--timeout", "0.05"],
    )
    assert result.exit_code == 2
    assert "timed out" in result.output


def test_search_timeout_from_environment(board_file) -> None:
    result = runner.invoke(
        app,
        ["search", "-i", str(board_file(BOTTOM_SQUARE)), "-a", "idastar"],
        env={"SLIDING_PUZZLE_TIMEOUT": "0.05"},
    )
    assert result.exit_code == 2


def test_search_manual_mode(board_file) -> None:
    result = runner.invoke(
        app, ["search", "-i", str(board_file(ONE_AWAY)), "-a", "manual"], input="10L\n"
    )

    assert result.exit_code == 0, result.output
    assert "has 1 moves:\n10L\n" in result.stdout


def test_verbose_logging(board_file) -> None:
    result = runner.invoke(app, ["-v", "search", "-i", str(board_file(ONE_AWAY))])

    assert result.exit_code == 0, result.output
    assert "IDDFS found a 1-move solution" in result.output


# -- generate -----------------------------------------------------------------


def test_generate_is_seeded(tmp_path: Path) -> None:
    args = ["generate", "-s", "4,5", "-n", "10", "--seed", "7"]
    first = runner.invoke(app, args)
    second = runner.invoke(app, [*args, "-o", str(tmp_path / "gen.txt")])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert first.stdout == (tmp_path / "gen.txt").read_text()
    assert load_board(tmp_path / "gen.txt") == parse_board(first.stdout)

    board = parse_board(first.stdout)
    assert first.stdout.splitlines()[0] == "5 4"
    assert 1 <= len(board.blocks) <= 10


def test_generate_without_shuffle_is_solved() -> None:
    result = runner.invoke(app, ["generate", "-s", "3,3", "-n", "4", "--shuffle-round", "0"])

    assert result.exit_code == 0, result.output
    assert parse_board(result.stdout).is_goal()


@pytest.mark.parametrize("size", ["4", "a,b", "0,3", "200,2"])
def test_generate_rejects_bad_size(size: str) -> None:
    result = runner.invoke(app, ["generate", "-s", size, "-n", "3"])
    assert result.exit_code == 2


# -- show ---------------------------------------------------------------------


def test_show(board_file) -> None:
    result = runner.invoke(app, ["show", "-i", str(board_file(ONE_AWAY, "one_away.txt"))])

    assert result.exit_code == 0, result.output
    assert "one_away.txt" in result.stdout
    assert "Heuristic" in result.stdout
