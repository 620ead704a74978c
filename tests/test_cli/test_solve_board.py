"""Pytest suite for the command line solver."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from freeflow_src.flowfree.board import validate
from freeflow_src.solve_board import SAMPLE_GRID, format_board, main
from freeflow_src.util.save_util import import_ndarray

SAMPLE_TEXT = "0000\n0120\n0000\n2001"


def test_sample_run_prints_solutions(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    blocks = capsys.readouterr().out.strip("\n").split("\n\n")
    assert blocks[0] == SAMPLE_TEXT
    assert len(blocks) > 1
    assert "1111\n1121\n2221\n2221" in blocks[1:]
    assert all("0" not in block for block in blocks[1:])


def test_limit_and_order(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--order", "dfs", "--limit", "1"]) == 0
    blocks = capsys.readouterr().out.strip("\n").split("\n\n")
    assert len(blocks) == 2


def test_invalid_puzzle_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    puzzle = tmp_path / "bad.txt"
    puzzle.write_text("1000\n0000\n")
    assert main([str(puzzle)]) == 1
    assert capsys.readouterr().out.strip() == "invalid"


def test_missing_puzzle_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "nope.txt")]) == 1
    assert "Cannot read" in capsys.readouterr().out


def test_text_puzzle_with_dots(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    puzzle = tmp_path / "corridors.txt"
    puzzle.write_text("1.1\n2.2\n")
    assert main([str(puzzle), "--unique"]) == 0
    assert capsys.readouterr().out == "101\n202\n\n111\n222\n"


def test_numpy_puzzle_and_save(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    puzzle = tmp_path / "sample.npy"
    np.save(puzzle, np.array(SAMPLE_GRID, dtype=np.int8))
    out_path = tmp_path / "solution"
    assert main([str(puzzle), "--limit", "1", "--save", str(out_path)]) == 0

    saved = import_ndarray(out_path.with_suffix(".npy"))
    assert not (saved == 0).any()
    printed = capsys.readouterr().out.strip("\n").split("\n\n")[1]
    assert "\n".join("".join(str(v) for v in row) for row in saved.tolist()) == printed


def test_budget_exhausted(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--max-expansions", "0"]) == 2
    assert "Gave up" in capsys.readouterr().out


def test_unsolvable_reports_no_solution(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    puzzle = tmp_path / "square.txt"
    puzzle.write_text("10\n01\n")
    assert main([str(puzzle)]) == 0
    assert capsys.readouterr().out.rstrip().endswith("no solution")


def test_format_board_falls_back_for_wide_colors() -> None:
    board = validate([[10, 0, 10]])
    assert format_board(board) == "10  0 10"


@pytest.mark.parametrize(
    "content",
    [
        "1²\n01\n".encode("utf-8"),  # superscript two is a unicode digit but not a color
        b"1\xff1\n",  # not utf-8
    ],
    ids=["superscript-digit", "undecodable-bytes"],
)
def test_unreadable_text_is_invalid(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], content: bytes
) -> None:
    puzzle = tmp_path / "odd.txt"
    puzzle.write_bytes(content)
    assert main([str(puzzle)]) == 1
    assert capsys.readouterr().out.strip() == "invalid"


@pytest.mark.parametrize("flag", ["--max-expansions", "--limit"])
def test_negative_counts_are_rejected(flag: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([flag, "-1"])
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "must not be negative" in err
    assert "Traceback" not in err
