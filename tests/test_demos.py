import subprocess
import sys
from pathlib import Path

import pytest

DEMO_DIR = Path(__file__).parent.parent / "demo"


def run_demo(script: str, *args: str) -> subprocess.CompletedProcess:
    script_path = DEMO_DIR / script
    return subprocess.run(
        [sys.executable, str(script_path), *args],
        capture_output=True,
        text=True,
        timeout=30,
        cwd=script_path.parent.parent,
    )


@pytest.mark.smoke
def test_demo__should_complete_successfully__when_parsing_default_game():
    result = run_demo("parse_pgn.py")

    assert result.returncode == 0, (
        f"PGN demo failed with exit code {result.returncode}.\n"
        f"STDERR:\n{result.stderr}"
    )

    assert "Robert James Fischer" in result.stdout
    assert "Rc2#" in result.stdout
    assert "Result: 0-1" in result.stdout


@pytest.mark.smoke
def test_demo__should_complete_successfully__when_parsing_given_game():
    result = run_demo("parse_pgn.py", str(DEMO_DIR / "games" / "morphy_isouard_1858.pgn"))

    assert result.returncode == 0, f"STDERR:\n{result.stderr}"
    assert "Result: 1-0" in result.stdout


@pytest.mark.smoke
def test_demo__should_fail__when_game_has_no_result(tmp_path):
    broken = tmp_path / "broken.pgn"
    broken.write_text("1.e4 e5 2.Nf3\n")

    result = run_demo("parse_pgn.py", str(broken))

    assert result.returncode == 1
    assert "Unexpected end of input" in result.stderr


@pytest.mark.smoke
def test_demo__should_fail__when_game_file_is_missing(tmp_path):
    result = run_demo("parse_pgn.py", str(tmp_path / "missing.pgn"))

    assert result.returncode == 1
    assert "Traceback" not in result.stderr
    assert "missing.pgn" in result.stderr


@pytest.mark.smoke
def test_demo__should_complete_successfully__when_drawing_starting_position():
    result = run_demo("parse_fen.py")

    assert result.returncode == 0, f"STDERR:\n{result.stderr}"
    assert "White to move" in result.stdout
    assert "♔" in result.stdout


@pytest.mark.smoke
def test_demo__should_fail__when_rank_is_too_short():
    result = run_demo("parse_fen.py", "pppppppp/8/8/8/8/8/8/7 w - - 0 1")

    assert result.returncode == 1
    assert "Invalid rank" in result.stderr
