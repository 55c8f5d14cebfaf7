from pathlib import Path

import pytest

from unblock import replay, runner

DATA = Path(__file__).parent / "data"


def test_runner_prints_solution(capsys):
    runner.main(["--file", str(DATA / "four_moves.txt"), "--quiet", "--stats"])
    captured = capsys.readouterr()

    assert "Searching for a solution..." in captured.out
    assert "Solved!" in captured.out
    assert "stats: visited=" in captured.out
    assert "Starting board:" in captured.out
    assert "Move 4/4:" in captured.out
    assert "Summary:" in captured.out
    assert captured.out.rstrip().endswith("Run free, prisoner, run! :-)")
    assert captured.err == ""


def test_runner_logs_progress_to_stderr(capsys):
    runner.main(["--file", str(DATA / "four_moves.txt")])
    captured = capsys.readouterr()

    assert "depth=1" in captured.err
    assert "Solved in 4 moves" in captured.err


def test_runner_step_mode_waits_for_enter(monkeypatch, capsys):
    prompts = []
    monkeypatch.setattr("builtins.input", lambda prompt="": prompts.append(prompt) or "")
    runner.main(["--file", str(DATA / "four_moves.txt"), "--quiet", "--step"])

    assert len(prompts) == 5
    assert "Run free" in capsys.readouterr().out


def test_runner_unsolvable_exit_code(capsys):
    with pytest.raises(SystemExit) as exc:
        runner.main(["--file", str(DATA / "walled.txt"), "--quiet"])

    assert exc.value.code == 2
    assert "No solution: the prisoner cannot escape." in capsys.readouterr().out


def test_runner_invalid_puzzle(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("ZZ....\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        runner.main(["--file", str(path), "--quiet"])
    assert exc.value.code == 1
    assert "Invalid puzzle" in capsys.readouterr().out


def test_runner_exit_off_axis(capsys):
    with pytest.raises(SystemExit) as exc:
        runner.main(["--file", str(DATA / "four_moves.txt"), "--quiet", "--exit", "up"])
    assert exc.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().out


def test_saved_record_replays_to_escape(tmp_path):
    path = tmp_path / "solution.txt"
    runner.main(["--file", str(DATA / "four_moves.txt"), "--quiet", "--save-record", str(path)])

    text = path.read_text(encoding="utf-8")
    assert text.startswith("# moves=4\n# exit=right\n")
    _, escaped = replay.replay_file(str(path))
    assert escaped


LEFT_EXIT = """\
......
.A...B
.A.ZZB
......
......
......
"""


def test_saved_left_exit_record_replays_with_its_exit(tmp_path, capsys):
    puzzle = tmp_path / "left.txt"
    puzzle.write_text(LEFT_EXIT, encoding="utf-8")
    path = tmp_path / "solution.txt"
    runner.main(["--file", str(puzzle), "--quiet", "--exit", "left", "--save-record", str(path)])

    text = path.read_text(encoding="utf-8")
    assert text.startswith("# moves=1\n# exit=left\n")
    assert text.endswith("1:A up\n")
    capsys.readouterr()

    replay.main(["--file", str(path)])
    out = capsys.readouterr().out
    assert "Escaped: yes" in out
    # The wall opens on the left of the prisoner's row.
    assert " .. .. .. ZZ ZZ BB |" in out.splitlines()

    replay.main(["--file", str(path), "--exit", "right"])
    assert "Escaped: no" in capsys.readouterr().out
