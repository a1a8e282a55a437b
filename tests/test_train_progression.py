import io

import pytest

from train import train_progression
from train.linear_unit import ErrorEvent, FinishedEvent, LinearUnit
from train.train_progression import (
    InputParseError,
    ProgressSink,
    format_number,
    parse_numbers,
    prompt_loop,
)


def test_parse_numbers_accepts_two_values():
    assert parse_numbers("  3 5\n") == [3.0, 5.0]
    assert parse_numbers("1e1\t-2.5") == [10.0, -2.5]


@pytest.mark.parametrize("line", ["", "1", "1 2 3", "one two", "1 x"])
def test_parse_numbers_rejects_malformed_lines(line):
    with pytest.raises(InputParseError):
        parse_numbers(line)


def test_prompt_loop_reports_bad_lines_and_keeps_going():
    unit = LinearUnit([-1.0, 2.0], 0.0)
    stdin = io.StringIO("3 5\nfoo bar\n1 2 3\n0.5 1\n")
    stdout = io.StringIO()

    answered = prompt_loop(unit, stdin=stdin, stdout=stdout)

    out = stdout.getvalue()
    assert answered == 2
    assert out.count("enter two numbers of a progression: ") == 5
    assert "prediction for the next element is 7\n" in out
    assert "prediction for the next element is 1.5\n" in out
    assert out.count("[WARN]") == 2


def test_prompt_loop_uses_unit_dimension():
    unit = LinearUnit([1.0, 1.0, 1.0], 0.0)
    stdout = io.StringIO()

    answered = prompt_loop(unit, stdin=io.StringIO("1 2 3\n1 2\n"), stdout=stdout)

    assert answered == 1
    assert "enter 3 numbers: " in stdout.getvalue()
    assert "prediction for the next element is 6\n" in stdout.getvalue()


def test_progress_sink_counts_completed_epochs():
    forwarded = []
    sink = ProgressSink(total_epochs=3, num_examples=2, forward=forwarded.append)

    sink(ErrorEvent(epoch=0, index=0, error=1.0))
    sink(ErrorEvent(epoch=0, index=1, error=0.5))
    sink(ErrorEvent(epoch=1, index=0, error=0.25))

    assert sink.progress.n == 1
    sink(FinishedEvent(weights=[0.0], bias=0.0, epochs=2, converged=False))
    assert len(forwarded) == 4


def test_main_trains_and_answers_prompts(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("8 16\n"))

    train_progression.main(["--seed", "0"])

    out = capsys.readouterr().out
    assert "Loaded 7 examples from built-in progression dataset." in out
    line = next(l for l in out.splitlines() if "prediction for the next element" in l)
    assert float(line.rsplit(" ", 1)[1]) == pytest.approx(24.0, abs=1e-2)


def test_main_trains_on_a_table(tmp_path, monkeypatch, capsys):
    path = tmp_path / "rows.csv"
    path.write_text("a,b,t\n1,2,3\n4,5,6\n1,4,7\n2,6,10\n")
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    train_progression.main(
        [
            "--data",
            str(path),
            "--input-columns",
            "a,b",
            "--target-column",
            "t",
            "--iterations",
            "10",
            "--bias-update",
            "per-example",
        ]
    )

    assert "Loaded 4 examples from" in capsys.readouterr().out


def test_main_requires_columns_with_data(tmp_path):
    with pytest.raises(SystemExit, match="requires --input-columns"):
        train_progression.main(["--data", str(tmp_path / "rows.csv")])


def test_main_rejects_invalid_learning_rate():
    with pytest.raises(SystemExit, match="Invalid training options"):
        train_progression.main(["--learning-rate", "0"])


@pytest.mark.parametrize(
    "value, expected",
    [
        (7.0, "7"),
        (1.5, "1.5"),
        (-0.0, "-0"),
        (24.000000000000004, "24.000000000000004"),
        (1e20, "100000000000000000000"),
        (float("nan"), "NaN"),
        (float("-inf"), "-inf"),
    ],
)
def test_format_number_drops_integral_fraction(value, expected):
    assert format_number(value) == expected
