"""Train the progression unit and query it interactively.

Run from the project root:

    python -m train.train_progression            # prompt loop
    python -m train.train_progression --gui      # desktop window

By default the unit is trained on the built-in progression dataset. A table
can be used instead:

    python -m train.train_progression \
        --data data/progressions.csv \
        --input-columns first,second \
        --target-column next

Each prompt reads one whitespace-separated number per input and prints the predicted
next element. Malformed lines are reported and the loop keeps going; EOF or
Ctrl-C ends it.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Callable, List, Sequence, TextIO
import numpy as np
from tqdm.auto import tqdm
from data.progression import (
    load_examples,
    progression_examples,
    split_examples,
)
from .config import TrainingConfig, build_unit
from .linear_unit import (
    BiasUpdate,
    ErrorEvent,
    FinishedEvent,
    LinearUnit,
    TrainingEvent,
    log_event,
)


logger = logging.getLogger(__name__)

PROMPT = "enter two numbers of a progression: "

COLOR_RESET = "\033[0m"
COLOR_GREEN = "\033[92m"
COLOR_YELLOW = "\033[93m"
COLOR_CYAN = "\033[96m"


class InputParseError(ValueError):
    """A prompt line did not hold one number per unit input."""


def prompt_for(dimension: int) -> str:
    if dimension == 2:
        return PROMPT

    return f"enter {dimension} numbers: "


def parse_numbers(line: str, count: int = 2) -> List[float]:
    parts = line.split()

    if len(parts) != count:
        raise InputParseError(
            f"expected {count} numbers, got {len(parts)} value(s)"
        )

    try:
        return [float(p) for p in parts]

    except ValueError as exc:
        raise InputParseError(f"not a number: {exc}") from exc


def format_number(value: float) -> str:
    """Shortest positional rendering; integral values print without a fraction."""

    if np.isnan(value):
        return "NaN"

    if np.isinf(value):
        return "inf" if value > 0 else "-inf"

    return np.format_float_positional(value, trim="-")


class ProgressSink:
    """Advance a tqdm bar once per completed epoch and forward every event."""

    def __init__(
        self,
        total_epochs: int,
        num_examples: int,
        forward: Callable[[TrainingEvent], None] = log_event,
    ) -> None:
        self.num_examples = num_examples
        self.forward = forward
        self.progress = tqdm(
            total=total_epochs,
            desc=f"{COLOR_CYAN}Training{COLOR_RESET}",
            unit="epoch",
        )

    def __call__(self, event: TrainingEvent) -> None:
        self.forward(event)

        if isinstance(event, ErrorEvent):
            if event.index == self.num_examples - 1:
                self.progress.update(1)
                self.progress.set_postfix(error=f"{event.error:+.3g}")

        elif isinstance(event, FinishedEvent):
            self.progress.close()


def prompt_loop(
    unit: LinearUnit,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Answer prompts until EOF; return how many predictions were printed."""

    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    prompt = prompt_for(unit.dimension)
    answered = 0

    while True:
        stdout.write(prompt)
        stdout.flush()

        line = stdin.readline()

        if not line:
            stdout.write("\n")

            break

        try:
            numbers = parse_numbers(line, unit.dimension)

        except InputParseError as exc:
            stdout.write(f"{COLOR_YELLOW}[WARN]{COLOR_RESET} {exc}\n\n")

            continue

        prediction = format_number(unit.predict(numbers))
        stdout.write(f"prediction for the next element is {prediction}\n\n")
        answered += 1

    return answered


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train a linear unit to continue numeric progressions and query it."
    )

    parser.add_argument(
        "--iterations",
        type=int,
        default=TrainingConfig().max_iterations,
        help="Maximum number of passes over the examples.",
    )

    parser.add_argument(
        "--learning-rate",
        type=float,
        default=TrainingConfig().learning_rate,
        help="Step size of the error-correction update.",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the weight initializer (random if omitted).",
    )

    parser.add_argument(
        "--bias-update",
        type=str,
        choices=[b.value for b in BiasUpdate],
        default=BiasUpdate.PER_FEATURE.value,
        help="Add the bias correction once per feature or once per example.",
    )

    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Optional CSV/TSV/JSON/JSONL/Parquet file with training rows.",
    )

    parser.add_argument(
        "--input-columns",
        type=str,
        default=None,
        help="Comma-separated input columns of --data, e.g. first,second.",
    )

    parser.add_argument(
        "--target-column",
        type=str,
        default=None,
        help="Target column of --data.",
    )

    parser.add_argument(
        "--gui",
        action="store_true",
        help="Open the desktop window instead of the prompt loop.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every per-example error.",
    )

    return parser


def train_unit(
    config: TrainingConfig,
    examples: Sequence[Sequence[float]],
    targets: Sequence[float],
    show_progress: bool = True,
) -> LinearUnit:
    sink = (
        ProgressSink(config.max_iterations, len(examples))
        if show_progress
        else log_event
    )

    unit = build_unit(config, len(examples[0]), sink=sink)
    unit.fit(examples, targets, config.max_iterations)

    return unit


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = TrainingConfig(
            learning_rate=args.learning_rate,
            max_iterations=args.iterations,
            seed=args.seed,
            bias_update=BiasUpdate(args.bias_update),
        )

    except ValueError as exc:
        raise SystemExit(f"Invalid training options: {exc}") from exc

    if args.data:
        if not args.input_columns or not args.target_column:
            raise SystemExit("--data requires --input-columns and --target-column.")

        input_columns = [c.strip() for c in args.input_columns.split(",") if c.strip()]
        examples = load_examples(args.data, input_columns, args.target_column.strip())
        source = args.data

    else:
        examples = progression_examples()
        source = "built-in progression dataset"

    if not examples:
        raise SystemExit("No training examples loaded.")

    inputs, targets = split_examples(examples)
    logger.info("Training on %d examples with %s", len(examples), config)

    print(f"{COLOR_GREEN}Loaded {len(examples)} examples from {source}.{COLOR_RESET}")

    unit = train_unit(config, inputs, targets, show_progress=not args.verbose)

    print(
        f"{COLOR_GREEN}Done.{COLOR_RESET} weights={unit.weights}, bias={unit.bias}"
    )

    if args.gui:
        if unit.dimension != 2:
            raise SystemExit("The window needs a unit trained on two input columns.")

        from app.window import run_window

        run_window(unit)

        return

    try:
        prompt_loop(unit)

    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
