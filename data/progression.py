"""Progression datasets for the linear unit.

The built-in dataset encodes "continue the progression": given two consecutive
terms `a, b` of an arithmetic progression, the target is the next term
`2 * b - a`.

Tables can also be loaded from CSV/TSV/JSON/JSONL/Parquet with pandas, picking
the input columns and the target column by name.
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple
import pandas as pd
from pydantic import BaseModel


PROGRESSION_INPUTS: List[List[float]] = [
    [1.0, 2.0],
    [4.0, 5.0],
    [9.0, 10.0],
    [1.0, 4.0],
    [0.5, 1.0],
    [2.0, 6.0],
    [1.0, 7.0],
]

PROGRESSION_TARGETS: List[float] = [3.0, 6.0, 11.0, 7.0, 1.5, 10.0, 13.0]


class Example(BaseModel):
    """One labeled training pair."""

    inputs: List[float]
    target: float


def progression_examples() -> List[Example]:
    return [
        Example(inputs=list(inputs), target=target)
        for inputs, target in zip(PROGRESSION_INPUTS, PROGRESSION_TARGETS)
    ]


def split_examples(
    examples: Sequence[Example],
) -> Tuple[List[List[float]], List[float]]:
    """Return inputs and targets as two parallel lists."""

    return [list(ex.inputs) for ex in examples], [ex.target for ex in examples]


def load_table(path_str: str, columns: Iterable[str]) -> pd.DataFrame:
    """Load a tabular dataset with pandas based on file extension."""

    suffix = Path(path_str).suffix.lower()
    usecols = list(columns) if columns else None

    if suffix in {".csv", ".tsv"}:
        sep = "," if suffix == ".csv" else "\t"

        return pd.read_csv(path_str, usecols=usecols, sep=sep)

    if suffix in {".json", ".jsonl"}:
        lines = suffix == ".jsonl"

        return pd.read_json(path_str, lines=lines)

    if suffix in {".parquet"}:
        return pd.read_parquet(path_str, columns=usecols)

    raise SystemExit(
        f"Unsupported file extension '{suffix}'. Use CSV, TSV, JSON, JSONL, or Parquet."
    )


def load_examples(
    path_str: str, input_columns: Sequence[str], target_column: str
) -> List[Example]:
    """Read examples from a table; rows with a missing or non-numeric value are skipped."""

    if not input_columns:
        raise SystemExit("No input columns specified.")

    if not Path(path_str).is_file():
        raise SystemExit(f"Data file not found: {path_str}")

    columns = [*input_columns, target_column]

    try:
        df = load_table(path_str, columns)

    except ValueError as exc:
        raise SystemExit(f"Could not read {path_str}: {exc}") from exc

    missing = [c for c in columns if c not in df.columns]

    if missing:
        raise SystemExit(f"Missing columns in {path_str}: {missing}")

    df = df[columns].apply(pd.to_numeric, errors="coerce").dropna()

    return [
        Example(
            inputs=[float(row[c]) for c in input_columns],
            target=float(row[target_column]),
        )
        for _, row in df.iterrows()
    ]
