from __future__ import annotations

from pathlib import Path
from typing import Any

import polars as pl
import yaml

ANSWER_SEPARATOR = " | "


def read_question_file(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        content = yaml.safe_load(f)
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Question bank {path} must contain a mapping with 'practice' and 'main' lists.")
    return content


def write_sequence(df: pl.DataFrame, out_path: Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(df.schema.get("possible_answers"), pl.List):
        clashing = (
            df.select(pl.col("possible_answers").explode())
            .filter(pl.col("possible_answers").str.contains(ANSWER_SEPARATOR, literal=True))
            .get_column("possible_answers")
            .to_list()
        )
        if clashing:
            raise ValueError(
                f"Answers must not contain the separator {ANSWER_SEPARATOR!r}, "
                f"otherwise they cannot be read back: {clashing}"
            )
        df = df.with_columns(pl.col("possible_answers").list.join(ANSWER_SEPARATOR))
    df.write_csv(out_path)
    return out_path


def load_sequence(path: Path) -> pl.DataFrame:
    df = pl.read_csv(path, infer_schema_length=0)
    df = df.with_columns(
        pl.exclude("trial").fill_null(""),
        pl.col("trial").cast(pl.Int64),
    )
    return df.with_columns(
        pl.col("possible_answers")
        .str.split(ANSWER_SEPARATOR)
        .list.eval(pl.element().filter(pl.element() != ""))
    )
