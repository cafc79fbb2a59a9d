"""TSV trace files: one row per touch sample of the tracked contact."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from .domain import Sample

logger = logging.getLogger(__name__)

TIME_COLUMN = "time_ms"
X_COLUMN = "x_px"
Y_COLUMN = "y_px"
SAMPLE_COLUMNS = [TIME_COLUMN, X_COLUMN, Y_COLUMN]


def samples_from_frame(df: pd.DataFrame) -> List[Sample]:
    """Convert a DataFrame with time/x/y columns into ordered samples.

    Rows are sorted by time; rows missing any coordinate are dropped.
    """
    missing = set(SAMPLE_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(sorted(missing))}")

    slim = df[SAMPLE_COLUMNS].apply(pd.to_numeric, errors="coerce")
    dropped = int(slim.isna().any(axis=1).sum())
    if dropped:
        logger.info("Dropped %s row(s) with missing time or position", dropped)
    slim = slim.dropna().sort_values(TIME_COLUMN, kind="stable").reset_index(drop=True)

    return [
        Sample(t=float(t), x=float(x), y=float(y))
        for t, x, y in zip(slim[TIME_COLUMN], slim[X_COLUMN], slim[Y_COLUMN])
    ]


def samples_to_frame(samples: Iterable[Sample]) -> pd.DataFrame:
    return pd.DataFrame(
        [(s.t, s.x, s.y) for s in samples],
        columns=SAMPLE_COLUMNS,
    )


def read_samples_tsv(path: str | Path) -> List[Sample]:
    df = pd.read_csv(path, sep="\t")
    return samples_from_frame(df)


def write_samples_tsv(samples: Iterable[Sample], path: str | Path) -> None:
    samples_to_frame(samples).to_csv(path, sep="\t", index=False)


def write_tsv(df: pd.DataFrame, path: str | Path) -> None:
    df.to_csv(path, sep="\t", index=False)
