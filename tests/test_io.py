from pathlib import Path

import pandas as pd
import pytest

from touch_latency.io import read_samples_tsv, samples_from_frame, samples_to_frame, write_samples_tsv
from touch_latency import Sample


def test_read_samples_sorts_by_time_and_drops_incomplete_rows(tmp_path: Path) -> None:
    df = pd.DataFrame(
        {
            "time_ms": [20.0, 0.0, 10.0, 30.0],
            "x_px": [3.0, 1.0, 2.0, None],
            "y_px": [30.0, 10.0, 20.0, 40.0],
            "pointer_id": [7, 7, 7, 7],
        }
    )
    path = tmp_path / "trace.tsv"
    df.to_csv(path, sep="\t", index=False)

    samples = read_samples_tsv(path)

    assert samples == [
        Sample(t=0.0, x=1.0, y=10.0),
        Sample(t=10.0, x=2.0, y=20.0),
        Sample(t=20.0, x=3.0, y=30.0),
    ]


def test_samples_from_frame_requires_columns():
    df = pd.DataFrame({"time_ms": [0.0], "x_px": [1.0]})

    with pytest.raises(ValueError, match="y_px"):
        samples_from_frame(df)


def test_samples_from_frame_coerces_strings():
    df = pd.DataFrame({"time_ms": ["0", "5"], "x_px": ["1.5", "oops"], "y_px": ["2", "3"]})
    assert samples_from_frame(df) == [Sample(t=0.0, x=1.5, y=2.0)]


def test_written_trace_is_readable(tmp_path: Path, one_revolution_trace) -> None:
    path = tmp_path / "trace.tsv"
    write_samples_tsv(one_revolution_trace, path)

    assert list(pd.read_csv(path, sep="\t").columns) == ["time_ms", "x_px", "y_px"]
    loaded = read_samples_tsv(path)
    assert len(loaded) == len(one_revolution_trace)
    for a, b in zip(loaded, one_revolution_trace):
        assert (a.t, a.x, a.y) == pytest.approx((b.t, b.x, b.y))


def test_samples_to_frame_empty():
    df = samples_to_frame([])
    assert df.empty
    assert list(df.columns) == ["time_ms", "x_px", "y_px"]
