from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from conftest import make_chg_text
from vaspchg.codecs.vasp_chg import parse_chg_text
from vaspchg.core.summary import SUMMARY_COLUMNS, channel_labels, channel_summary


def test_summary_columns_and_labels() -> None:
    text, _ = make_chg_text(shape=(2, 2, 2), nchannels=4, augmentation=True)
    df = channel_summary(parse_chg_text(text))

    assert list(df.columns) == SUMMARY_COLUMNS
    assert list(df["label"]) == ["total", "mx", "my", "mz"]
    assert list(df["nx"]) == [2, 2, 2, 2]
    assert df["has_augmentation"].all()


def test_integral_is_mean_of_file_values() -> None:
    text, channels = make_chg_text(shape=(2, 3, 4), nchannels=2)
    df = channel_summary(parse_chg_text(text))

    expected = pd.Series([np.mean(channels[0]), np.mean(channels[1])], name="integral")
    pd.testing.assert_series_equal(df["integral"], expected, rtol=1e-10)
    assert df.loc[1, "label"] == "magnetization"
    assert df.loc[1, "max"] == pytest.approx(max(channels[1]))
    assert not df["has_augmentation"].any()


def test_channel_labels() -> None:
    assert channel_labels(1) == ["total"]
    assert channel_labels(3) == ["total", "diff1", "diff2"]
