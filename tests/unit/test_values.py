from __future__ import annotations

import math
from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from app.utils.values import (
    is_boolean,
    is_date,
    is_null,
    is_numeric,
    normalize_scalar,
    parse_leading_number,
    stringify,
    to_number,
)


@pytest.mark.parametrize("value, expected", [
    ("10", 10.0),
    ("-3.5", -3.5),
    (".5", 0.5),
    ("1e3", 1000.0),
    (7, 7.0),
    (2.5, 2.5),
    ("12abc", None),
    ("abc", None),
    ("", None),
    (True, None),
    (None, None),
    (float("nan"), None),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_is_numeric_rejects_nan_literal():
    assert not is_numeric("nan")
    assert not is_numeric("1_000")


def test_is_null():
    assert is_null(None)
    assert is_null(float("nan"))
    assert is_null(pd.NaT)
    assert not is_null("")
    assert not is_null(0)


def test_is_date():
    assert is_date("2024-01-01")
    assert is_date(datetime(2024, 1, 1))
    assert is_date(date(2024, 1, 1))
    assert not is_date("apple")
    assert not is_date("")
    assert not is_date(None)


def test_is_boolean():
    for value in ["yes", "NO", "True", "false", "0", "1", True, False, 1]:
        assert is_boolean(value)
    assert not is_boolean("maybe")


def test_stringify():
    assert stringify(5.0) == "5"
    assert stringify(5.5) == "5.5"
    assert stringify(True) == "true"
    assert stringify(None) == ""
    assert stringify("abc") == "abc"


def test_normalize_scalar_converts_pandas_types():
    assert normalize_scalar(np.int64(3)) == 3
    assert isinstance(normalize_scalar(np.int64(3)), int)
    assert normalize_scalar(np.float64(2.5)) == 2.5
    assert normalize_scalar(np.bool_(True)) is True
    assert normalize_scalar(np.float64("nan")) is None
    assert normalize_scalar(pd.NaT) is None
    assert normalize_scalar(pd.Timestamp("2024-03-01")) == "2024-03-01"
    assert normalize_scalar(pd.Timestamp("2024-03-01 10:30")) == "2024-03-01T10:30:00"
    assert normalize_scalar("text") == "text"
    assert math.isclose(normalize_scalar(1.25), 1.25)


@pytest.mark.parametrize("value, expected", [
    ("12 kg", 12.0),
    ("1,200", 1.0),
    ("-2.5e1x", -25.0),
    (".5%", 0.5),
    ("abc", 0.0),
    (None, 0.0),
    (True, 0.0),
    (7, 7.0),
])
def test_parse_leading_number(value, expected):
    assert parse_leading_number(value) == expected


@pytest.mark.parametrize("value", ["May", "now", "today", "1st", "22nd", "tomorrow 10:00"])
def test_is_date_rejects_words_and_ordinals(value):
    assert not is_date(value)
