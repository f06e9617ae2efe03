import math
import re

import pytest

from services.transcript_service import format_timestamp, utc_now_iso
from datetime import datetime


@pytest.mark.parametrize("seconds, expected", [
    (0, "00:00:00"),
    (59, "00:00:59"),
    (60, "00:01:00"),
    (3661, "01:01:01"),
    (3599.999, "00:59:59"),
    (59.999, "00:00:59"),
    (12.5, "00:00:12"),
    (360000, "100:00:00"),
])
def test_format_timestamp(seconds, expected):
    assert format_timestamp(seconds) == expected


@pytest.mark.parametrize("seconds", [0.4, 61.7, 3725.25, 86399.99, 123456.789])
def test_format_timestamp_reparses_to_whole_seconds(seconds):
    formatted = format_timestamp(seconds)

    assert re.fullmatch(r"\d{2,}:\d{2}:\d{2}", formatted)
    hours, minutes, secs = (int(part) for part in formatted.split(":"))
    assert hours * 3600 + minutes * 60 + secs == math.floor(seconds)


@pytest.mark.parametrize("seconds", [-1, -0.5, math.nan, math.inf])
def test_format_timestamp_rejects_negative_and_non_finite(seconds):
    with pytest.raises(ValueError):
        format_timestamp(seconds)


def test_utc_now_iso_is_parseable():
    value = utc_now_iso()

    assert value.endswith("Z")
    assert datetime.fromisoformat(value.replace("Z", "+00:00")).tzinfo is not None
