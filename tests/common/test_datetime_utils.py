from __future__ import annotations

from datetime import date

import pytest

from school_portal.common.datetime_utils import iter_days, parse_iso_date
from school_portal.core.exceptions import ValidationError


def test_iter_days_is_inclusive():
    assert list(iter_days(date(2024, 2, 28), date(2024, 3, 1))) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]


def test_iter_days_stops_at_date_max():
    assert list(iter_days(date.max, date.max)) == [date.max]


def test_iter_days_empty_when_inverted():
    assert list(iter_days(date(2024, 1, 2), date(2024, 1, 1))) == []


def test_parse_iso_date_rejects_other_formats():
    with pytest.raises(ValidationError):
        parse_iso_date("10/01/2024")
