from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from school_portal.core.exceptions import DataCorruptionError
from school_portal.store import codec

from factories import make_student


def test_naive_timestamps_are_read_as_utc():
    raw = codec.encode_student(make_student())
    raw["temporary_access_expires"] = "2030-01-01T00:00:00"

    student = codec.decode_student(raw)

    assert student.temporary_access_expires == datetime(2030, 1, 1, tzinfo=timezone.utc)


def test_offset_timestamps_keep_their_offset():
    raw = codec.encode_student(make_student())
    raw["temporary_access_expires"] = "2030-01-01T02:00:00+02:00"

    expires = codec.decode_student(raw).temporary_access_expires

    assert expires.utcoffset() == timedelta(hours=2)
    assert expires == datetime(2030, 1, 1, tzinfo=timezone.utc)


def test_unparseable_timestamp_is_corruption():
    raw = codec.encode_student(make_student())
    raw["temporary_access_expires"] = "next tuesday"

    with pytest.raises(DataCorruptionError):
        codec.decode_collection([raw], codec.decode_student, key="students-list")
