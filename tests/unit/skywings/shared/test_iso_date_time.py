from datetime import timedelta

import pytest

from skywings.shared.domain import IsoDateTime


class TestIsoDateTime:
    """IsoDateTime のテスト"""

    def test_from_string_accepts_utc_designator(self):
        value = IsoDateTime.from_string("2025-06-01T08:00:00Z")
        assert str(value) == "2025-06-01T08:00:00+00:00"

    def test_local_time_without_offset_is_kept_as_is(self):
        value = IsoDateTime.from_string("2025-06-01T08:00:00")
        assert str(value) == "2025-06-01T08:00:00"
        assert value.date().isoformat() == "2025-06-01"

    def test_invalid_string(self):
        with pytest.raises(ValueError, match="Invalid ISO 8601 datetime"):
            IsoDateTime.from_string("not-a-date")

    def test_ordering(self):
        earlier = IsoDateTime.from_string("2025-06-01T08:00:00")
        later = IsoDateTime.from_string("2025-06-01T09:00:00")
        assert earlier.is_before(later)
        assert not later.is_before(earlier)
        assert not earlier.is_before(earlier)

    def test_plus(self):
        value = IsoDateTime.from_string("2025-06-01T23:00:00")
        assert str(value.plus(timedelta(hours=2))) == "2025-06-02T01:00:00"

    def test_now_is_timezone_aware(self):
        assert IsoDateTime.now().value.tzinfo is not None
