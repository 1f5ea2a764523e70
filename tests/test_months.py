from datetime import datetime, timedelta, timezone

import pytest

from app.dashboard.months import recent_months


class TestRecentMonths:
    def test_six_months_crossing_year_boundary(self):
        now = datetime(2024, 3, 10, tzinfo=timezone.utc)
        assert recent_months(6, now=now) == [
            "2023-10",
            "2023-11",
            "2023-12",
            "2024-01",
            "2024-02",
            "2024-03",
        ]

    def test_single_month_is_current_month(self):
        now = datetime(2025, 12, 31, 23, 59, tzinfo=timezone.utc)
        assert recent_months(1, now=now) == ["2025-12"]

    def test_window_longer_than_a_year(self):
        labels = recent_months(14, now=datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert labels[0] == "2022-12"
        assert labels[-1] == "2024-01"
        assert len(labels) == len(set(labels)) == 14

    def test_labels_are_ascending(self):
        labels = recent_months(24, now=datetime(2024, 7, 4, tzinfo=timezone.utc))
        assert labels == sorted(labels)

    def test_aware_datetime_is_converted_to_utc(self):
        # 2024-03-01 01:00 at UTC+05:00 is still February in UTC.
        plus_five = timezone(timedelta(hours=5))
        now = datetime(2024, 3, 1, 1, 0, tzinfo=plus_five)
        assert recent_months(2, now=now) == ["2024-01", "2024-02"]

    def test_naive_datetime_is_taken_as_utc(self):
        assert recent_months(1, now=datetime(2024, 3, 1)) == ["2024-03"]

    def test_defaults_to_current_month(self):
        expected = datetime.now(timezone.utc).strftime("%Y-%m")
        assert recent_months(3)[-1] == expected

    @pytest.mark.parametrize("n", [0, -1])
    def test_rejects_empty_window(self, n):
        with pytest.raises(ValueError):
            recent_months(n)
