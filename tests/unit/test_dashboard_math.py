"""Tests for the pure parts of the aggregation engine."""

from datetime import datetime
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.projecthub.models import ProjectStatus
from src.projecthub.services.dashboard_service import (
    MONTH_NAMES,
    DashboardService,
    StatusCounts,
    monthly_histogram,
    utilization_percent,
)

pytestmark = pytest.mark.unit


class TestUtilizationPercent:
    @pytest.mark.parametrize(
        ("total", "utilized", "expected"),
        [
            ("6000", "6000", 100),
            ("200", "150", 75),
            ("0", "0", 0),
            ("3", "1", 33),
            ("3", "2", 67),
            ("200", "1", 1),  # 0.5 rounds half up
            ("1000", "5", 1),
            ("1000", "4", 0),
        ],
    )
    def test_rounding(self, total: str, utilized: str, expected: int):
        assert utilization_percent(Decimal(total), Decimal(utilized)) == expected


@given(
    total=st.decimals(min_value=Decimal("0.01"), max_value=Decimal("999999999"), places=2),
    share=st.fractions(min_value=0, max_value=1),
)
def test_utilization_stays_within_bounds(total: Decimal, share):
    utilized = (total * Decimal(share.numerator) / Decimal(share.denominator)).quantize(
        Decimal("0.01")
    )
    utilized = min(utilized, total)

    assert 0 <= utilization_percent(total, utilized) <= 100


class TestMonthlyHistogram:
    def test_current_month_is_last(self):
        histogram = monthly_histogram([], datetime(2024, 3, 15))

        assert [name for name, _ in histogram] == [
            "Apr",
            "May",
            "Jun",
            "Jul",
            "Aug",
            "Sep",
            "Oct",
            "Nov",
            "Dec",
            "Jan",
            "Feb",
            "Mar",
        ]

    def test_december_keeps_calendar_order(self):
        histogram = monthly_histogram([], datetime(2024, 12, 1))

        assert tuple(name for name, _ in histogram) == MONTH_NAMES

    def test_counts_by_month_name(self):
        created = [
            datetime(2024, 3, 1),
            datetime(2024, 3, 31, 23, 59),
            datetime(2023, 11, 2),
        ]

        histogram = dict(monthly_histogram(created, datetime(2024, 3, 31)))

        assert histogram["Mar"] == 2
        assert histogram["Nov"] == 1
        assert sum(histogram.values()) == 3

    def test_same_month_of_two_years_shares_a_bucket(self):
        created = [datetime(2023, 3, 20), datetime(2024, 3, 1)]

        histogram = dict(monthly_histogram(created, datetime(2024, 3, 15)))

        assert histogram["Mar"] == 2


class TestStatusDistribution:
    def test_fixed_order_labels_and_colours(self):
        counts = StatusCounts(active=4, on_hold=1, completed=2)

        points = DashboardService.status_distribution(counts)

        assert [(p.name, p.value, p.color) for p in points] == [
            ("Active", 4, "#22c55e"),
            ("On Hold", 1, "#eab308"),
            ("Completed", 2, "#6366f1"),
        ]

    def test_status_counts(self):
        counts = StatusCounts(active=4, on_hold=1, completed=2)

        assert counts.total == 7
        assert counts.of(ProjectStatus.ON_HOLD) == 1


class TestWeeklyActivity:
    def test_flagged_synthetic_with_zero_counts(self):
        activity = DashboardService.weekly_activity()

        assert activity.synthetic is True
        assert [d.day for d in activity.days] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert all(d.tasks == 0 for d in activity.days)

    def test_deterministic(self):
        assert DashboardService.weekly_activity() == DashboardService.weekly_activity()
