"""Tests for cost aggregation."""

from datetime import date
from decimal import Decimal

import pytest

from events.aggregation import by_month, by_organizer, month_key, summarize
from events.costs import CostRecord, build_cost_records
from events.filters import EventFilters, filter_records
from events.types import CostType


@pytest.fixture()
def records(make_event) -> list[CostRecord]:  # noqa: ANN001
    """Return three events: two by Acme, one without organizer."""
    return build_cost_records(
        [
            make_event(
                title="Summit",
                organizer="Acme",
                start_date=date(2025, 3, 4),
                cost_type=CostType.PARTICIPANT,
                cost_value=Decimal(100),
                colleagues=["Alice", "Bob"],
            ),
            make_event(
                title="Expo",
                organizer="Acme",
                start_date=date(2025, 3, 20),
                cost_type=CostType.BOOTH,
                cost_value=Decimal(500),
                colleagues=["Alice"],
            ),
            make_event(
                title="Gala",
                start_date=date(2025, 1, 15),
                cost_type=CostType.SPONSORING,
                cost_value=Decimal(200),
            ),
        ],
    )


class TestByOrganizer:
    """Cost per organizer."""

    def test_excludes_missing_organizer(self, records: list[CostRecord]) -> None:
        """Events without an organizer are left out."""
        rows = by_organizer(records)
        assert [(row.organizer, row.total_cost, row.event_count) for row in rows] == [
            ("Acme", Decimal(700), 2),
        ]
        assert rows[0].share == Decimal(100)

    def test_sorted_by_total_then_name(self, make_event) -> None:  # noqa: ANN001
        """The most expensive organizer comes first, ties by name."""
        events = [
            make_event(organizer=organizer, cost_type=CostType.BOOTH, cost_value=Decimal(value))
            for organizer, value in [("Zeta", 100), ("Beta", 300), ("Alpha", 100)]
        ]
        rows = by_organizer(build_cost_records(events))
        assert [row.organizer for row in rows] == ["Beta", "Alpha", "Zeta"]
        assert [row.share for row in rows] == [Decimal(60), Decimal(20), Decimal(20)]

    def test_empty(self) -> None:
        """No records, no rows."""
        assert by_organizer([]) == []

    def test_zero_totals_have_zero_share(self, make_event) -> None:  # noqa: ANN001
        """A view without any cost does not divide by zero."""
        rows = by_organizer(build_cost_records([make_event(organizer="Acme")]))
        assert rows[0].share == Decimal(0)


class TestByMonth:
    """Cost per month."""

    def test_groups_by_month_in_order(self, records: list[CostRecord]) -> None:
        """Months are listed chronologically and include events without organizer."""
        rows = by_month(records)
        assert [(row.year_month, row.total_cost, row.event_count) for row in rows] == [
            ("2025-01", Decimal(200), 1),
            ("2025-03", Decimal(700), 2),
        ]
        assert rows[0].representative_date == date(2025, 1, 1)

    def test_skips_undated(self, make_event) -> None:  # noqa: ANN001
        """Events without a start date are left out."""
        rows = by_month(
            build_cost_records([make_event(cost_type=CostType.BOOTH, cost_value=Decimal(100))]),
        )
        assert rows == []

    def test_month_key(self) -> None:
        """Keys are zero-padded year and month."""
        assert month_key(date(2025, 7, 3)) == "2025-07"


class TestSummarize:
    """Key figures."""

    def test_figures(self, records: list[CostRecord]) -> None:
        """Totals and averages over all records."""
        summary = summarize(records)
        assert summary.total_events == 3
        assert summary.total_participants == 3
        assert summary.total_cost == Decimal(900)
        assert summary.avg_cost_per_event == Decimal(300)
        assert summary.avg_participants_per_event == Decimal(1)
        assert summary.cost_per_participant == Decimal(300)
        assert summary.cost_by_type == {
            CostType.PARTICIPANT: Decimal(200),
            CostType.BOOTH: Decimal(500),
            CostType.SPONSORING: Decimal(200),
        }

    def test_empty(self) -> None:
        """Empty input yields zeros everywhere."""
        summary = summarize([])
        assert summary.total_events == 0
        assert summary.total_cost == Decimal(0)
        assert summary.avg_cost_per_event == Decimal(0)
        assert summary.cost_per_participant == Decimal(0)


def test_filtered_views_agree(records: list[CostRecord]) -> None:
    """Both views and the summary are computed over the same filtered records."""
    filtered = filter_records(records, EventFilters(years=frozenset({2025})))
    organizer_total = sum((row.total_cost for row in by_organizer(filtered)), Decimal(0))
    month_total = sum((row.total_cost for row in by_month(filtered)), Decimal(0))
    assert organizer_total == Decimal(700)
    assert month_total == summarize(filtered).total_cost == Decimal(900)


def test_summit_expo_gala(make_event) -> None:  # noqa: ANN001
    """Events without organizer count towards the total but not towards organizer sums."""
    records = build_cost_records(
        [
            make_event(
                title="Summit",
                organizer="Acme",
                cost_type=CostType.PARTICIPANT,
                cost_value=Decimal(100),
                colleagues=["A", "B"],
            ),
            make_event(
                title="Expo",
                organizer="Acme",
                cost_type=CostType.BOOTH,
                cost_value=Decimal(500),
            ),
            make_event(
                title="Gala",
                cost_type=CostType.PARTICIPANT,
                cost_value=Decimal(200),
                colleagues=["A"],
            ),
        ],
    )
    filtered = filter_records(records, EventFilters())

    assert [(row.organizer, row.total_cost) for row in by_organizer(filtered)] == [
        ("Acme", Decimal(700)),
    ]
    assert summarize(filtered).total_cost == Decimal(900)
