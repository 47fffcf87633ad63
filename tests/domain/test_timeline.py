"""Tests for runway.domain.timeline pure functions."""

from runway.dates import add_months
from runway.domain.expenses import Expense
from runway.domain.models import Amount, ExpenseId, Month
from runway.domain.timeline import build_timeline, timeline_bounds


def make_expense(start: str, end: str, amount: float = 100.0, expense_id: int = 1) -> Expense:
    return Expense(
        id=ExpenseId(expense_id),
        title=f"Expense {expense_id}",
        amount=Amount(amount),
        start_date=Month(start),
        end_date=Month(end),
    )


class TestTimelineBounds:
    """Tests for timeline_bounds."""

    def test_no_expenses(self) -> None:
        """Should return None for an empty expense set."""
        assert timeline_bounds([]) is None

    def test_pads_six_months_each_side(self) -> None:
        """Should pad the earliest start and latest end by six months."""
        bounds = timeline_bounds([make_expense("2024-01", "2024-12")])
        assert bounds == ("2023-07", "2025-06")

    def test_uses_min_start_and_max_end_across_expenses(self) -> None:
        """Should span every expense, not just the first."""
        expenses = [
            make_expense("2024-05", "2024-06", expense_id=1),
            make_expense("2023-11", "2024-02", expense_id=2),
            make_expense("2024-03", "2025-09", expense_id=3),
        ]
        assert timeline_bounds(expenses) == ("2023-05", "2026-03")

    def test_padding_clamped_at_calendar_edges(self) -> None:
        """Should clamp the padded bounds to 0001-01 and 9999-12."""
        assert timeline_bounds([make_expense("0001-03", "9999-10")]) == ("0001-01", "9999-12")

    def test_custom_padding(self) -> None:
        """Should honour a different padding."""
        assert timeline_bounds([make_expense("2024-01", "2024-01")], padding=0) == ("2024-01", "2024-01")


class TestBuildTimeline:
    """Tests for build_timeline."""

    def test_empty_when_no_expenses(self) -> None:
        """Should return an empty list for no expenses."""
        assert build_timeline([]) == []

    def test_rent_example(self) -> None:
        """Should span 2023-07 to 2025-06 for a 2024 expense."""
        months = build_timeline([make_expense("2024-01", "2024-12")])

        assert months[0] == "2023-07"
        assert months[-1] == "2025-06"
        assert len(months) == 24

    def test_strictly_increasing_by_one_month(self) -> None:
        """Should step exactly one calendar month at a time."""
        expenses = [
            make_expense("2022-10", "2023-03", expense_id=1),
            make_expense("2023-12", "2024-02", expense_id=2),
        ]
        months = build_timeline(expenses)

        for previous, current in zip(months, months[1:]):
            assert add_months(previous, 1) == current
        assert months[0] == add_months(Month("2022-10"), -6)
        assert months[-1] == add_months(Month("2024-02"), 6)

    def test_zero_padded_format(self) -> None:
        """Should format every month as YYYY-MM."""
        months = build_timeline([make_expense("2024-03", "2024-04")])

        assert all(len(month) == 7 and month[4] == "-" for month in months)
        assert "2023-09" in months

    def test_inverted_expense_still_sets_bounds(self) -> None:
        """Should use raw start and end values even when an expense is inverted."""
        months = build_timeline([make_expense("2024-12", "2024-01")])

        assert months[0] == "2024-06"
        assert months[-1] == "2024-07"

    def test_open_ended_expense_stops_at_last_month(self) -> None:
        """Should keep every month of a far-future end date and stop at 9999-12."""
        months = build_timeline([make_expense("9998-01", "9999-12")])

        assert months[0] == "9997-07"
        assert months[-1] == "9999-12"
        assert len(months) == 30

    def test_far_future_end_keeps_early_start(self) -> None:
        """Should not lose the timeline when the end date is as late as possible."""
        months = build_timeline([make_expense("2024-01", "9999-12")])

        assert months[0] == "2023-07"
        assert months[-1] == "9999-12"
        assert months == sorted(months)

    def test_earliest_start_stops_at_first_month(self) -> None:
        """Should not pad before 0001-01."""
        months = build_timeline([make_expense("0001-03", "0001-04")])

        assert months[0] == "0001-01"
        assert months[-1] == "0001-10"
