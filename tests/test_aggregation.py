"""
Tests for portfolio aggregation: heatmap, progress ring, format velocity,
reading stats.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from readpace.analytics.aggregation import (
    format_distribution,
    format_velocity,
    heatmap,
    heatmap_has_enough_data,
    intensity_for,
    portfolio_deltas,
    reading_stats,
    total_minutes_per_day,
    total_progress_ring,
    total_reading_time_per_day,
)
from readpace.models import BookFormat, DailyDelta, ItemStatus
from tests.fixtures import make_item

TODAY = date(2026, 2, 20)  # Friday


class TestIntensity:
    @pytest.mark.parametrize(
        "count,level",
        [(0, 0), (1, 1), (2, 2), (3, 2), (4, 3), (5, 3), (6, 4), (11, 4)],
    )
    def test_levels(self, count, level):
        assert intensity_for(count) == level


class TestHeatmap:
    def test_range_starts_on_sunday_eleven_weeks_back(self, config):
        days = heatmap([], TODAY, config)
        # 11 weeks before 2026-02-20 is 2025-12-05 (Friday); its Sunday is 2025-11-30
        assert days[0].date == date(2025, 11, 30)
        assert days[0].day_of_week == 0
        assert days[-1].date == TODAY
        assert days[-1].day_of_week == 5
        assert len(days) == (TODAY - date(2025, 11, 30)).days + 1

    def test_sessions_count_distinct_items(self, config):
        deltas = [
            DailyDelta(TODAY, "a", 10),
            DailyDelta(TODAY, "b", 5),
            DailyDelta(TODAY, "c", 1),
            DailyDelta(TODAY - timedelta(days=1), "a", 3),
            DailyDelta(TODAY - timedelta(days=2), "a", 0),
        ]
        by_date = {d.date: d for d in heatmap(deltas, TODAY, config)}
        assert by_date[TODAY].session_count == 3
        assert by_date[TODAY].intensity == 2
        assert by_date[TODAY - timedelta(days=1)].intensity == 1
        assert by_date[TODAY - timedelta(days=2)].session_count == 0

    def test_ignores_days_outside_window(self, config):
        deltas = [DailyDelta(date(2025, 1, 1), "a", 10), DailyDelta(TODAY + timedelta(days=1), "a", 1)]
        assert all(d.session_count == 0 for d in heatmap(deltas, TODAY, config))

    def test_iso_week_number(self, config):
        cell = heatmap([], TODAY, config)[-1]
        assert cell.week_number == TODAY.isocalendar()[1]
        assert cell.to_dict()["date"] == "2026-02-20"

    def test_enough_data_gate(self, config):
        deltas = [DailyDelta(TODAY - timedelta(days=i), "a", 1) for i in range(13)]
        assert heatmap_has_enough_data(heatmap(deltas, TODAY, config), config) is False
        deltas.append(DailyDelta(TODAY - timedelta(days=20), "a", 1))
        assert heatmap_has_enough_data(heatmap(deltas, TODAY, config), config) is True


class TestProgressRing:
    def test_mixed_formats_in_page_equivalents(self, config):
        items = [
            make_item("p", BookFormat.PHYSICAL, 300, progress=[(TODAY, 150)]),
            # 90 of 300 minutes -> 60 of 200 page-equivalents
            make_item("a", BookFormat.AUDIO, 300, progress=[(TODAY, 90)]),
        ]
        ring = total_progress_ring(items, config)
        assert ring.total_progress == pytest.approx(210)
        assert ring.total_target == pytest.approx(500)
        assert ring.percentage == 42
        assert ring.remaining_percentage == 58
        assert ring.item_count == 2

    def test_items_without_progress_excluded(self, config):
        items = [
            make_item("p", BookFormat.PHYSICAL, 100, progress=[(TODAY, 50)]),
            make_item("q", BookFormat.PHYSICAL, 900),
            make_item("r", BookFormat.PHYSICAL, 900, progress=[(TODAY, 0)]),
        ]
        ring = total_progress_ring(items, config)
        assert ring.percentage == 50
        assert ring.item_count == 1

    def test_hidden_when_nothing_started(self, config):
        assert total_progress_ring([make_item("q")], config) is None
        assert total_progress_ring([], config) is None


class TestFormatVelocity:
    def test_per_format_average_over_inclusive_span(self, config):
        d0 = date(2026, 2, 1)
        items = [
            make_item("p1", BookFormat.PHYSICAL, 300, progress=[(d0, 20), (d0 + timedelta(days=9), 100)]),
            make_item("p2", BookFormat.PHYSICAL, 300, progress=[(d0, 25)]),
            make_item("e", BookFormat.EBOOK, 100, progress=[(d0, 5), (d0 + timedelta(days=3), 13)]),
            make_item("a", BookFormat.AUDIO, 600, progress=[(d0, 30), (d0 + timedelta(days=1), 130)]),
        ]
        by_format = {v.format: v for v in format_velocity(items, config)}

        physical = by_format[BookFormat.PHYSICAL]
        assert physical.total_progress == 125
        assert physical.total_days == 11
        assert physical.avg_per_day == pytest.approx(11.4)
        assert physical.item_count == 2
        assert physical.display_value == "11.4 pages/day"

        ebook = by_format[BookFormat.EBOOK]
        assert ebook.avg_per_day == pytest.approx(3.25)
        assert ebook.display_value == "3.25 %/day"

        audio = by_format[BookFormat.AUDIO]
        assert audio.avg_per_day == pytest.approx(65)
        assert audio.display_value == "1h 5m/day"
        assert audio.page_equivalent_per_day == pytest.approx(43.33)

    def test_formats_without_progress_omitted(self, config):
        items = [
            make_item("p", BookFormat.PHYSICAL, 300, progress=[(TODAY, 10)]),
            make_item("a", BookFormat.AUDIO, 300),
        ]
        velocities = format_velocity(items, config)
        assert [v.format for v in velocities] == [BookFormat.PHYSICAL]
        assert velocities[0].to_dict()["format"] == "physical"


class TestReadingStats:
    def test_totals_and_streaks(self, config):
        items = [
            make_item(
                "p",
                BookFormat.PHYSICAL,
                300,
                progress=[(TODAY - timedelta(days=2), 10), (TODAY - timedelta(days=1), 40)],
            ),
            make_item("a", BookFormat.AUDIO, 600, progress=[(TODAY, 95)], status=ItemStatus.COMPLETE),
        ]
        stats = reading_stats(items, TODAY, config)
        # 95 minutes -> round(63.33) = 63 pages
        assert stats.total_pages == 103
        assert stats.total_audio_minutes == 95
        assert stats.total_time_display == "1h 35m"
        assert stats.current_streak == 3
        assert stats.longest_streak == 3
        assert stats.has_data is True

    def test_no_items(self, config):
        assert reading_stats([], TODAY, config) is None

    def test_portfolio_deltas_flatten_items(self, config):
        items = [
            make_item("p", BookFormat.PHYSICAL, progress=[(TODAY, 10)]),
            make_item("a", BookFormat.AUDIO, progress=[(TODAY, 15)]),
        ]
        deltas = portfolio_deltas(items, config)
        assert sorted((d.item_id, d.delta) for d in deltas) == [("a", 10), ("p", 10)]


class TestActiveDeadlineTotals:
    NOW = datetime(2026, 2, 20, 12, 0, tzinfo=timezone.utc)

    def _items(self):
        return [
            # 200 pages over 10 days -> 20 pages/day -> 30 minutes
            make_item("p", BookFormat.PHYSICAL, 300, deadline_date=date(2026, 3, 2), progress=[(TODAY, 100)]),
            # 300 minutes over 10 days -> 30 minutes
            make_item("a", BookFormat.AUDIO, 600, deadline_date=date(2026, 3, 2), progress=[(TODAY, 300)]),
            # 50 % over 5 days -> 10/day -> 15 minutes
            make_item("e", BookFormat.EBOOK, 100, deadline_date=date(2026, 2, 25), progress=[(TODAY, 50)]),
            make_item("late", BookFormat.AUDIO, 600, deadline_date=date(2026, 2, 1)),
        ]

    def test_minutes_per_day_skips_overdue(self, config):
        assert total_minutes_per_day(self._items(), self.NOW, config) == pytest.approx(75)

    def test_display(self, config):
        assert total_reading_time_per_day(self._items(), self.NOW, config) == "1h 15m/day needed"
        assert total_reading_time_per_day(self._items()[:2], self.NOW, config) == "1h/day needed"

    def test_no_active_deadlines(self, config):
        late = make_item("late", deadline_date=date(2026, 2, 1))
        assert total_reading_time_per_day([late], self.NOW, config) == "No active deadlines"
        assert total_reading_time_per_day([], self.NOW, config) == "No active deadlines"

    def test_finished_items_need_no_time(self, config):
        done = make_item("d", BookFormat.PHYSICAL, 300, deadline_date=date(2026, 3, 2), progress=[(TODAY, 300)])
        assert total_reading_time_per_day([done], self.NOW, config) == "0m/day needed"

    def test_format_distribution(self):
        items = [
            make_item("p1", BookFormat.PHYSICAL),
            make_item("p2", BookFormat.PHYSICAL),
            make_item("a", BookFormat.AUDIO),
            make_item("late", BookFormat.EBOOK, deadline_date=date(2026, 2, 1)),
        ]
        counts = format_distribution(items, self.NOW)
        assert [(c.format, c.count, c.percentage) for c in counts] == [
            (BookFormat.PHYSICAL, 2, 67),
            (BookFormat.AUDIO, 1, 33),
        ]
        assert counts[1].to_dict() == {"format": "audio", "label": "Audiobook", "count": 1, "percentage": 33}

    def test_format_distribution_empty(self):
        assert format_distribution([], self.NOW) == []
