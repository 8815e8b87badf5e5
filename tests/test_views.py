"""
Tests for the view filters (family_agenda/schedule/views.py).
"""

from datetime import date, datetime, time, timezone

from family_agenda.core.models import Audience, RecurrenceType
from family_agenda.schedule.deduplicator import recurrence_key
from family_agenda.schedule.views import (
    bucket_agenda,
    filter_by_audience,
    list_view,
    month_grid,
    reminders_for_day,
    reminders_on,
    sort_by_time,
    sort_for_agenda,
)


def _ids(rules):
    return [rule.id for rule in rules]


class TestAudienceFilter:
    """Test audience filtering."""

    def test_keeps_requested_audience(self, make_rule):
        elder = make_rule(target_audience=Audience.ELDER)
        family = make_rule(target_audience=Audience.FAMILY)
        assert filter_by_audience([elder, family], Audience.ELDER) == [elder]
        assert filter_by_audience([elder, family], "family") == [family]

    def test_drops_deleted_and_none(self, make_rule):
        live = make_rule()
        gone = make_rule(deleted=True)
        assert filter_by_audience([None, gone, live], Audience.ELDER) == [live]

    def test_unknown_audience_matches_nothing(self, make_rule):
        assert filter_by_audience([make_rule()], "NEIGHBOURS") == []

    def test_empty_input(self):
        assert filter_by_audience(None, Audience.ELDER) == []
        assert filter_by_audience([], Audience.ELDER) == []

    def test_input_not_mutated(self, make_rule):
        rules = [make_rule(), make_rule(target_audience=Audience.FAMILY)]
        filter_by_audience(rules, Audience.ELDER)
        assert len(rules) == 2


class TestTimeOrdering:
    """Test time ordering."""

    def test_untimed_last_and_stable(self, make_rule):
        nine_a = make_rule(id="nine-a", time=time(9, 0))
        all_day_a = make_rule(id="all-day-a")
        eight = make_rule(id="eight", time=time(8, 0))
        nine_b = make_rule(id="nine-b", time=time(9, 0))
        all_day_b = make_rule(id="all-day-b")

        ordered = sort_by_time([nine_a, all_day_a, eight, nine_b, all_day_b])
        assert _ids(ordered) == ["eight", "nine-a", "nine-b", "all-day-a", "all-day-b"]

    def test_seconds_respected(self, make_rule):
        later = make_rule(id="later", time=time(8, 0, 30))
        earlier = make_rule(id="earlier", time=time(8, 0, 0))
        assert _ids(sort_by_time([later, earlier])) == ["earlier", "later"]

    def test_agenda_ties_broken_by_creation(self, make_rule):
        newer = make_rule(id="newer", time=time(9, 0),
                          created_at=datetime(2024, 6, 2, tzinfo=timezone.utc))
        unknown = make_rule(id="unknown", time=time(9, 0))
        older = make_rule(id="older", time=time(9, 0),
                          created_at=datetime(2024, 6, 1, tzinfo=timezone.utc))
        early = make_rule(id="early", time=time(7, 0),
                          created_at=datetime(2024, 6, 5, tzinfo=timezone.utc))

        ordered = sort_for_agenda([newer, unknown, older, early])
        assert _ids(ordered) == ["early", "older", "newer", "unknown"]

    def test_naive_and_aware_timestamps_compare(self, make_rule):
        naive = make_rule(id="naive", created_at=datetime(2024, 6, 3))
        aware = make_rule(id="aware", created_at=datetime(2024, 6, 2, tzinfo=timezone.utc))
        assert _ids(sort_for_agenda([naive, aware])) == ["aware", "naive"]


class TestAgendaBuckets:
    """Test bucketing into today, tomorrow and upcoming."""

    def test_documented_example(self, make_rule):
        today = make_rule(id="today", anchor=date(2024, 6, 10))
        tomorrow = make_rule(id="tomorrow", anchor=date(2024, 6, 11))
        friday = make_rule(id="friday", anchor=date(2024, 6, 14))

        buckets = bucket_agenda([friday, tomorrow, today], datetime(2024, 6, 10, 12, 0))
        assert _ids(buckets.today) == ["today"]
        assert _ids(buckets.tomorrow) == ["tomorrow"]
        assert _ids(buckets.upcoming) == ["friday"]
        assert buckets.week_start == date(2024, 6, 9)
        assert buckets.week_end == date(2024, 6, 15)

    def test_daily_rule_in_every_bucket_once(self, make_rule):
        daily = make_rule(anchor=date(2024, 6, 3), recurrence=RecurrenceType.DAILY)
        buckets = bucket_agenda([daily], date(2024, 6, 10))
        assert buckets.today == [daily]
        assert buckets.tomorrow == [daily]
        assert buckets.upcoming == [daily]

    def test_only_requested_audience(self, make_rule):
        family = make_rule(target_audience=Audience.FAMILY)
        buckets = bucket_agenda([family], date(2024, 6, 10))
        assert buckets.is_empty
        buckets = bucket_agenda([family], date(2024, 6, 10), audience=Audience.FAMILY)
        assert buckets.today == [family]

    def test_recurring_rule_past_week_end_not_upcoming(self, make_rule):
        # Anchored on a Sunday; the next occurrence is 2024-06-16, after the week
        sunday = make_rule(anchor=date(2024, 6, 2), recurrence=RecurrenceType.WEEKLY)
        buckets = bucket_agenda([sunday], date(2024, 6, 10))
        assert buckets.is_empty

    def test_one_off_rule_past_week_end_is_upcoming(self, make_rule):
        one_off = make_rule(anchor=date(2024, 6, 16))
        buckets = bucket_agenda([one_off], date(2024, 6, 10))
        assert buckets.upcoming == [one_off]

    def test_deleted_rules_ignored(self, make_rule):
        gone = make_rule(anchor=date(2024, 6, 10), deleted=True)
        assert bucket_agenda([gone, None], date(2024, 6, 10)).is_empty

    def test_empty_snapshot(self):
        buckets = bucket_agenda([], date(2024, 6, 10))
        assert buckets.is_empty
        assert buckets.reference == date(2024, 6, 10)

    def test_buckets_sorted(self, make_rule):
        late = make_rule(id="late", anchor=date(2024, 6, 10), time=time(18, 0))
        all_day = make_rule(id="all-day", anchor=date(2024, 6, 10))
        early = make_rule(id="early", anchor=date(2024, 6, 10), time=time(7, 30))
        buckets = bucket_agenda([late, all_day, early], date(2024, 6, 10))
        assert _ids(buckets.today) == ["early", "late", "all-day"]


class TestCalendarViews:
    """Test calendar cells and the month grid."""

    def test_reminders_on_keeps_input_order(self, make_rule):
        first = make_rule(id="first", anchor=date(2024, 6, 1), recurrence=RecurrenceType.DAILY)
        second = make_rule(id="second", anchor=date(2024, 6, 10))
        assert _ids(reminders_on([first, second], date(2024, 6, 10))) == ["first", "second"]

    def test_cell_deduplicates_across_audiences(self, make_rule):
        elder = make_rule(id="elder", description="Pharmacy", time=time(10, 0))
        family = make_rule(id="family", description="Pharmacy", time=time(10, 0),
                           target_audience=Audience.FAMILY)
        cell = reminders_for_day([elder, family], date(2024, 6, 10), date(2024, 6, 1))
        assert _ids(cell) == ["elder"]

    def test_cell_audience_filter(self, make_rule):
        elder = make_rule(id="elder")
        family = make_rule(id="family", description="Other", target_audience=Audience.FAMILY)
        cell = reminders_for_day([elder, family], date(2024, 6, 10), date(2024, 6, 1),
                                 audience=Audience.FAMILY)
        assert _ids(cell) == ["family"]

    def test_cell_outside_displayed_month_is_empty(self, make_rule):
        daily = make_rule(anchor=date(2024, 5, 1), recurrence=RecurrenceType.DAILY)
        assert reminders_for_day([daily], date(2024, 5, 31), date(2024, 6, 1)) == []

    def test_month_grid_covers_month(self, make_rule):
        weekly = make_rule(id="weekly", anchor=date(2024, 1, 3), recurrence=RecurrenceType.WEEKLY)
        grid = month_grid([weekly], date(2024, 6, 20))

        assert len(grid) == 30
        assert grid[0].day == date(2024, 6, 1)
        assert grid[-1].day == date(2024, 6, 30)
        busy = [cell.day for cell in grid if cell.reminders]
        assert busy == [date(2024, 6, 5), date(2024, 6, 12), date(2024, 6, 19), date(2024, 6, 26)]

    def test_month_grid_february_leap_year(self, make_rule):
        monthly = make_rule(anchor=date(2024, 1, 1), recurrence=RecurrenceType.MONTHLY,
                            recurrence_day=31)
        grid = month_grid([monthly], date(2024, 2, 1))
        assert len(grid) == 29
        assert all(not cell.reminders for cell in grid)

    def test_month_grid_cells_sorted(self, make_rule):
        late = make_rule(id="late", description="Walk", time=time(17, 0))
        untimed = make_rule(id="untimed", description="Call")
        early = make_rule(id="early", description="Pills", time=time(8, 0))
        grid = month_grid([late, untimed, early], date(2024, 6, 1))
        assert _ids(grid[9].reminders) == ["early", "late", "untimed"]


class TestListView:
    """Test the family reminder list."""

    def test_defaults_to_family_audience(self, make_rule):
        elder = make_rule(id="elder")
        family = make_rule(id="family", target_audience=Audience.FAMILY)
        assert _ids(list_view([elder, family])) == ["family"]

    def test_first_duplicate_wins(self, make_rule):
        first = make_rule(id="first", target_audience=Audience.FAMILY, time=time(9, 0))
        second = make_rule(id="second", target_audience=Audience.FAMILY, time=time(9, 0))
        assert _ids(list_view([first, second])) == ["first"]

    def test_recurrence_key_keeps_different_types(self, make_rule):
        one_off = make_rule(id="one-off", target_audience=Audience.FAMILY)
        daily = make_rule(id="daily", target_audience=Audience.FAMILY,
                          recurrence=RecurrenceType.DAILY)
        assert _ids(list_view([one_off, daily])) == ["one-off"]
        assert _ids(list_view([one_off, daily], key=recurrence_key)) == ["one-off", "daily"]
