"""Schedule module: occurrence resolution and view filters."""

from .occurrence import OccurrenceWindow, occurs_on, expand_occurrences, week_bounds
from .deduplicator import (
    ReminderDeduplicator, DuplicateCluster, DeduplicationResults,
    exact_key, recurrence_key, group_key, get_dedup_key, remove_duplicates
)
from .views import (
    AgendaBuckets, CalendarDay, filter_by_audience, sort_by_time, sort_for_agenda,
    reminders_on, bucket_agenda, reminders_for_day, month_grid, list_view
)

__all__ = [
    'OccurrenceWindow', 'occurs_on', 'expand_occurrences', 'week_bounds',
    'ReminderDeduplicator', 'DuplicateCluster', 'DeduplicationResults',
    'exact_key', 'recurrence_key', 'group_key', 'get_dedup_key', 'remove_duplicates',
    'AgendaBuckets', 'CalendarDay', 'filter_by_audience', 'sort_by_time', 'sort_for_agenda',
    'reminders_on', 'bucket_agenda', 'reminders_for_day', 'month_grid', 'list_view'
]
