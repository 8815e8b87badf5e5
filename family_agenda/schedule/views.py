"""View filters over a reminder snapshot.

Each function takes an already-fetched snapshot and returns a new list;
nothing here mutates its input or talks to the store.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional, Tuple, Union

from ..core.models import Audience, ReminderRule
from ..utils.date import as_date, month_days
from .deduplicator import DedupKey, exact_key, remove_duplicates
from .occurrence import OccurrenceWindow, occurs_on, week_bounds

DateLike = Union[date, datetime]

# Sorts after every real timestamp
_NO_TIMESTAMP = datetime.max.replace(tzinfo=timezone.utc)


@dataclass
class AgendaBuckets:
    """Reminders of the agenda screen, split by how soon they occur."""
    today: List[ReminderRule] = field(default_factory=list)
    tomorrow: List[ReminderRule] = field(default_factory=list)
    upcoming: List[ReminderRule] = field(default_factory=list)
    reference: Optional[date] = None
    week_start: Optional[date] = None
    week_end: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return not (self.today or self.tomorrow or self.upcoming)


@dataclass
class CalendarDay:
    """One cell of the month grid."""
    day: date
    reminders: List[ReminderRule] = field(default_factory=list)


def _live(rules: Optional[Iterable[Optional[ReminderRule]]]) -> List[ReminderRule]:
    if not rules:
        return []
    return [rule for rule in rules if rule is not None and not rule.deleted]


def filter_by_audience(rules: Optional[Iterable[Optional[ReminderRule]]],
                       audience: Union[Audience, str]) -> List[ReminderRule]:
    """Keep non-deleted rules aimed at ``audience``."""
    wanted = Audience.coerce(audience)
    if wanted is None:
        return []
    return [rule for rule in _live(rules) if Audience.coerce(rule.target_audience) is wanted]


def _time_order(rule: ReminderRule) -> Tuple[bool, Tuple[int, int, int]]:
    if rule.time is None:
        return (True, (0, 0, 0))
    return (False, (rule.time.hour, rule.time.minute, rule.time.second))


def _created_order(rule: ReminderRule) -> Tuple[bool, datetime]:
    created = rule.created_at
    if created is None:
        return (True, _NO_TIMESTAMP)
    if created.tzinfo is None:
        # Naive timestamps are read as UTC so they compare with aware ones
        created = created.replace(tzinfo=timezone.utc)
    return (False, created)


def sort_by_time(rules: Iterable[ReminderRule]) -> List[ReminderRule]:
    """Stable sort by time of day; all-day reminders go last."""
    return sorted(rules, key=_time_order)


def sort_for_agenda(rules: Iterable[ReminderRule]) -> List[ReminderRule]:
    """Time order with ties broken by creation timestamp, oldest first."""
    return sorted(rules, key=lambda rule: (_time_order(rule), _created_order(rule)))


def reminders_on(rules: Optional[Iterable[Optional[ReminderRule]]], day: DateLike,
                 window: Optional[OccurrenceWindow] = None) -> List[ReminderRule]:
    """Non-deleted rules occurring on ``day``, in input order."""
    return [rule for rule in _live(rules) if occurs_on(rule, day, window)]


def bucket_agenda(rules: Optional[Iterable[Optional[ReminderRule]]], now: DateLike,
                  audience: Union[Audience, str] = Audience.ELDER) -> AgendaBuckets:
    """
    Split a snapshot into today, tomorrow and the rest of the week.

    Occurrences are resolved against the week (Sunday to Saturday) that
    contains ``now``: recurring reminders stop at the end of that week,
    one-off reminders do not.

    Args:
        rules: Reminder snapshot
        now: Reference instant; only its calendar day matters
        audience: Audience to show

    Returns:
        AgendaBuckets with each bucket sorted for display
    """
    reference = as_date(now)
    week_start, week_end = week_bounds(reference)
    window = OccurrenceWindow.for_week(week_end)
    candidates = filter_by_audience(rules, audience)

    tomorrow = reference + timedelta(days=1)
    later_days = [reference + timedelta(days=offset) for offset in range(2, 7)]

    return AgendaBuckets(
        today=sort_for_agenda(r for r in candidates if occurs_on(r, reference, window)),
        tomorrow=sort_for_agenda(r for r in candidates if occurs_on(r, tomorrow, window)),
        upcoming=sort_for_agenda(
            r for r in candidates
            if any(occurs_on(r, day, window) for day in later_days)
        ),
        reference=reference,
        week_start=week_start,
        week_end=week_end,
    )


def reminders_for_day(rules: Optional[Iterable[Optional[ReminderRule]]], day: DateLike,
                      displayed_month: DateLike,
                      audience: Union[Audience, str, None] = None,
                      key: DedupKey = exact_key) -> List[ReminderRule]:
    """Contents of one calendar cell of the displayed month."""
    candidates = _live(rules) if audience is None else filter_by_audience(rules, audience)
    window = OccurrenceWindow.for_month(displayed_month)
    return sort_by_time(remove_duplicates(reminders_on(candidates, day, window), key=key))


def month_grid(rules: Optional[Iterable[Optional[ReminderRule]]], displayed_month: DateLike,
               audience: Union[Audience, str, None] = None,
               key: DedupKey = exact_key) -> List[CalendarDay]:
    """Every day of the displayed month with the reminders occurring on it."""
    snapshot = _live(rules)
    first, last = month_days(as_date(displayed_month))
    grid: List[CalendarDay] = []
    day = first
    while day <= last:
        grid.append(CalendarDay(
            day=day,
            reminders=reminders_for_day(snapshot, day, displayed_month, audience=audience, key=key),
        ))
        day += timedelta(days=1)
    return grid


def list_view(rules: Optional[Iterable[Optional[ReminderRule]]],
              audience: Union[Audience, str] = Audience.FAMILY,
              key: DedupKey = exact_key) -> List[ReminderRule]:
    """The family reminder list: audience filtered and deduplicated, input order kept."""
    return remove_duplicates(filter_by_audience(rules, audience), key=key)
