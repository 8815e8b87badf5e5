"""Occurrence resolution for reminder rules.

Decides whether a rule is active on a given calendar day. One predicate
serves every view; views differ only in the ``OccurrenceWindow`` they
pass in:

- no window: the rule's own policy, unbounded in the future
- month window: additionally restricted to the displayed calendar month
- week window: recurring rules additionally end at the last day of the week

All functions here are pure and never raise on malformed records.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Tuple, Union

from ..core.models import RecurrenceType, ReminderRule
from ..utils.date import as_date, is_same_month

DateLike = Union[date, datetime]

# date.weekday() numbering
SUNDAY = 6


@dataclass(frozen=True)
class OccurrenceWindow:
    """Presentation bounds layered on top of a rule's own policy.

    Attributes:
        month: any day of the displayed month; every occurrence must fall
            in that month
        end: inclusive last day for recurring rules; one-off rules are not
            bounded by it
    """

    month: Optional[date] = None
    end: Optional[date] = None

    @classmethod
    def for_month(cls, displayed: DateLike) -> "OccurrenceWindow":
        return cls(month=as_date(displayed))

    @classmethod
    def for_week(cls, week_end: DateLike) -> "OccurrenceWindow":
        return cls(end=as_date(week_end))

    def admits(self, rule: ReminderRule, target: date) -> bool:
        if self.month is not None and not is_same_month(target, self.month):
            return False
        if self.end is not None and target > self.end:
            recurrence = RecurrenceType.coerce(rule.recurrence_type)
            if recurrence is not None and recurrence.is_recurring:
                return False
        return True


def _matches_policy(rule: ReminderRule, target: date) -> bool:
    anchor = as_date(rule.date)
    recurrence = RecurrenceType.coerce(rule.recurrence_type)

    if recurrence is RecurrenceType.NONE:
        return target == anchor

    # Recurring rules never occur before their anchor
    if target < anchor:
        return False

    if recurrence is RecurrenceType.DAILY:
        return True
    if recurrence is RecurrenceType.WEEKLY:
        return target.weekday() == anchor.weekday()
    if recurrence is RecurrenceType.MONTHLY:
        # No clamping: day 31 simply has no match in shorter months
        return rule.recurrence_day is not None and target.day == rule.recurrence_day

    return False


def occurs_on(rule: Optional[ReminderRule], target: DateLike,
              window: Optional[OccurrenceWindow] = None) -> bool:
    """
    Decide whether ``rule`` is active on the calendar day of ``target``.

    Args:
        rule: Reminder rule; None or a rule without a date never occurs
        target: Day to test; the time-of-day of a datetime is ignored
        window: Optional presentation bounds (month or week)

    Returns:
        True if the rule occurs on that day within the window
    """
    if rule is None or not isinstance(rule.date, date):
        return False

    day = as_date(target)
    if not _matches_policy(rule, day):
        return False
    if window is not None and not window.admits(rule, day):
        return False
    return True


def expand_occurrences(rule: Optional[ReminderRule], start: DateLike, end: DateLike,
                       window: Optional[OccurrenceWindow] = None) -> Iterator[date]:
    """Yield every day in ``[start, end]`` on which the rule occurs, in order."""
    if rule is None or not isinstance(rule.date, date):
        return

    anchor = as_date(rule.date)
    day = as_date(start)
    last = as_date(end)
    # Nothing can occur before the anchor
    if day < anchor:
        day = anchor
    if RecurrenceType.coerce(rule.recurrence_type) is RecurrenceType.NONE:
        last = min(last, anchor)

    while day <= last:
        if occurs_on(rule, day, window):
            yield day
        day += timedelta(days=1)


def week_bounds(reference: DateLike, week_start: int = SUNDAY) -> Tuple[date, date]:
    """
    Return the first and last day of the 7-day week containing ``reference``.

    Args:
        reference: Any day of the week
        week_start: Weekday the week starts on, in ``date.weekday()``
            numbering (Sunday by default)
    """
    day = as_date(reference)
    offset = (day.weekday() - week_start) % 7
    first = day - timedelta(days=offset)
    return first, first + timedelta(days=6)
