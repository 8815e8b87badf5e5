"""Plain-text rendering of reminders for the command line."""

from typing import Iterable, List

from ..core.models import RecurrenceType, ReminderRule
from ..utils.date import format_date, format_time

RECURRENCE_LABELS = {
    RecurrenceType.DAILY: "Daily",
    RecurrenceType.WEEKLY: "Weekly",
    RecurrenceType.MONTHLY: "Monthly",
}


def recurrence_label(rule: ReminderRule) -> str:
    """'Daily', 'Weekly', 'Monthly (Day N)' or '' for one-off reminders."""
    recurrence = RecurrenceType.coerce(rule.recurrence_type)
    if recurrence is RecurrenceType.MONTHLY:
        return f"Monthly (Day {rule.recurrence_day})"
    return RECURRENCE_LABELS.get(recurrence, "")


def format_reminder(rule: ReminderRule, show_date: bool = False) -> str:
    """One display line: time, text, recurrence and assignee."""
    parts = [format_time(rule.time) or "All day"]
    if show_date:
        parts.insert(0, format_date(rule.date) or "????-??-??")
    parts.append(rule.description)

    label = recurrence_label(rule)
    if label:
        parts.append(f"[{label}]")
    if rule.assigned_to is not None:
        parts.append(f"({rule.assigned_to.name or rule.assigned_to.id} will do it)")
    if rule.is_acknowledged:
        parts.append("✓")
    return "  ".join(parts)


def format_section(title: str, rules: Iterable[ReminderRule], empty: str = "No reminders",
                   show_ids: bool = False) -> List[str]:
    lines = [title, "-" * len(title)]
    rules = list(rules)
    if not rules:
        lines.append(f"  {empty}")
    for rule in rules:
        line = f"  - {format_reminder(rule)}"
        if show_ids:
            line += f"  <{rule.id}>"
        lines.append(line)
    return lines
