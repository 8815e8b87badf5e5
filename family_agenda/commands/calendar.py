"""Calendar command - month grid of reminder occurrences."""

from datetime import date
from typing import Optional

from ..schedule.views import month_grid
from ..utils.date import parse_month
from .base import ReminderCommand
from .formatting import format_reminder


class CalendarCommand(ReminderCommand):
    """Print every day of a month with the reminders occurring on it."""

    def run(self, month_str: Optional[str] = None, audience: Optional[str] = None,
            family_id: Optional[str] = None, show_empty: bool = False) -> bool:
        """Run the calendar command."""
        try:
            displayed = date.today().replace(day=1)
            if month_str:
                displayed = parse_month(month_str)
                if displayed is None:
                    print(f"Invalid month '{month_str}'. Use YYYY-MM.")
                    return False

            # The calendar shows every audience unless one is asked for
            wanted = self.audience(audience) if audience else None
            snapshot = self.manager.fetch(self.scope(family_id))
            grid = month_grid(snapshot, displayed, audience=wanted, key=self.dedup_key)

            print(f"{displayed:%B %Y}")
            print("=" * 40)
            busy_days = 0
            for cell in grid:
                if not cell.reminders and not show_empty:
                    continue
                busy_days += 1 if cell.reminders else 0
                print(f"{cell.day:%a %d}")
                for rule in cell.reminders:
                    print(f"    {format_reminder(rule)}")
            if busy_days == 0:
                print("No reminders this month.")
            return True

        except Exception as exc:
            return self._fail("Calendar", exc)
