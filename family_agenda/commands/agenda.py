"""Agenda command - today, tomorrow and the rest of the week."""

from datetime import date
from typing import Optional

from ..schedule.views import bucket_agenda
from ..utils.date import parse_date
from .base import ReminderCommand
from .formatting import format_section


class AgendaCommand(ReminderCommand):
    """Print the agenda buckets for one audience."""

    def run(self, date_str: Optional[str] = None, audience: Optional[str] = None,
            family_id: Optional[str] = None, show_ids: bool = False) -> bool:
        """
        Run the agenda command.

        Args:
            date_str: Reference day (YYYY-MM-DD); today when omitted
            audience: ELDER or FAMILY; configured default when omitted
            family_id: Family scope; configured default when omitted
            show_ids: Append reminder ids to each line

        Returns:
            True for success, False for failure
        """
        try:
            reference = date.today()
            if date_str:
                reference = parse_date(date_str)
                if reference is None:
                    print(f"Invalid date '{date_str}'. Use YYYY-MM-DD.")
                    return False

            wanted = self.audience(audience)
            snapshot = self.manager.fetch(self.scope(family_id))
            self.logger.debug("Resolving agenda for %s over %d reminders", reference, len(snapshot))

            buckets = bucket_agenda(snapshot, reference, audience=wanted)

            print(f"Agenda for {reference:%A %d %B %Y} ({wanted.value.lower()})")
            print(f"Week {buckets.week_start} → {buckets.week_end}\n")
            for title, rules, empty in (
                ("Today", buckets.today, "No reminders for today"),
                ("Tomorrow", buckets.tomorrow, "No reminders"),
                ("Upcoming", buckets.upcoming, "No upcoming reminders"),
            ):
                print("\n".join(format_section(title, rules, empty=empty, show_ids=show_ids)))
                print("")
            return True

        except Exception as exc:
            return self._fail("Agenda", exc)
