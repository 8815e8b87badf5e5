"""Reminder list and mutation commands."""

from typing import List, Optional

from ..core.exceptions import ValidationError
from ..core.models import ReminderRule
from ..schedule.deduplicator import ReminderDeduplicator, get_dedup_key
from ..schedule.views import list_view
from ..utils.date import format_date, parse_date, parse_time
from .base import ReminderCommand
from .formatting import format_reminder


class ListCommand(ReminderCommand):
    """Print the deduplicated reminder list of one audience."""

    def run(self, audience: Optional[str] = None, family_id: Optional[str] = None) -> bool:
        try:
            # The list screen is the family's own view
            wanted = self.audience(audience or "FAMILY")
            snapshot = self.manager.fetch(self.scope(family_id))
            rules = list_view(snapshot, audience=wanted, key=self.dedup_key)

            title = f"{wanted.value.capitalize()} reminders ({len(rules)})"
            print(title)
            print("-" * len(title))
            if not rules:
                print("  No reminders.")
            for rule in rules:
                print(f"  - {format_reminder(rule, show_date=True)}  <{rule.id}>")
            return True

        except Exception as exc:
            return self._fail("List", exc)


class DuplicatesCommand(ReminderCommand):
    """Report reminders that the list views collapse into one."""

    def run(self, key_name: Optional[str] = None, family_id: Optional[str] = None) -> bool:
        try:
            key = get_dedup_key(key_name) if key_name else self.dedup_key
            snapshot = self.manager.fetch(self.scope(family_id))
            results = ReminderDeduplicator(key=key, logger=self.logger).analyze(snapshot)

            clusters = results.get_duplicate_clusters()
            if not clusters:
                print(f"No duplicates among {results.total_reminders} reminders.")
                return True

            print(f"Found {results.duplicate_clusters} duplicate cluster(s) "
                  f"covering {results.duplicate_reminders} of {results.total_reminders} reminders.\n")
            for index, cluster in enumerate(clusters, 1):
                print(f"{index}. {cluster.description} on {format_date(cluster.anchor_date)}"
                      f" ({cluster.total_count} copies)")
                for rule in cluster.reminders:
                    marker = "keep" if rule is cluster.keeper else "dup "
                    audience = rule.target_audience.value if rule.target_audience else "?"
                    print(f"     [{marker}] {rule.id}  {audience}  family={rule.family_id}")
            return True

        except Exception as exc:
            return self._fail("Duplicate analysis", exc)


class AddCommand(ReminderCommand):
    """Create a reminder for every selected family and audience."""

    def run(self, description: str, date_str: str, time_str: Optional[str] = None,
            recurrence: str = "NONE", recurrence_day: Optional[int] = None,
            audiences: Optional[List[str]] = None, family_ids: Optional[List[str]] = None,
            created_by: Optional[str] = None) -> bool:
        try:
            anchor = parse_date(date_str)
            if anchor is None:
                print(f"Invalid date '{date_str}'. Use YYYY-MM-DD.")
                return False

            time_of_day = None
            if time_str:
                time_of_day = parse_time(time_str)
                if time_of_day is None:
                    print(f"Invalid time '{time_str}'. Use HH:MM.")
                    return False

            families = family_ids or ([self.config.default_family_id] if self.config.default_family_id else [])
            created = self.manager.create(
                families,
                audiences or [self.config.default_audience],
                description,
                anchor,
                time_of_day=time_of_day,
                recurrence_type=recurrence,
                recurrence_day=recurrence_day,
                created_by=created_by,
            )
            if not created:
                print("Reminder could not be saved.")
                return False

            print(f"Created {len(created)} reminder(s):")
            for rule in created:
                print(f"  - {format_reminder(rule, show_date=True)}  <{rule.id}>")
            return True

        except ValidationError as exc:
            print(f"Invalid reminder: {exc}")
            return False
        except Exception as exc:
            return self._fail("Add", exc)


class AssignCommand(ReminderCommand):
    """Assign a reminder to a family member ("I'll do it")."""

    def run(self, reminder_id: str, person_id: str) -> bool:
        try:
            if not self.manager.assign(reminder_id, person_id):
                print(f"Could not assign reminder {reminder_id}.")
                return False
            print(f"Reminder {reminder_id} assigned to {person_id}.")
            return True
        except Exception as exc:
            return self._fail("Assign", exc)


class AcknowledgeCommand(ReminderCommand):
    """Mark a reminder as acknowledged."""

    def run(self, reminder_id: str) -> bool:
        try:
            if not self.manager.acknowledge(reminder_id):
                print(f"Could not acknowledge reminder {reminder_id}.")
                return False
            print(f"Reminder {reminder_id} acknowledged.")
            return True
        except Exception as exc:
            return self._fail("Acknowledge", exc)


class DeleteCommand(ReminderCommand):
    """Delete one reminder, or every occurrence of a recurring one."""

    def run(self, reminder_id: str, all_occurrences: bool = False) -> bool:
        try:
            rule = self._lookup(reminder_id)
            if rule is None:
                print(f"Reminder {reminder_id} not found.")
                return False

            if all_occurrences:
                if not rule.is_recurring:
                    print(f"Reminder '{rule.description}' does not repeat; "
                          f"delete it without --all.")
                    return False
                removed = self.manager.delete_all_occurrences(rule)
                if not removed:
                    print(f"Could not delete occurrences of '{rule.description}'.")
                    return False
                print(f"Removed {removed} occurrence(s) of '{rule.description}'.")
                return True

            if not self.manager.delete(rule.id):
                print(f"Could not delete reminder {reminder_id}.")
                return False
            print(f"Reminder '{rule.description}' removed.")
            return True

        except Exception as exc:
            return self._fail("Delete", exc)

    def _lookup(self, reminder_id: str) -> Optional[ReminderRule]:
        for rule in self.manager.fetch(None):
            if rule.id == reminder_id:
                return rule
        return None
