"""Reminder store collaborator.

``ReminderStore`` is the interface the rest of the package reads
snapshots from and sends mutations to. ``JsonReminderStore`` implements it
over a single JSON file::

    {
      "meta": {"schema": 1, "updated_at": "..."},
      "users": [{"id": "...", "name": "...", "avatar_url": null}],
      "reminders": [{"id": "...", "family_id": "...", "assigned_user_id": null, ...}]
    }
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional, Union
from uuid import uuid4
import logging
import os

from ..core.exceptions import (
    ConfigurationError,
    ReminderNotFoundError,
    StoreConnectionError,
    StoreError,
    ValidationError,
)
from ..core.models import Audience, Person, RecurrenceType, ReminderRule
from ..schedule.deduplicator import group_key
from ..utils.date import format_date, format_time, parse_date
from ..utils.io import read_json, safe_write_json

SCHEMA_VERSION = 1


def validate_new_reminder(family_ids: List[str], audiences: List[Audience], description: str,
                          anchor: Optional[date], recurrence_type: Optional[RecurrenceType],
                          recurrence_day: Optional[int]) -> None:
    """Raise ValidationError unless the input describes a creatable reminder."""
    if not family_ids:
        raise ValidationError("At least one family is required")
    if not audiences or any(a is None for a in audiences):
        raise ValidationError("At least one valid audience (ELDER or FAMILY) is required")
    if not description or not description.strip():
        raise ValidationError("Description cannot be empty")
    if anchor is None:
        raise ValidationError("A start date is required")
    if recurrence_type is None:
        raise ValidationError("Unknown recurrence type")
    if recurrence_type is RecurrenceType.MONTHLY:
        if recurrence_day is None or not 1 <= recurrence_day <= 31:
            raise ValidationError("Monthly reminders need a day of month between 1 and 31")


class ReminderStore(ABC):
    """Interface of the reminder store collaborator."""

    @abstractmethod
    def fetch_active_reminders(self, scope_id: Optional[str]) -> List[ReminderRule]:
        """All non-deleted reminders of a family, oldest anchor date first."""
        raise NotImplementedError

    @abstractmethod
    def create(self, family_ids: Iterable[str], audiences: Iterable[Union[Audience, str]],
               description: str, anchor: Union[date, str], time_of_day: Optional[time] = None,
               recurrence_type: Union[RecurrenceType, str] = RecurrenceType.NONE,
               recurrence_day: Optional[int] = None,
               created_by: Optional[str] = None) -> List[ReminderRule]:
        """Create one reminder per (family, audience) pair."""
        raise NotImplementedError

    @abstractmethod
    def assign(self, reminder_id: str, person_id: str) -> ReminderRule:
        raise NotImplementedError

    @abstractmethod
    def acknowledge(self, reminder_id: str) -> ReminderRule:
        raise NotImplementedError

    @abstractmethod
    def delete(self, reminder_id: str, soft: bool = False) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_group(self, scope_id: Optional[str], description: str,
                     recurrence_type: Union[RecurrenceType, str, None],
                     time_of_day: Optional[time], soft: bool = False) -> int:
        """Delete every record of one recurring series; returns how many matched."""
        raise NotImplementedError


class JsonReminderStore(ReminderStore):
    """Reminder store kept in a local JSON file."""

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        if os.path.isdir(os.path.expanduser(path)):
            raise ConfigurationError(f"Reminder store path {path} is a directory")
        self.path = path
        self.logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------
    def _load(self) -> Dict[str, Any]:
        try:
            data = read_json(self.path, default={"users": [], "reminders": []})
        except ValueError as exc:
            self.logger.error("Reminder store %s is corrupt: %s", self.path, exc)
            raise StoreError(f"Reminder store {self.path} is corrupt: {exc}") from exc
        except (TimeoutError, OSError) as exc:
            self.logger.error("Cannot read reminder store %s: %s", self.path, exc)
            raise StoreConnectionError(f"Cannot read reminder store {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StoreError(f"Reminder store {self.path} is not a JSON object")
        if not isinstance(data.get("reminders"), list):
            data["reminders"] = []
        if not isinstance(data.get("users"), list):
            data["users"] = []
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        data["meta"] = {
            "schema": SCHEMA_VERSION,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        if not safe_write_json(self.path, data):
            raise StoreConnectionError(f"Cannot write reminder store {self.path}")

    @staticmethod
    def _find(data: Dict[str, Any], reminder_id: str) -> Dict[str, Any]:
        for record in data["reminders"]:
            if isinstance(record, dict) and str(record.get("id")) == str(reminder_id):
                return record
        raise ReminderNotFoundError(f"Reminder {reminder_id} not found")

    @staticmethod
    def _person(data: Dict[str, Any], person_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not person_id:
            return None
        for user in data["users"]:
            if isinstance(user, dict) and str(user.get("id")) == str(person_id):
                return Person.from_dict(user).to_dict()
        # Unknown user: keep the id so the reminder still reads as assigned
        return Person(id=str(person_id)).to_dict()

    def _to_rule(self, data: Dict[str, Any], record: Dict[str, Any]) -> ReminderRule:
        resolved = dict(record)
        resolved["assigned_to"] = self._person(data, record.get("assigned_user_id"))
        return ReminderRule.from_dict(resolved)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def fetch_active_reminders(self, scope_id: Optional[str]) -> List[ReminderRule]:
        data = self._load()
        rules: List[ReminderRule] = []
        for record in data["reminders"]:
            if not isinstance(record, dict):
                self.logger.debug("Skipping malformed reminder record: %r", record)
                continue
            if scope_id is not None and record.get("family_id") != scope_id:
                continue
            if record.get("deleted"):
                continue
            rules.append(self._to_rule(data, record))

        # Undated records sort last
        rules.sort(key=lambda rule: (rule.date is None, rule.date or date.min))
        self.logger.debug("Fetched %d reminders for scope %s", len(rules), scope_id)
        return rules

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create(self, family_ids, audiences, description, anchor, time_of_day=None,
               recurrence_type=RecurrenceType.NONE, recurrence_day=None, created_by=None):
        family_ids = [str(f) for f in family_ids if f]
        audience_list = [Audience.coerce(a) for a in audiences]
        anchor_date = anchor if isinstance(anchor, date) else parse_date(anchor)
        recurrence = RecurrenceType.coerce(recurrence_type)
        validate_new_reminder(family_ids, audience_list, description, anchor_date,
                              recurrence, recurrence_day)
        if recurrence is not RecurrenceType.MONTHLY:
            recurrence_day = None

        data = self._load()
        created_at = datetime.now(timezone.utc).isoformat()
        new_records = []
        for family_id in family_ids:
            for audience in audience_list:
                new_records.append({
                    "id": str(uuid4()),
                    "family_id": family_id,
                    "user_id": created_by,
                    "description": description.strip(),
                    "date": format_date(anchor_date),
                    "time": format_time(time_of_day),
                    "recurrence_type": recurrence.value,
                    "recurrence_day": recurrence_day,
                    "target_audience": audience.value,
                    "assigned_user_id": None,
                    "is_acknowledged": False,
                    "deleted": False,
                    "created_at": created_at,
                })

        data["reminders"].extend(new_records)
        self._save(data)
        self.logger.info("Created %d reminder(s): %s", len(new_records), description.strip())
        return [self._to_rule(data, record) for record in new_records]

    def assign(self, reminder_id, person_id):
        data = self._load()
        record = self._find(data, reminder_id)
        record["assigned_user_id"] = person_id
        self._save(data)
        self.logger.info("Assigned reminder %s to %s", reminder_id, person_id)
        return self._to_rule(data, record)

    def acknowledge(self, reminder_id):
        data = self._load()
        record = self._find(data, reminder_id)
        record["is_acknowledged"] = True
        self._save(data)
        self.logger.info("Acknowledged reminder %s", reminder_id)
        return self._to_rule(data, record)

    def delete(self, reminder_id, soft=False):
        data = self._load()
        record = self._find(data, reminder_id)
        if soft:
            record["deleted"] = True
        else:
            data["reminders"].remove(record)
        self._save(data)
        self.logger.info("%s reminder %s", "Soft-deleted" if soft else "Deleted", reminder_id)

    def delete_group(self, scope_id, description, recurrence_type, time_of_day, soft=False):
        wanted = (description, RecurrenceType.coerce(recurrence_type), time_of_day)
        data = self._load()

        kept: List[Any] = []
        matched = 0
        for record in data["reminders"]:
            if (isinstance(record, dict)
                    and record.get("family_id") == scope_id
                    and not record.get("deleted")
                    and group_key(ReminderRule.from_dict(record)) == wanted):
                matched += 1
                if soft:
                    record["deleted"] = True
                    kept.append(record)
                continue
            kept.append(record)

        if matched:
            data["reminders"] = kept
            self._save(data)
        self.logger.info("Deleted %d occurrence(s) of '%s' in scope %s", matched, description, scope_id)
        return matched
