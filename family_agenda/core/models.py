"""
Domain models for family-agenda.

This module contains the reminder records handed over by the reminder
store and the configuration object used by the command line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Optional
import json
import os

from .paths import get_path_manager
from ..utils.date import format_date, format_time, parse_date, parse_datetime, parse_time


def _normalize_path(path: str) -> str:
    """Expand user and convert to absolute path."""
    return os.path.abspath(os.path.expanduser(path))


class RecurrenceType(Enum):
    """How a reminder repeats after its anchor date."""

    NONE = "NONE"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"

    @classmethod
    def coerce(cls, value: Any) -> Optional[RecurrenceType]:
        """Return the matching member, or None for anything unrecognised."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None

    @property
    def is_recurring(self) -> bool:
        return self is not RecurrenceType.NONE


class Audience(Enum):
    """Who a reminder is shown to."""

    ELDER = "ELDER"
    FAMILY = "FAMILY"

    @classmethod
    def coerce(cls, value: Any) -> Optional[Audience]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


@dataclass
class Person:
    """A family member a reminder can be assigned to."""

    id: str
    name: str = ""
    avatar_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "avatar_url": self.avatar_url}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional[Person]:
        if not isinstance(data, dict) or not data.get("id"):
            return None
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            avatar_url=data.get("avatar_url"),
        )


@dataclass
class ReminderRule:
    """A reminder definition: an anchor date plus a recurrence rule."""

    id: str
    description: str
    date: Optional[date]
    recurrence_type: Optional[RecurrenceType] = RecurrenceType.NONE
    recurrence_day: Optional[int] = None
    time: Optional[time] = None
    target_audience: Optional[Audience] = Audience.FAMILY
    assigned_to: Optional[Person] = None
    is_acknowledged: bool = False
    deleted: bool = False
    family_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_recurring(self) -> bool:
        return self.recurrence_type is not None and self.recurrence_type.is_recurring

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "family_id": self.family_id,
            "description": self.description,
            "date": format_date(self.date),
            "time": format_time(self.time),
            "recurrence_type": self.recurrence_type.value if self.recurrence_type else None,
            "recurrence_day": self.recurrence_day,
            "target_audience": self.target_audience.value if self.target_audience else None,
            "assigned_to": self.assigned_to.to_dict() if self.assigned_to else None,
            "is_acknowledged": self.is_acknowledged,
            "deleted": self.deleted,
            "user_id": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ReminderRule:
        """Build a rule from a store record.

        Bad field values never raise: unparsable dates become None and
        unknown enum values become None, so the resolver treats the
        record as never occurring.
        """
        recurrence_day = data.get("recurrence_day")
        try:
            recurrence_day = int(recurrence_day) if recurrence_day is not None else None
        except (TypeError, ValueError):
            recurrence_day = None

        raw_date = data.get("date")
        if isinstance(raw_date, datetime):
            anchor = raw_date.date()
        elif isinstance(raw_date, date):
            anchor = raw_date
        else:
            anchor = parse_date(raw_date)

        raw_time = data.get("time")
        reminder_time = raw_time if isinstance(raw_time, time) else parse_time(raw_time)

        return cls(
            id=str(data.get("id", "")),
            description=data.get("description") or "",
            date=anchor,
            recurrence_type=RecurrenceType.coerce(data.get("recurrence_type", "NONE")),
            recurrence_day=recurrence_day,
            time=reminder_time,
            target_audience=Audience.coerce(data.get("target_audience")),
            assigned_to=Person.from_dict(data.get("assigned_to")),
            is_acknowledged=bool(data.get("is_acknowledged", False)),
            deleted=bool(data.get("deleted", False)),
            family_id=data.get("family_id"),
            created_by=data.get("user_id"),
            created_at=parse_datetime(data.get("created_at")),
        )


@dataclass
class AgendaConfig:
    """Configuration for the command line and the store manager."""

    store_path: Optional[str] = None
    default_family_id: Optional[str] = None
    default_audience: str = Audience.ELDER.value
    # "exact" keys on (description, date, time); "recurrence" adds the recurrence type
    dedup_key: str = "exact"
    max_retries: int = 3
    retry_delay: float = 1.0
    soft_delete: bool = False

    DEDUP_KEYS = ("exact", "recurrence")

    def __post_init__(self) -> None:
        if self.store_path is None:
            self.store_path = str(get_path_manager().store_path)
        else:
            self.store_path = _normalize_path(self.store_path)

        audience = Audience.coerce(self.default_audience)
        self.default_audience = (audience or Audience.ELDER).value

        if self.dedup_key not in self.DEDUP_KEYS:
            self.dedup_key = "exact"

        if self.max_retries < 0:
            self.max_retries = 0
        if self.retry_delay < 0:
            self.retry_delay = 0.0

    @property
    def audience(self) -> Audience:
        return Audience(self.default_audience)

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------
    @classmethod
    def load_from_file(cls, config_path: str) -> AgendaConfig:
        config_path = _normalize_path(config_path)
        if not os.path.exists(config_path):
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError):
            return cls()

        if not isinstance(data, dict):
            return cls()

        store_settings = data.get("store", {})
        view_settings = data.get("views", {})

        try:
            max_retries = int(store_settings.get("max_retries", 3))
        except (TypeError, ValueError):
            max_retries = 3
        try:
            retry_delay = float(store_settings.get("retry_delay", 1.0))
        except (TypeError, ValueError):
            retry_delay = 1.0

        return cls(
            store_path=store_settings.get("path"),
            default_family_id=data.get("default_family_id"),
            default_audience=view_settings.get("default_audience", Audience.ELDER.value),
            dedup_key=view_settings.get("dedup_key", "exact"),
            max_retries=max_retries,
            retry_delay=retry_delay,
            soft_delete=bool(store_settings.get("soft_delete", False)),
        )

    def save_to_file(self, config_path: str) -> None:
        config_path = _normalize_path(config_path)
        os.makedirs(os.path.dirname(config_path), exist_ok=True)

        data = {
            "default_family_id": self.default_family_id,
            "store": {
                "path": self.store_path,
                "max_retries": self.max_retries,
                "retry_delay": self.retry_delay,
                "soft_delete": self.soft_delete,
            },
            "views": {
                "default_audience": self.default_audience,
                "dedup_key": self.dedup_key,
            },
        }

        with open(config_path, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
