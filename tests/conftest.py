#!/usr/bin/env python3
"""
Global pytest configuration and fixtures.

This module provides:
- An isolated FAMILY_AGENDA_HOME for every test
- A sample reminder store snapshot
- A rule factory used by the resolver and view tests
"""

import json
import os
import shutil
import sys
import tempfile
from datetime import date
from typing import Any, Dict, Generator

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from family_agenda.core.models import AgendaConfig, Audience, RecurrenceType, ReminderRule
from family_agenda.core.paths import reset_path_manager


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test isolation."""
    temp_path = tempfile.mkdtemp(prefix="family_agenda_test_")
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def agenda_home(temp_dir: str, monkeypatch) -> Generator[str, None, None]:
    """Point FAMILY_AGENDA_HOME at a temporary directory."""
    home = os.path.join(temp_dir, "home")
    monkeypatch.setenv("FAMILY_AGENDA_HOME", home)
    reset_path_manager()
    yield home
    reset_path_manager()


@pytest.fixture
def make_rule():
    """Factory for ReminderRule objects with sensible defaults."""
    counter = {"n": 0}

    def _make(description: str = "Take pills", anchor: date = date(2024, 6, 10),
              recurrence=RecurrenceType.NONE, **kwargs) -> ReminderRule:
        counter["n"] += 1
        kwargs.setdefault("id", f"rule-{counter['n']}")
        kwargs.setdefault("target_audience", Audience.ELDER)
        return ReminderRule(description=description, date=anchor,
                            recurrence_type=recurrence, **kwargs)

    return _make


@pytest.fixture
def sample_store_data() -> Dict[str, Any]:
    """A store snapshot with two families, users and mixed reminders."""
    return {
        "meta": {"schema": 1, "updated_at": "2024-06-01T08:00:00+00:00"},
        "users": [
            {"id": "user-1", "name": "Ana", "avatar_url": "https://example.org/ana.png"},
            {"id": "user-2", "name": "Ben", "avatar_url": None},
        ],
        "reminders": [
            {
                "id": "rem-1",
                "family_id": "fam-1",
                "user_id": "user-1",
                "description": "Morning pills",
                "date": "2024-06-03",
                "time": "08:00:00",
                "recurrence_type": "DAILY",
                "recurrence_day": None,
                "target_audience": "ELDER",
                "assigned_user_id": None,
                "is_acknowledged": False,
                "deleted": False,
                "created_at": "2024-06-01T08:00:00+00:00",
            },
            {
                "id": "rem-2",
                "family_id": "fam-1",
                "user_id": "user-1",
                "description": "Morning pills",
                "date": "2024-06-03",
                "time": "08:00:00",
                "recurrence_type": "DAILY",
                "recurrence_day": None,
                "target_audience": "FAMILY",
                "assigned_user_id": "user-2",
                "is_acknowledged": False,
                "deleted": False,
                "created_at": "2024-06-01T08:00:00+00:00",
            },
            {
                "id": "rem-3",
                "family_id": "fam-1",
                "user_id": "user-2",
                "description": "Doctor appointment",
                "date": "2024-06-12",
                "time": "14:30:00",
                "recurrence_type": "NONE",
                "recurrence_day": None,
                "target_audience": "ELDER",
                "assigned_user_id": None,
                "is_acknowledged": True,
                "deleted": False,
                "created_at": "2024-06-02T10:00:00+00:00",
            },
            {
                "id": "rem-4",
                "family_id": "fam-1",
                "user_id": "user-2",
                "description": "Old reminder",
                "date": "2024-06-10",
                "time": None,
                "recurrence_type": "NONE",
                "recurrence_day": None,
                "target_audience": "ELDER",
                "assigned_user_id": None,
                "is_acknowledged": False,
                "deleted": True,
                "created_at": "2024-05-01T10:00:00+00:00",
            },
            {
                "id": "rem-5",
                "family_id": "fam-2",
                "user_id": "user-1",
                "description": "Morning pills",
                "date": "2024-06-03",
                "time": "08:00:00",
                "recurrence_type": "DAILY",
                "recurrence_day": None,
                "target_audience": "ELDER",
                "assigned_user_id": None,
                "is_acknowledged": False,
                "deleted": False,
                "created_at": "2024-06-01T08:00:00+00:00",
            },
            {
                "id": "rem-6",
                "family_id": "fam-1",
                "user_id": "user-1",
                "description": "Pay rent",
                "date": "2024-01-15",
                "time": None,
                "recurrence_type": "MONTHLY",
                "recurrence_day": 15,
                "target_audience": "FAMILY",
                "assigned_user_id": None,
                "is_acknowledged": False,
                "deleted": False,
                "created_at": "2024-01-10T10:00:00+00:00",
            },
        ],
    }


@pytest.fixture
def store_path(temp_dir: str, sample_store_data: Dict[str, Any]) -> str:
    """Write the sample snapshot to disk and return its path."""
    path = os.path.join(temp_dir, "reminders.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_store_data, f)
    return path


@pytest.fixture
def agenda_config(store_path: str) -> AgendaConfig:
    """Config pointing at the sample store with retries disabled."""
    return AgendaConfig(store_path=store_path, max_retries=0, retry_delay=0.0)

