"""
Command implementations for family-agenda.
"""

from .agenda import AgendaCommand
from .calendar import CalendarCommand
from .reminders import (
    ListCommand,
    DuplicatesCommand,
    AddCommand,
    AssignCommand,
    AcknowledgeCommand,
    DeleteCommand,
)

__all__ = [
    'AgendaCommand',
    'CalendarCommand',
    'ListCommand',
    'DuplicatesCommand',
    'AddCommand',
    'AssignCommand',
    'AcknowledgeCommand',
    'DeleteCommand',
]
