"""
Core module for family-agenda - contains domain models, configuration, and exceptions.
"""

from .models import (
    ReminderRule,
    RecurrenceType,
    Audience,
    Person,
    AgendaConfig
)

from .exceptions import (
    AgendaError,
    ConfigurationError,
    ValidationError,
    StoreError,
    StoreConnectionError,
    ReminderNotFoundError
)

__all__ = [
    # Models
    'ReminderRule',
    'RecurrenceType',
    'Audience',
    'Person',
    'AgendaConfig',
    # Exceptions
    'AgendaError',
    'ConfigurationError',
    'ValidationError',
    'StoreError',
    'StoreConnectionError',
    'ReminderNotFoundError'
]
