"""
Exception classes for family-agenda.
"""


class AgendaError(Exception):
    """Base exception for all family-agenda errors."""
    pass


class ConfigurationError(AgendaError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(AgendaError):
    """Raised when a reminder cannot be created from the given input."""
    pass


class StoreError(AgendaError):
    """Base exception for reminder store errors."""
    pass


class StoreConnectionError(StoreError):
    """Raised when the store cannot be reached. Safe to retry."""
    pass


class ReminderNotFoundError(StoreError):
    """Raised when a reminder id is unknown to the store."""
    pass
