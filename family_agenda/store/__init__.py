"""Reminder store collaborator and the retrying manager around it."""

from .gateway import ReminderStore, JsonReminderStore, validate_new_reminder
from .manager import ReminderManager

__all__ = ['ReminderStore', 'JsonReminderStore', 'validate_new_reminder', 'ReminderManager']
