"""Reminder manager: store operations wrapped in a retry policy."""

from datetime import date, time
from typing import Iterable, List, Optional, Union
import logging

from ..core.exceptions import StoreConnectionError, StoreError
from ..core.models import AgendaConfig, Audience, RecurrenceType, ReminderRule
from ..utils.retry import RetryPolicy
from .gateway import JsonReminderStore, ReminderStore


class ReminderManager:
    """Reads snapshots from and sends mutations to a reminder store.

    Connection failures are retried according to ``retry_policy``; any
    other store error is logged and reported as a failed operation.
    """

    def __init__(
        self,
        store: ReminderStore,
        retry_policy: Optional[RetryPolicy] = None,
        soft_delete: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.retry_policy = retry_policy or RetryPolicy(
            retry_on=(StoreConnectionError,), logger=self.logger
        )
        self.soft_delete = soft_delete

    @classmethod
    def from_config(cls, config: AgendaConfig, logger: Optional[logging.Logger] = None) -> "ReminderManager":
        logger = logger or logging.getLogger(__name__)
        policy = RetryPolicy(
            max_retries=config.max_retries,
            base_delay=config.retry_delay,
            retry_on=(StoreConnectionError,),
            logger=logger,
        )
        store = JsonReminderStore(config.store_path, logger=logger)
        return cls(store, retry_policy=policy, soft_delete=config.soft_delete, logger=logger)

    def fetch(self, scope_id: Optional[str]) -> List[ReminderRule]:
        """Fetch a snapshot; an empty list when the store cannot be read."""
        try:
            return self.retry_policy.call(
                self.store.fetch_active_reminders, scope_id, operation="fetching reminders"
            )
        except StoreError as exc:
            self.logger.error("Error fetching reminders: %s", exc)
            return []

    def create(self, family_ids: Iterable[str], audiences: Iterable[Union[Audience, str]],
               description: str, anchor: Union[date, str], time_of_day: Optional[time] = None,
               recurrence_type: Union[RecurrenceType, str] = RecurrenceType.NONE,
               recurrence_day: Optional[int] = None,
               created_by: Optional[str] = None) -> List[ReminderRule]:
        """Create reminders; ValidationError propagates, store failures yield []."""
        try:
            return self.retry_policy.call(
                self.store.create,
                list(family_ids), list(audiences), description, anchor,
                time_of_day=time_of_day,
                recurrence_type=recurrence_type,
                recurrence_day=recurrence_day,
                created_by=created_by,
                operation="creating reminder",
            )
        except StoreError as exc:
            self.logger.error("Error creating reminder: %s", exc)
            return []

    def assign(self, reminder_id: str, person_id: str) -> bool:
        return self._mutate("assigning reminder", self.store.assign, reminder_id, person_id)

    def acknowledge(self, reminder_id: str) -> bool:
        return self._mutate("acknowledging reminder", self.store.acknowledge, reminder_id)

    def delete(self, reminder_id: str) -> bool:
        return self._mutate("deleting reminder", self.store.delete, reminder_id, soft=self.soft_delete)

    def delete_all_occurrences(self, rule: ReminderRule) -> int:
        """Delete every record of the rule's recurring series in its family.

        One-off rules are left alone and count as nothing deleted.
        """
        if not rule.is_recurring:
            self.logger.warning("Reminder %s does not repeat; not deleting a series", rule.id)
            return 0
        try:
            return self.retry_policy.call(
                self.store.delete_group,
                rule.family_id, rule.description, rule.recurrence_type, rule.time,
                soft=self.soft_delete,
                operation="deleting recurring reminders",
            )
        except StoreError as exc:
            self.logger.error("Error deleting recurring reminders: %s", exc)
            return 0

    def _mutate(self, operation: str, func, *args, **kwargs) -> bool:
        try:
            self.retry_policy.call(func, *args, operation=operation, **kwargs)
            return True
        except StoreError as exc:
            self.logger.error("Error %s: %s", operation, exc)
            return False
