"""Shared plumbing for commands that talk to the reminder store."""

import logging
from typing import Optional

from ..core.models import AgendaConfig, Audience
from ..schedule.deduplicator import get_dedup_key
from ..store.manager import ReminderManager


class ReminderCommand:
    """Base for commands reading from or writing to the reminder store."""

    def __init__(self, config: AgendaConfig, verbose: bool = False,
                 manager: Optional[ReminderManager] = None):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(self.__class__.__module__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)
        self.manager = manager or ReminderManager.from_config(config, logger=self.logger)

    def scope(self, family_id: Optional[str] = None) -> Optional[str]:
        """Family to operate on; None reads every family in the store."""
        return family_id or self.config.default_family_id

    def audience(self, value: Optional[str] = None) -> Audience:
        return Audience.coerce(value) or self.config.audience

    @property
    def dedup_key(self):
        return get_dedup_key(self.config.dedup_key)

    def _fail(self, action: str, exc: Exception) -> bool:
        self.logger.error("%s failed: %s", action, exc)
        print(f"Error: {action} failed: {exc}")
        if self.verbose:
            import traceback

            traceback.print_exc()
        return False
