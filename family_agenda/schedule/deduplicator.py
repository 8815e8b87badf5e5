"""Reminder deduplication for family-agenda.

Reminders are created once per (family, audience) pair, so the same
reminder text regularly appears several times in one snapshot. Two keys
are in use:

- exact key: (description, date, time); list views and calendar cells
- recurrence key: the exact key plus the recurrence type

``group_key`` is different: it identifies every record of one recurring
series and is the match key for "delete all occurrences".
"""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, time
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple
import logging

from ..core.models import RecurrenceType, ReminderRule
from ..utils.date import format_date

DedupKey = Callable[[ReminderRule], Hashable]


def _time_text(value: Optional[time]) -> str:
    return value.strftime("%H:%M:%S") if value is not None else ""


def exact_key(rule: ReminderRule) -> Tuple[str, str, str]:
    """(description, date, time) with a missing time treated as empty."""
    return (rule.description, format_date(rule.date) or "", _time_text(rule.time))


def recurrence_key(rule: ReminderRule) -> Tuple[str, str, str, str]:
    """The exact key plus the recurrence type."""
    recurrence = RecurrenceType.coerce(rule.recurrence_type)
    return exact_key(rule) + (recurrence.value if recurrence else "",)


def group_key(rule: ReminderRule) -> Tuple[str, Optional[RecurrenceType], Optional[time]]:
    """(description, recurrence_type, time): the series a record belongs to."""
    return (rule.description, RecurrenceType.coerce(rule.recurrence_type), rule.time)


DEDUP_KEYS: Dict[str, DedupKey] = {
    "exact": exact_key,
    "recurrence": recurrence_key,
}


def get_dedup_key(name: str) -> DedupKey:
    """Look up a key function by its config name, defaulting to the exact key."""
    return DEDUP_KEYS.get(name, exact_key)


def remove_duplicates(rules: Iterable[Optional[ReminderRule]],
                      key: DedupKey = exact_key) -> List[ReminderRule]:
    """Drop later duplicates; the first rule in input order wins."""
    seen = set()
    unique: List[ReminderRule] = []
    for rule in rules:
        if rule is None:
            continue
        k = key(rule)
        if k in seen:
            continue
        seen.add(k)
        unique.append(rule)
    return unique


@dataclass
class DuplicateCluster:
    """Represents a cluster of reminders sharing one dedup key."""
    key: Hashable
    reminders: List[ReminderRule]

    @property
    def description(self) -> str:
        return self.reminders[0].description if self.reminders else ""

    @property
    def anchor_date(self) -> Optional[date]:
        return self.reminders[0].date if self.reminders else None

    @property
    def total_count(self) -> int:
        return len(self.reminders)

    @property
    def has_duplicates(self) -> bool:
        return self.total_count > 1

    @property
    def keeper(self) -> Optional[ReminderRule]:
        """The reminder that survives deduplication (first in input order)."""
        return self.reminders[0] if self.reminders else None

    @property
    def redundant(self) -> List[ReminderRule]:
        return self.reminders[1:]


@dataclass
class DeduplicationResults:
    """Results from deduplication analysis."""
    clusters: List[DuplicateCluster]
    total_reminders: int
    duplicate_reminders: int
    duplicate_clusters: int

    def get_duplicate_clusters(self) -> List[DuplicateCluster]:
        """Get only clusters that have duplicates."""
        return [cluster for cluster in self.clusters if cluster.has_duplicates]


class ReminderDeduplicator:
    """Groups a reminder snapshot into duplicate clusters."""

    def __init__(self, key: DedupKey = exact_key, logger: Optional[logging.Logger] = None):
        self.key = key
        self.logger = logger or logging.getLogger(__name__)

    def analyze(self, rules: Iterable[Optional[ReminderRule]]) -> DeduplicationResults:
        """
        Analyze a snapshot for duplicates.

        Deleted and null records are ignored. Clusters keep first-seen
        order, and reminders inside a cluster keep input order.

        Args:
            rules: Reminder snapshot

        Returns:
            DeduplicationResults with every cluster found
        """
        live = [rule for rule in rules if rule is not None and not rule.deleted]
        self.logger.info("Analyzing %d reminders for duplicates", len(live))

        clusters_by_key: "OrderedDict[Hashable, DuplicateCluster]" = OrderedDict()
        for rule in live:
            k = self.key(rule)
            if k not in clusters_by_key:
                clusters_by_key[k] = DuplicateCluster(key=k, reminders=[])
            clusters_by_key[k].reminders.append(rule)

        clusters = list(clusters_by_key.values())
        duplicate_clusters = [c for c in clusters if c.has_duplicates]

        results = DeduplicationResults(
            clusters=clusters,
            total_reminders=len(live),
            duplicate_reminders=sum(c.total_count for c in duplicate_clusters),
            duplicate_clusters=len(duplicate_clusters),
        )

        self.logger.info("Found %d duplicate clusters affecting %d reminders",
                         results.duplicate_clusters, results.duplicate_reminders)
        return results
