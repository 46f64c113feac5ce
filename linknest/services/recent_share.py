import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

DEFAULT_WINDOW = timedelta(milliseconds=2000)


def as_utc(moment: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class RecentShare:
    text: str
    observed_at: datetime


class RecentShareDeduplicator:
    """Remembers the last accepted share to drop bursts of the same text.

    Share surfaces sometimes deliver one share twice in quick succession
    (or the user double-taps). Only the most recent share is kept; a
    candidate is a duplicate when it has the same text and arrives within
    ``window`` of it.
    """

    def __init__(self, window: timedelta = DEFAULT_WINDOW) -> None:
        self.window = window
        self._last: RecentShare | None = None
        self._lock = threading.Lock()

    @property
    def last(self) -> RecentShare | None:
        return self._last

    def is_duplicate(self, candidate: str, now: datetime) -> bool:
        with self._lock:
            return self._matches(candidate, now)

    def record(self, candidate: str, now: datetime) -> None:
        with self._lock:
            self._last = RecentShare(candidate, as_utc(now))

    def claim(self, candidate: str, now: datetime) -> bool:
        """Check and record in one step.

        Returns ``False`` (and records ``candidate``) if the candidate is new,
        ``True`` if it duplicates the last share, in which case nothing changes.
        """
        with self._lock:
            if self._matches(candidate, now):
                return True
            self._last = RecentShare(candidate, as_utc(now))
            return False

    def _matches(self, candidate: str, now: datetime) -> bool:
        last = self._last
        if last is None or last.text != candidate:
            return False
        return as_utc(now) - last.observed_at <= self.window
