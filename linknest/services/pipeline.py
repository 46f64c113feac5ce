"""Share intake: turn shared text into a pending link record.

``IntakePipeline.submit`` never raises for expected situations. Every result
is one of the :data:`Outcome` variants and callers are expected to handle
each of them:

- :class:`Saved` - a new record was stored.
- :class:`DuplicateRecent` - the same text was just shared; storage untouched.
- :class:`DuplicateExisting` - the url is already stored.
- :class:`Rejected` - the input was unusable (empty text).
- :class:`Failed` - the store raised :class:`StorageError`; not retried here.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from linknest.exceptions import StorageError
from linknest.schemas.link import (
    DEFAULT_TITLE,
    LOADING_DESCRIPTION,
    LinkRecord,
    LinkStatus,
)
from linknest.services.extractor import derive_domain, extract_url
from linknest.services.link_store import LinkStore
from linknest.services.recent_share import RecentShareDeduplicator, as_utc

logger = logging.getLogger(__name__)

EMPTY_INPUT = "empty"


@dataclass(frozen=True)
class Saved:
    record: LinkRecord


@dataclass(frozen=True)
class DuplicateRecent:
    url: str


@dataclass(frozen=True)
class DuplicateExisting:
    url: str


@dataclass(frozen=True)
class Rejected:
    reason: str


@dataclass(frozen=True)
class Failed:
    error: StorageError


Outcome = Union[Saved, DuplicateRecent, DuplicateExisting, Rejected, Failed]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_record(url: str, now: datetime) -> LinkRecord:
    domain = derive_domain(url)
    return LinkRecord(
        url=url,
        domain=domain,
        title=domain or DEFAULT_TITLE,
        description=LOADING_DESCRIPTION,
        image_url="",
        tags=[],
        notes=None,
        status=LinkStatus.pending,
        created_at=now,
    )


class IntakePipeline:
    def __init__(
        self,
        store: LinkStore,
        recent: RecentShareDeduplicator,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.recent = recent
        self.clock = clock

    async def submit(self, raw_text: str, now: Optional[datetime] = None) -> Outcome:
        if not raw_text or not raw_text.strip():
            return Rejected(EMPTY_INPUT)
        now = as_utc(self.clock() if now is None else now)

        url = extract_url(raw_text)

        # The deduplicator lock is released before any storage call
        if self.recent.claim(url, now):
            logger.debug("Ignoring repeated share: %s", url)
            return DuplicateRecent(url)

        try:
            if await self.store.exists(url):
                logger.debug("Link already saved: %s", url)
                return DuplicateExisting(url)

            record = build_record(url, now)
            await self.store.insert(record)
        except StorageError as exc:
            logger.warning("Failed to save shared link %s: %s", url, exc)
            return Failed(exc)

        logger.info("Saved shared link: %s", url)
        return Saved(record)
