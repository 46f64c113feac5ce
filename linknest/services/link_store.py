import asyncio
import logging
from typing import Optional, Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from linknest.exceptions import StorageError
from linknest.models import Link
from linknest.schemas.link import LinkRecord

logger = logging.getLogger(__name__)


class LinkStore(Protocol):
    """Persistent mapping from ``url`` to :class:`LinkRecord`.

    ``url`` is unique: inserting a record whose url is already stored is a
    no-op, not an error. Any other persistence failure raises
    :class:`StorageError`.
    """

    async def exists(self, url: str) -> bool: ...

    async def insert(self, record: LinkRecord) -> None: ...

    async def list_links(self) -> list[LinkRecord]: ...

    async def get(self, link_id: UUID) -> Optional[LinkRecord]: ...


class InMemoryLinkStore:
    """Dict-backed store, used in tests and for running without a database."""

    def __init__(self) -> None:
        self._records: dict[str, LinkRecord] = {}
        self._lock = asyncio.Lock()

    async def exists(self, url: str) -> bool:
        async with self._lock:
            return url in self._records

    async def insert(self, record: LinkRecord) -> None:
        async with self._lock:
            if record.url in self._records:
                logger.info("Link already stored, skipping insert: %s", record.url)
                return
            self._records[record.url] = record

    async def list_links(self) -> list[LinkRecord]:
        async with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    async def get(self, link_id: UUID) -> Optional[LinkRecord]:
        async with self._lock:
            return next((r for r in self._records.values() if r.id == link_id), None)


class SqlAlchemyLinkStore:
    """Store backed by the ``links`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def exists(self, url: str) -> bool:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Link.id).where(Link.url == url).limit(1)
                )
                return result.scalar_one_or_none() is not None
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Could not look up link {url}") from exc

    async def insert(self, record: LinkRecord) -> None:
        link = Link(
            id=record.id,
            url=record.url,
            domain=record.domain,
            title=record.title,
            description=record.description,
            image_url=record.image_url,
            tags=list(record.tags),
            notes=record.notes,
            status=record.status,
            created_at=record.created_at,
        )
        try:
            async with self._session_factory() as session:
                session.add(link)
                await session.commit()
        except IntegrityError as exc:
            # Only a stored row with the same url makes this a no-op
            if not await self.exists(record.url):
                raise StorageError(f"Could not save link {record.url}") from exc
            logger.info("Link already stored, skipping insert: %s", record.url)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Could not save link {record.url}") from exc

    async def list_links(self) -> list[LinkRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Link).order_by(Link.created_at.desc())
                )
                links = result.scalars().all()
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError("Could not list links") from exc
        return [LinkRecord.model_validate(link) for link in links]

    async def get(self, link_id: UUID) -> Optional[LinkRecord]:
        try:
            async with self._session_factory() as session:
                link = await session.get(Link, link_id)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Could not load link {link_id}") from exc
        if link is None:
            return None
        return LinkRecord.model_validate(link)
