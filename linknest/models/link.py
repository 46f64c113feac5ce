from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column

from linknest.models.base import Base
from linknest.schemas.link import LinkStatus


class Link(Base):
    __tablename__ = "links"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    url: Mapped[str] = mapped_column(unique=True, index=True)
    domain: Mapped[str] = mapped_column(default="")
    title: Mapped[str]
    description: Mapped[str]
    image_url: Mapped[str] = mapped_column(default="")
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    notes: Mapped[Optional[str]]
    status: Mapped[LinkStatus] = mapped_column(
        Enum(LinkStatus, name="link_status"), default=LinkStatus.pending
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
