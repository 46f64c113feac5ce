from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TITLE = "Untitled"
LOADING_DESCRIPTION = "Loading..."


class LinkStatus(str, Enum):
    pending = "pending"
    resolved = "resolved"
    failed = "failed"


class LinkRecord(BaseModel):
    """A saved link. Created ``pending``; enrichment fills in the rest later."""

    id: UUID = Field(default_factory=uuid4)
    url: str
    domain: str = ""
    title: str = DEFAULT_TITLE
    description: str = LOADING_DESCRIPTION
    image_url: str = ""
    tags: list[str] = Field(default_factory=list)
    notes: Optional[str] = None
    status: LinkStatus = LinkStatus.pending
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
