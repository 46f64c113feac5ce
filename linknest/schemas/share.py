from typing import Literal, Optional

from pydantic import BaseModel

from linknest.schemas.link import LinkRecord

TEXT_PLAIN = "text/plain"


class ShareIn(BaseModel):
    text: Optional[str] = None
    mime_type: str = TEXT_PLAIN


class ShareResult(BaseModel):
    status: Literal["saved", "duplicate_recent", "already_saved"]
    link: Optional[LinkRecord] = None


class LinkSavedEvent(BaseModel):
    event: Literal["linkSaved"] = "linkSaved"
    url: str
