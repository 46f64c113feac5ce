from linknest.schemas.link import LinkRecord, LinkStatus
from linknest.schemas.share import LinkSavedEvent, ShareIn, ShareResult

__all__ = [
    "LinkRecord",
    "LinkSavedEvent",
    "LinkStatus",
    "ShareIn",
    "ShareResult",
]
