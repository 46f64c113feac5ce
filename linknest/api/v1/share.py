from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from linknest.api.deps import get_events, get_pipeline
from linknest.schemas import LinkSavedEvent, ShareIn, ShareResult
from linknest.schemas.share import TEXT_PLAIN
from linknest.services.events import LinkEventBroadcaster
from linknest.services.pipeline import (
    DuplicateExisting,
    DuplicateRecent,
    Failed,
    IntakePipeline,
    Rejected,
    Saved,
)

router = APIRouter(prefix="/share", tags=["share"])


@router.post("", response_model=ShareResult, status_code=status.HTTP_201_CREATED)
async def share_link(
    payload: ShareIn,
    response: Response,
    pipeline: Annotated[IntakePipeline, Depends(get_pipeline)],
    events: Annotated[LinkEventBroadcaster, Depends(get_events)],
) -> ShareResult:
    """Save a link shared from another application."""
    if payload.mime_type != TEXT_PLAIN:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Only {TEXT_PLAIN} shares are supported",
        )
    if payload.text is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No shared text"
        )

    outcome = await pipeline.submit(payload.text)

    match outcome:
        case Saved(record=record):
            events.publish(LinkSavedEvent(url=record.url))
            return ShareResult(status="saved", link=record)
        case DuplicateRecent():
            response.status_code = status.HTTP_200_OK
            return ShareResult(status="duplicate_recent")
        case DuplicateExisting():
            response.status_code = status.HTTP_200_OK
            return ShareResult(status="already_saved")
        case Rejected(reason=reason):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=reason
            )
        case Failed():
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Could not save link",
            )
    raise AssertionError(f"Unhandled intake outcome: {outcome!r}")
