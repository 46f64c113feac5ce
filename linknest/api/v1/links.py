from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from linknest.api.deps import get_link_store
from linknest.exceptions import StorageError
from linknest.schemas import LinkRecord
from linknest.services.link_store import LinkStore

router = APIRouter(prefix="/links", tags=["links"])


@router.get("", response_model=list[LinkRecord])
async def list_links(
    store: Annotated[LinkStore, Depends(get_link_store)],
) -> list[LinkRecord]:
    """List all saved links, newest first."""
    try:
        return await store.list_links()
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not read links",
        )


@router.get("/{link_id}", response_model=LinkRecord)
async def get_link(
    link_id: UUID,
    store: Annotated[LinkStore, Depends(get_link_store)],
) -> LinkRecord:
    """Get a specific link by ID."""
    try:
        link = await store.get(link_id)
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not read links",
        )
    if not link:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Link not found"
        )
    return link
