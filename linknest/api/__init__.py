from fastapi import APIRouter

from linknest.api.v1 import events, links, share

api_router = APIRouter(prefix="/api")
api_router.include_router(share.router)
api_router.include_router(links.router)
api_router.include_router(events.router)

__all__ = ["api_router"]
