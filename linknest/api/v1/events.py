import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from linknest.api.deps import get_events
from linknest.services.events import LinkEventBroadcaster

router = APIRouter(tags=["events"])


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    # Incoming messages are ignored; only the disconnect matters
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/events")
async def link_events(
    websocket: WebSocket,
    events: Annotated[LinkEventBroadcaster, Depends(get_events)],
) -> None:
    """Push a ``linkSaved`` message for every newly saved link."""
    # Subscribed before the handshake completes
    async with events.subscribe() as queue:
        await websocket.accept()
        disconnected = asyncio.create_task(_wait_for_disconnect(websocket))
        next_event: asyncio.Task | None = None
        try:
            while True:
                next_event = asyncio.create_task(queue.get())
                done, _ = await asyncio.wait(
                    {next_event, disconnected}, return_when=asyncio.FIRST_COMPLETED
                )
                if disconnected in done:
                    return
                await websocket.send_json(next_event.result().model_dump())
        except WebSocketDisconnect:
            pass
        finally:
            disconnected.cancel()
            if next_event is not None:
                next_event.cancel()
