from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from linknest.api import api_router
from linknest.config import settings
from linknest.database import dispose_engine, get_session_factory, init_db
from linknest.services.events import LinkEventBroadcaster
from linknest.services.link_store import SqlAlchemyLinkStore
from linknest.services.pipeline import IntakePipeline
from linknest.services.recent_share import RecentShareDeduplicator
from linknest.utils.logger import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    configure_logging(settings.log_level)
    await init_db()
    app.state.pipeline = IntakePipeline(
        store=SqlAlchemyLinkStore(get_session_factory()),
        recent=RecentShareDeduplicator(
            window=timedelta(milliseconds=settings.recent_share_window_ms)
        ),
    )
    app.state.events = LinkEventBroadcaster(queue_size=settings.event_queue_size)
    yield
    # Shutdown
    await dispose_engine()


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router)


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok", "app": settings.app_name}
