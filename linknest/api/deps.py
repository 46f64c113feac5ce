from fastapi.requests import HTTPConnection

from linknest.services.events import LinkEventBroadcaster
from linknest.services.link_store import LinkStore
from linknest.services.pipeline import IntakePipeline


def get_pipeline(conn: HTTPConnection) -> IntakePipeline:
    return conn.app.state.pipeline


def get_link_store(conn: HTTPConnection) -> LinkStore:
    return conn.app.state.pipeline.store


def get_events(conn: HTTPConnection) -> LinkEventBroadcaster:
    return conn.app.state.events
