from fastapi import Request

from portfolio_builder.cache.history_store import HistoryStore
from portfolio_builder.config.settings import Settings
from portfolio_builder.processor.processor import Processor

DEFAULT_CLIENT_ID = "127.0.0.1"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_processor(request: Request) -> Processor:
    return request.app.state.processor


def get_history_store(request: Request) -> HistoryStore:
    return request.app.state.history_store


def get_client_id(request: Request) -> str:
    """Identify the caller by network address.

    X-Forwarded-For is only honoured when the app sits behind a trusted proxy.
    """
    settings: Settings = request.app.state.settings
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return DEFAULT_CLIENT_ID
