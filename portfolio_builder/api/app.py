from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from portfolio_builder.api.routes import router
from portfolio_builder.cache.factory import KeyValueStoreFactory
from portfolio_builder.cache.history_store import HistoryStore
from portfolio_builder.config.settings import Settings
from portfolio_builder.logging.logger import Log
from portfolio_builder.processor.processor import Processor, build_history_store, build_processor
from portfolio_builder.storage.factory import StorageProviderFactory
from portfolio_builder.storage.local_adapter import LocalStorageAdapter


def create_app(
    settings: Settings,
    processor: Processor | None = None,
    history_store: HistoryStore | None = None,
) -> FastAPI:
    """Build the API with every backend wired up front.

    Backends are created eagerly so a misconfigured process fails at startup
    rather than on the first request. Pass *processor* and *history_store*
    to supply pre-built components.
    """
    app = FastAPI(
        title="Portfolio Builder API",
        description="Turns resume PDFs into single-page portfolio websites.",
        version="1.0.0",
    )
    storage = None
    if processor is None or history_store is None:
        kv_store = KeyValueStoreFactory.create(settings)
        storage = StorageProviderFactory.create(settings)
        processor = processor or build_processor(settings, kv_store=kv_store, storage=storage)
        history_store = history_store or build_history_store(settings, kv_store)

    app.state.settings = settings
    app.state.processor = processor
    app.state.history_store = history_store
    app.include_router(router)

    if isinstance(storage, LocalStorageAdapter):
        _mount_local_storage(app, storage.base_dir, settings.local_storage_base_url)

    Log.info(f"Portfolio Builder API ready ({settings.app_env})")
    return app


def _mount_local_storage(app: FastAPI, base_dir: Path, base_url: str) -> None:
    base_dir.mkdir(parents=True, exist_ok=True)
    app.mount(base_url.rstrip("/"), StaticFiles(directory=base_dir), name="portfolios")
    Log.info(f"Serving local portfolios from {base_dir} at {base_url}")
