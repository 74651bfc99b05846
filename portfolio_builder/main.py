import uvicorn

from portfolio_builder.api.app import create_app
from portfolio_builder.config.settings import Settings
from portfolio_builder.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> build dependencies -> serve HTTP."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
