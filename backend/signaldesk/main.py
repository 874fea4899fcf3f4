from fastapi import FastAPI

from signaldesk.api.errors import register_error_handlers
from signaldesk.api.routes import router
from signaldesk.config.settings import Settings, get_settings, settings
from signaldesk.logging import configure_logging


def create_app(config: Settings | None = None) -> FastAPI:
    app = FastAPI(title="signaldesk")
    if config is not None:
        app.dependency_overrides[get_settings] = lambda: config
    config = config or settings
    configure_logging(config.log_level)

    register_error_handlers(app)
    app.include_router(router, prefix=config.api_prefix)
    return app


app = create_app()
