"""Starlette application entry point serving the static asset root."""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from starlette.applications import Starlette
from starlette.routing import Route

from staticserve.config import Settings, settings as default_settings
from staticserve.responder import StaticAssetResponder

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Starlette:
    """Build the application around an explicit settings object."""
    settings = settings or default_settings
    responder = StaticAssetResponder(settings)

    @asynccontextmanager
    async def lifespan(app: Starlette):
        """Report the served root on startup."""
        root = responder.root
        if not os.path.isdir(root):
            logger.warning(f"Root directory {root} does not exist; every request will 404")
        elif not os.path.isfile(os.path.join(root, settings.DEFAULT_DOCUMENT)):
            logger.warning(f"No {settings.DEFAULT_DOCUMENT} in {root}; '/' will 404")
        logger.info(f"Serving {root} on http://{settings.HOST}:{settings.PORT}")
        yield

    app = Starlette(
        routes=[Route("/{path:path}", responder)],
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.responder = responder
    return app


app = create_app()


def run():
    """Console entry point: serve the default app under uvicorn."""
    logging.basicConfig(
        level=default_settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    run()
