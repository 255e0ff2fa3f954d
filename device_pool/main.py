from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from device_pool import __version__
from device_pool.api import create_api_router
from device_pool.core.config import Settings, get_settings
from device_pool.core.container import build_container
from device_pool.core.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.container
    await container.create_tables()
    yield
    await container.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Shared device pool: registration, checkout and feedback",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = build_container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
