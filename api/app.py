from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.dependencies import get_bridge
from api.routes.annotators import router as annotators_router
from api.routes.models import router as models_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Release every engine still held by a client that never closed it.
    if get_bridge.cache_info().currsize:
        get_bridge().close()


def create_app() -> FastAPI:
    app = FastAPI(title="Annotator Bridge API", version="0.1.0", lifespan=lifespan)

    app.include_router(annotators_router)
    app.include_router(models_router)

    @app.get("/healthz")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
