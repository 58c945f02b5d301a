from __future__ import annotations

from fastapi import APIRouter

from annotator_bridge.annotator import PathSource
from api.dependencies import get_bridge

router = APIRouter(prefix="/models", tags=["models"])


@router.get("/metadata")
def get_model_metadata(path: str):
    header = get_bridge().registry.metadata(PathSource(path))
    return {"locales": header.locales, "version": header.version, "name": header.name}
