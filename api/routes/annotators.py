from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from annotator_bridge.annotator import INVALID_HANDLE, INVALID_SPAN
from api.dependencies import get_bridge

router = APIRouter(prefix="/annotators", tags=["annotators"])


class CreateAnnotatorRequest(BaseModel):
    path: str


class KnowledgeEngineRequest(BaseModel):
    serialized_config: str  # base64


class SelectionRequest(BaseModel):
    text: str
    begin: int
    end: int
    options: Optional[Dict[str, Any]] = None


class AnnotateRequest(BaseModel):
    text: str
    options: Optional[Dict[str, Any]] = None


def _require_handle(handle: int) -> None:
    if get_bridge().registry.get(handle) is None:
        raise HTTPException(status_code=404, detail=f"Annotator not found: {handle}")


def _encode_results(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    encoded = []
    for result in results:
        item = dict(result)
        if "serialized_knowledge_result" in item:
            item["serialized_knowledge_result"] = base64.b64encode(item["serialized_knowledge_result"]).decode("ascii")
        encoded.append(item)
    return encoded


@router.post("")
def create_annotator(request: CreateAnnotatorRequest):
    handle = get_bridge().new_annotator_from_path(request.path)
    if handle == INVALID_HANDLE:
        raise HTTPException(status_code=422, detail=f"Could not load annotator model: {request.path}")
    return {"handle": handle}


@router.delete("/{handle}")
def close_annotator(handle: int):
    _require_handle(handle)
    get_bridge().close_annotator(handle)
    return {"status": "closed", "handle": handle}


@router.post("/{handle}/knowledge-engine")
def initialize_knowledge_engine(handle: int, request: KnowledgeEngineRequest):
    _require_handle(handle)
    try:
        serialized_config = base64.b64decode(request.serialized_config, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Config is not valid base64: {exc}")
    return {"success": get_bridge().initialize_knowledge_engine(handle, serialized_config)}


@router.post("/{handle}/suggest-selection")
def suggest_selection(handle: int, request: SelectionRequest):
    _require_handle(handle)
    begin, end = get_bridge().suggest_selection(handle, request.text, request.begin, request.end, request.options)
    return {"begin": begin, "end": end, "valid": (begin, end) != INVALID_SPAN}


@router.post("/{handle}/classify")
def classify_text(handle: int, request: SelectionRequest):
    _require_handle(handle)
    results = get_bridge().classify_text(handle, request.text, request.begin, request.end, request.options)
    if results is None:
        raise HTTPException(status_code=422, detail=f"Classification failed for annotator {handle}")
    return {"results": _encode_results(results)}


@router.post("/{handle}/annotate")
def annotate(handle: int, request: AnnotateRequest):
    _require_handle(handle)
    annotations = get_bridge().annotate(handle, request.text, request.options)
    if annotations is None:
        raise HTTPException(status_code=422, detail=f"Annotation failed for annotator {handle}")
    return {
        "annotations": [
            {
                "begin": span["begin"],
                "end": span["end"],
                "classification": _encode_results(span["classification"]),
            }
            for span in annotations
        ]
    }
