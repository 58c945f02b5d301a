from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .config import BridgeConfig
from .engine import load_backend
from .indexing import Text, codepoints_to_units, decode_text, units_to_codepoints
from .models import (
    INVALID_SPAN,
    AssetSource,
    CodepointSpan,
    EngineHandle,
    FileDescriptorSource,
    ModelSource,
    OptionsDefaulting,
    PathSource,
)
from .options import read_annotation_options, read_classification_options, read_selection_options
from .registry import HandleRegistry
from .results import to_boundary_annotations, to_boundary_results

logger = logging.getLogger(__name__)


class AnnotatorBridge:
    """
    Boundary facade over the annotation engine.

    Callers speak UTF-16 code unit offsets; engines speak codepoints. Every
    operation returns a neutral value (INVALID_HANDLE, (-1, -1), False, None,
    empty metadata) instead of raising, whether the handle is invalid, the
    options are unreadable, or the engine fails.
    """

    def __init__(
        self,
        registry: HandleRegistry,
        options_defaulting: OptionsDefaulting = OptionsDefaulting.ALL_OR_NOTHING,
    ):
        self.registry = registry
        self.options_defaulting = options_defaulting

    @classmethod
    def from_config(cls, config: BridgeConfig) -> "AnnotatorBridge":
        if not config.backend:
            raise ValueError("ANNOTATOR_BACKEND must name an annotator backend ('module:attribute')")
        backend = load_backend(config.backend)
        return cls(HandleRegistry(backend), options_defaulting=config.options_defaulting)

    # Lifecycle
    def new_annotator(self, source: ModelSource) -> EngineHandle:
        return self.registry.create(source)

    def new_annotator_from_fd(self, fd: int) -> EngineHandle:
        return self.new_annotator(FileDescriptorSource(fd))

    def new_annotator_from_path(self, path: str) -> EngineHandle:
        return self.new_annotator(PathSource(str(path)))

    def new_annotator_from_asset(self, fd: int, offset: int, length: int) -> EngineHandle:
        return self.new_annotator(AssetSource(fd, offset, length))

    def close_annotator(self, handle: EngineHandle) -> None:
        self.registry.destroy(handle)

    # Engine operations
    def initialize_knowledge_engine(self, handle: EngineHandle, serialized_config: bytes) -> bool:
        engine = self.registry.get(handle)
        if engine is None:
            return False
        try:
            return bool(engine.initialize_knowledge_engine(bytes(serialized_config)))
        except Exception:  # noqa: BLE001
            logger.exception("Knowledge engine initialization failed for handle %s", handle)
            return False

    def suggest_selection(
        self,
        handle: EngineHandle,
        text: Text,
        selection_begin: int,
        selection_end: int,
        options: Any = None,
    ) -> CodepointSpan:
        engine = self.registry.get(handle)
        if engine is None:
            return INVALID_SPAN
        context = decode_text(text)
        input_indices = units_to_codepoints(context, (selection_begin, selection_end))
        try:
            selection = engine.suggest_selection(
                context, input_indices, read_selection_options(options, self.options_defaulting)
            )
            return codepoints_to_units(context, tuple(selection))
        except Exception:  # noqa: BLE001
            logger.exception("suggest_selection failed for handle %s", handle)
            return INVALID_SPAN

    def classify_text(
        self,
        handle: EngineHandle,
        text: Text,
        selection_begin: int,
        selection_end: int,
        options: Any = None,
    ) -> Optional[List[Dict[str, Any]]]:
        engine = self.registry.get(handle)
        if engine is None:
            return None
        context = decode_text(text)
        input_indices = units_to_codepoints(context, (selection_begin, selection_end))
        try:
            results = engine.classify_text(
                context, input_indices, read_classification_options(options, self.options_defaulting)
            )
            return to_boundary_results(results or [])
        except Exception:  # noqa: BLE001
            logger.exception("classify_text failed for handle %s", handle)
            return None

    def annotate(self, handle: EngineHandle, text: Text, options: Any = None) -> Optional[List[Dict[str, Any]]]:
        engine = self.registry.get(handle)
        if engine is None:
            return None
        context = decode_text(text)
        try:
            annotations = engine.annotate(context, read_annotation_options(options, self.options_defaulting))
            return to_boundary_annotations(annotations or [], context)
        except Exception:  # noqa: BLE001
            logger.exception("annotate failed for handle %s", handle)
            return None

    # Model metadata
    def get_locales(self, source: ModelSource) -> str:
        return self.registry.metadata(source).locales

    def get_version(self, source: ModelSource) -> int:
        return self.registry.metadata(source).version

    def get_name(self, source: ModelSource) -> str:
        return self.registry.metadata(source).name

    def get_language(self, source: ModelSource) -> str:
        logger.warning("Using deprecated get_language(); use get_locales()")
        return self.get_locales(source)

    def close(self) -> None:
        self.registry.close_all()
