from __future__ import annotations

import importlib
import logging
from typing import List, Optional

from .models import (
    AnnotatedSpan,
    AnnotationOptions,
    ClassificationOptions,
    ClassificationResult,
    CodepointSpan,
    ModelHeader,
    SelectionOptions,
)

logger = logging.getLogger(__name__)


class AnnotatorEngine:
    """
    Abstract annotation engine. All spans are in codepoints of `context`.

    Implementations wrap the native annotator; this package never implements
    selection, classification or annotation itself.
    """

    def suggest_selection(
        self, context: str, click_indices: CodepointSpan, options: SelectionOptions
    ) -> CodepointSpan:
        raise NotImplementedError

    def classify_text(
        self, context: str, selection_indices: CodepointSpan, options: ClassificationOptions
    ) -> List[ClassificationResult]:
        raise NotImplementedError

    def annotate(self, context: str, options: AnnotationOptions) -> List[AnnotatedSpan]:
        raise NotImplementedError

    def initialize_knowledge_engine(self, serialized_config: bytes) -> bool:
        """
        Optional knowledge engine. The config is opaque to the bridge.
        """
        return False

    def close(self) -> None:
        return None


class AnnotatorBackend:
    """
    Constructs engines from a mapped model and reads model headers.

    `buffer` is a read-only view into the mapped model file. An engine may keep
    referencing it; the mapping outlives the engine and is released when the
    engine's handle is destroyed.
    """

    def load(self, buffer: memoryview) -> Optional[AnnotatorEngine]:
        raise NotImplementedError

    def view_model(self, buffer: memoryview) -> Optional[ModelHeader]:
        """
        Return the model header, or None if the buffer is not a valid model.
        """
        raise NotImplementedError


def load_backend(import_path: str) -> AnnotatorBackend:
    """
    Resolve a backend from a ``"package.module:attribute"`` path. The attribute
    may be a backend instance, a backend class, or a zero-argument factory.
    """
    module_name, sep, attr = import_path.partition(":")
    if not sep or not module_name or not attr:
        raise ImportError(f"Backend path must look like 'module:attribute', got {import_path!r}")
    module = importlib.import_module(module_name)
    try:
        target = getattr(module, attr)
    except AttributeError as exc:
        raise ImportError(f"Module {module_name!r} has no attribute {attr!r}") from exc

    backend = target if isinstance(target, AnnotatorBackend) else target()
    if not isinstance(backend, AnnotatorBackend):
        raise TypeError(f"{import_path} did not produce an AnnotatorBackend (got {type(backend).__name__})")
    logger.info("Loaded annotator backend %s", import_path)
    return backend
