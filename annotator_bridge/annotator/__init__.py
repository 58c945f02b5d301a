"""
Annotator boundary exports.
"""

from .bridge import AnnotatorBridge
from .config import BridgeConfig
from .engine import AnnotatorBackend, AnnotatorEngine, load_backend
from .indexing import codepoints_to_units, convert_indices, unit_length, units_to_codepoints
from .models import (
    INVALID_HANDLE,
    INVALID_SPAN,
    AnnotatedSpan,
    AnnotationOptions,
    AssetSource,
    ClassificationOptions,
    ClassificationResult,
    CodepointSpan,
    DatetimeResult,
    EngineHandle,
    FileDescriptorSource,
    IndexDirection,
    ModelHeader,
    ModelSource,
    OptionsDefaulting,
    OptionsKind,
    PathSource,
    SelectionOptions,
)
from .options import (
    OptionsProvider,
    read_annotation_options,
    read_classification_options,
    read_options,
    read_selection_options,
)
from .registry import HandleRegistry
from .results import to_boundary_annotations, to_boundary_results
from .storage import MappedModel

__all__ = [
    "AnnotatedSpan",
    "AnnotationOptions",
    "AnnotatorBackend",
    "AnnotatorBridge",
    "AnnotatorEngine",
    "AssetSource",
    "BridgeConfig",
    "ClassificationOptions",
    "ClassificationResult",
    "CodepointSpan",
    "DatetimeResult",
    "EngineHandle",
    "FileDescriptorSource",
    "HandleRegistry",
    "INVALID_HANDLE",
    "INVALID_SPAN",
    "IndexDirection",
    "MappedModel",
    "ModelHeader",
    "ModelSource",
    "OptionsDefaulting",
    "OptionsKind",
    "OptionsProvider",
    "PathSource",
    "SelectionOptions",
    "codepoints_to_units",
    "convert_indices",
    "load_backend",
    "read_annotation_options",
    "read_classification_options",
    "read_options",
    "read_selection_options",
    "to_boundary_annotations",
    "to_boundary_results",
    "unit_length",
    "units_to_codepoints",
]
