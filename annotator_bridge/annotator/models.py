from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

# Half-open [begin, end). Either boundary may be -1 when it has no
# counterpart in the other index space.
CodepointSpan = Tuple[int, int]

INVALID_SPAN: CodepointSpan = (-1, -1)

EngineHandle = int

INVALID_HANDLE: EngineHandle = 0


class IndexDirection(str, Enum):
    UNITS_TO_CODEPOINTS = "units_to_codepoints"
    CODEPOINTS_TO_UNITS = "codepoints_to_units"


class OptionsKind(str, Enum):
    SELECTION = "selection"
    CLASSIFICATION = "classification"
    ANNOTATION = "annotation"


class OptionsDefaulting(str, Enum):
    ALL_OR_NOTHING = "all_or_nothing"
    PER_FIELD = "per_field"


@dataclass
class DatetimeResult:
    time_ms_utc: int
    granularity: int


@dataclass
class ClassificationResult:
    collection: str
    score: float
    datetime_parse_result: Optional[DatetimeResult] = None
    serialized_knowledge_result: bytes = b""


@dataclass
class AnnotatedSpan:
    span: CodepointSpan
    classification: List[ClassificationResult] = field(default_factory=list)


@dataclass
class SelectionOptions:
    locales: str = ""


@dataclass
class ClassificationOptions:
    locales: str = ""
    reference_timezone: str = ""
    reference_time_ms_utc: int = 0


@dataclass
class AnnotationOptions:
    locales: str = ""
    reference_timezone: str = ""
    reference_time_ms_utc: int = 0


OptionsRecord = Union[SelectionOptions, ClassificationOptions, AnnotationOptions]


@dataclass(frozen=True)
class FileDescriptorSource:
    fd: int


@dataclass(frozen=True)
class PathSource:
    path: str


@dataclass(frozen=True)
class AssetSource:
    """
    A model embedded in a larger file, e.g. an asset inside an archive.
    """

    fd: int
    offset: int
    length: int


ModelSource = Union[FileDescriptorSource, PathSource, AssetSource]


@dataclass
class ModelHeader:
    locales: str = ""
    version: int = 0
    name: str = ""
