from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .indexing import Text, codepoints_to_units
from .models import AnnotatedSpan, ClassificationResult


def to_boundary_result(result: ClassificationResult) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "collection": result.collection,
        "score": float(result.score),
    }
    # Optional parts are omitted, never zero-filled.
    if result.datetime_parse_result is not None:
        record["datetime"] = {
            "time_ms_utc": result.datetime_parse_result.time_ms_utc,
            "granularity": result.datetime_parse_result.granularity,
        }
    if result.serialized_knowledge_result:
        record["serialized_knowledge_result"] = bytes(result.serialized_knowledge_result)
    return record


def to_boundary_results(results: Sequence[ClassificationResult]) -> List[Dict[str, Any]]:
    """
    Convert engine classification results into plain dicts, keeping the
    engine's ranking order.
    """
    return [to_boundary_result(result) for result in results]


def to_boundary_annotations(spans: Sequence[AnnotatedSpan], original_text: Text) -> List[Dict[str, Any]]:
    """
    Convert annotated spans into plain dicts with begin/end in UTF-16 code
    units of `original_text`.
    """
    records: List[Dict[str, Any]] = []
    for annotated in spans:
        begin, end = codepoints_to_units(original_text, annotated.span)
        records.append(
            {
                "begin": begin,
                "end": end,
                "classification": to_boundary_results(annotated.classification),
            }
        )
    return records
