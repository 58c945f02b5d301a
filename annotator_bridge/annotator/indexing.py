from __future__ import annotations

from typing import Union

from .models import INVALID_SPAN, CodepointSpan, IndexDirection

Text = Union[str, bytes]


def decode_text(text: Text) -> str:
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


def unit_length(text: Text) -> int:
    """
    Length of the text in UTF-16 code units, i.e. what a Java or JavaScript
    caller sees as the string length.
    """
    text = decode_text(text)
    return len(text) + sum(1 for ch in text if ord(ch) > 0xFFFF)


def convert_indices(text: Text, span: CodepointSpan, direction: IndexDirection) -> CodepointSpan:
    """
    Convert a span between UTF-16 code units and codepoints over `text`.

    Walks the codepoints once, keeping a codepoint counter and a code unit
    counter in lock-step. Whenever the source counter equals a requested
    boundary, the target counter is recorded for that boundary. The position
    after the last codepoint is checked too, so spans may end at end-of-text.
    Boundaries that never match (out of range, or inside a surrogate pair)
    come back as -1.
    """
    text = decode_text(text)
    begin, end = span
    result_begin, result_end = INVALID_SPAN
    from_units = direction == IndexDirection.UNITS_TO_CODEPOINTS

    codepoint_index = 0
    unit_index = 0
    for ch in text:
        source, target = (unit_index, codepoint_index) if from_units else (codepoint_index, unit_index)
        if begin == source:
            result_begin = target
        if end == source:
            result_end = target
            if result_begin != -1 or begin < source:
                # Both boundaries are resolved or can no longer match.
                return result_begin, result_end
        codepoint_index += 1
        unit_index += 2 if ord(ch) > 0xFFFF else 1

    source, target = (unit_index, codepoint_index) if from_units else (codepoint_index, unit_index)
    if begin == source:
        result_begin = target
    if end == source:
        result_end = target
    return result_begin, result_end


def units_to_codepoints(text: Text, span: CodepointSpan) -> CodepointSpan:
    return convert_indices(text, span, IndexDirection.UNITS_TO_CODEPOINTS)


def codepoints_to_units(text: Text, span: CodepointSpan) -> CodepointSpan:
    return convert_indices(text, span, IndexDirection.CODEPOINTS_TO_UNITS)
