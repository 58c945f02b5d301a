"""
Reading caller-supplied option values into option records.

The caller may pass options as an object exposing typed getters, a mapping
(e.g. a decoded JSON body), or a plain object with attributes. The value is
resolved once into an `OptionsProvider` and every field is then read through
its getters. By default any unreadable field discards the whole record.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Protocol, Tuple, Type

from .models import (
    AnnotationOptions,
    ClassificationOptions,
    OptionsDefaulting,
    OptionsKind,
    OptionsRecord,
    SelectionOptions,
)

logger = logging.getLogger(__name__)

_RECORD_TYPES = {
    OptionsKind.SELECTION: SelectionOptions,
    OptionsKind.CLASSIFICATION: ClassificationOptions,
    OptionsKind.ANNOTATION: AnnotationOptions,
}


class OptionsProvider(Protocol):
    def get_locales(self) -> str:
        ...

    def get_reference_timezone(self) -> str:
        ...

    def get_reference_time_ms_utc(self) -> int:
        ...


class _MappingProvider:
    def __init__(self, values: Mapping[str, Any]):
        self.values = values

    def get_locales(self) -> str:
        if "locales" in self.values:
            return self.values["locales"]
        return self.values["locale"]

    def get_reference_timezone(self) -> str:
        return self.values["reference_timezone"]

    def get_reference_time_ms_utc(self) -> int:
        return self.values["reference_time_ms_utc"]


class _AttributeProvider:
    def __init__(self, obj: Any):
        self.obj = obj

    def get_locales(self) -> str:
        try:
            return self.obj.locales
        except AttributeError:
            return self.obj.locale

    def get_reference_timezone(self) -> str:
        return self.obj.reference_timezone

    def get_reference_time_ms_utc(self) -> int:
        return self.obj.reference_time_ms_utc


def as_provider(value: Any) -> OptionsProvider:
    # Getter-style objects may implement only the getters their kind needs.
    if callable(getattr(value, "get_locales", None)):
        return value
    if isinstance(value, Mapping):
        return _MappingProvider(value)
    return _AttributeProvider(value)


def _read_str(getter: Callable[[], Any]) -> Tuple[bool, str]:
    value = getter()
    if value is None:
        return True, ""
    if isinstance(value, str):
        return True, value
    return False, ""


def _read_int(getter: Callable[[], Any]) -> Tuple[bool, int]:
    value = getter()
    if isinstance(value, int) and not isinstance(value, bool):
        return True, value
    return False, 0


def _read_field(provider: OptionsProvider, name: str, reader: Callable) -> Tuple[bool, Any]:
    try:
        getter = getattr(provider, f"get_{name}")
        return reader(getter)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Could not read option %s: %r", name, exc)
        return False, None


def read_options(
    value: Any,
    kind: OptionsKind,
    defaulting: OptionsDefaulting = OptionsDefaulting.ALL_OR_NOTHING,
) -> OptionsRecord:
    record_type: Type = _RECORD_TYPES[OptionsKind(kind)]
    if value is None:
        return record_type()

    provider = as_provider(value)
    fields = [("locales", _read_str)]
    if record_type is not SelectionOptions:
        fields += [("reference_timezone", _read_str), ("reference_time_ms_utc", _read_int)]

    values = {}
    for name, reader in fields:
        ok, field_value = _read_field(provider, name, reader)
        if ok:
            values[name] = field_value
        elif defaulting == OptionsDefaulting.ALL_OR_NOTHING:
            logger.debug("Discarding %s options: field %s unreadable", kind, name)
            return record_type()
    return record_type(**values)


def read_selection_options(
    value: Any, defaulting: OptionsDefaulting = OptionsDefaulting.ALL_OR_NOTHING
) -> SelectionOptions:
    return read_options(value, OptionsKind.SELECTION, defaulting)


def read_classification_options(
    value: Any, defaulting: OptionsDefaulting = OptionsDefaulting.ALL_OR_NOTHING
) -> ClassificationOptions:
    return read_options(value, OptionsKind.CLASSIFICATION, defaulting)


def read_annotation_options(
    value: Any, defaulting: OptionsDefaulting = OptionsDefaulting.ALL_OR_NOTHING
) -> AnnotationOptions:
    return read_options(value, OptionsKind.ANNOTATION, defaulting)
