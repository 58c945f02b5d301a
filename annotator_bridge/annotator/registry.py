from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from .engine import AnnotatorBackend, AnnotatorEngine
from .models import INVALID_HANDLE, EngineHandle, ModelHeader, ModelSource
from .storage import MappedModel

logger = logging.getLogger(__name__)

_SLOT_BITS = 32
_SLOT_MASK = (1 << _SLOT_BITS) - 1


@dataclass
class _Slot:
    generation: int = 0
    engine: Optional[AnnotatorEngine] = None
    mapping: Optional[MappedModel] = None


class HandleRegistry:
    """
    Owns engine instances behind generation-tagged integer handles.

    A handle packs ``generation << 32 | slot + 1``, so 0 is never a live
    handle. Destroying a handle bumps its slot's generation; later lookups or
    destroys with the old handle are rejected rather than reaching a freed or
    reused engine. The lock only protects the slot table; engine calls made
    with a looked-up engine are not serialized.
    """

    def __init__(self, backend: AnnotatorBackend):
        self.backend = backend
        self._slots: List[_Slot] = []
        self._free: List[int] = []
        self._lock = threading.Lock()

    def create(self, source: ModelSource) -> EngineHandle:
        mapping = MappedModel(source)
        if not mapping.ok:
            return INVALID_HANDLE
        try:
            engine = self.backend.load(mapping.buffer)
        except Exception:  # noqa: BLE001
            logger.exception("Backend failed to load model from %s", source)
            engine = None
        if engine is None:
            mapping.close()
            return INVALID_HANDLE

        with self._lock:
            if self._free:
                index = self._free.pop()
                slot = self._slots[index]
            else:
                index = len(self._slots)
                slot = _Slot(generation=1)
                self._slots.append(slot)
            slot.engine = engine
            slot.mapping = mapping
            handle = (slot.generation << _SLOT_BITS) | (index + 1)
        logger.info("Created annotator handle %s from %s", handle, source)
        return handle

    def _resolve(self, handle: EngineHandle) -> Optional[_Slot]:
        if not isinstance(handle, int) or handle <= 0:
            return None
        index = (handle & _SLOT_MASK) - 1
        generation = handle >> _SLOT_BITS
        if index < 0 or index >= len(self._slots):
            return None
        slot = self._slots[index]
        if slot.generation != generation or slot.engine is None:
            return None
        return slot

    def get(self, handle: EngineHandle) -> Optional[AnnotatorEngine]:
        with self._lock:
            slot = self._resolve(handle)
            engine = slot.engine if slot else None
        if engine is None:
            logger.debug("Rejected unknown or stale annotator handle %s", handle)
        return engine

    def destroy(self, handle: EngineHandle) -> bool:
        with self._lock:
            slot = self._resolve(handle)
            if slot is None:
                logger.debug("Ignoring destroy of unknown or stale annotator handle %s", handle)
                return False
            engine, mapping = slot.engine, slot.mapping
            slot.engine = None
            slot.mapping = None
            slot.generation += 1
            self._free.append((handle & _SLOT_MASK) - 1)

        try:
            engine.close()
        except Exception:  # noqa: BLE001
            logger.exception("Engine for handle %s failed to close cleanly", handle)
        finally:
            mapping.close()
        logger.info("Destroyed annotator handle %s", handle)
        return True

    def close_all(self) -> None:
        with self._lock:
            live = [
                (slot.generation << _SLOT_BITS) | (index + 1)
                for index, slot in enumerate(self._slots)
                if slot.engine is not None
            ]
        for handle in live:
            self.destroy(handle)

    def metadata(self, source: ModelSource) -> ModelHeader:
        """
        Read the model header without constructing an engine.
        """
        with MappedModel(source) as mapping:
            if not mapping.ok:
                return ModelHeader()
            try:
                header = self.backend.view_model(mapping.buffer)
            except Exception:  # noqa: BLE001
                logger.exception("Backend failed to read model header from %s", source)
                header = None
        if header is None:
            return ModelHeader()
        # Models may omit the optional header fields.
        return ModelHeader(locales=header.locales or "", version=header.version or 0, name=header.name or "")

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for slot in self._slots if slot.engine is not None)
