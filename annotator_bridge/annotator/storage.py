from __future__ import annotations

import logging
import mmap
import os
from typing import Optional

from .models import AssetSource, FileDescriptorSource, ModelSource, PathSource

logger = logging.getLogger(__name__)


class MappedModel:
    """
    Read-only memory mapping of a model source.

    File descriptors handed in by the caller stay owned by the caller; only
    descriptors opened here for a `PathSource` are closed on `close()`.
    Failures to open or map leave the instance in a not-ok state instead of
    raising, mirroring how metadata readers treat unreadable models.
    """

    def __init__(self, source: ModelSource):
        self.source = source
        self._mmap: Optional[mmap.mmap] = None
        self._view: Optional[memoryview] = None
        self._start = 0
        self._length = 0
        try:
            self._map(source)
        except (OSError, OverflowError, TypeError, ValueError) as exc:
            logger.warning("Could not map model source %s: %s", source, exc)
            self.close()

    def _map(self, source: ModelSource) -> None:
        if isinstance(source, PathSource):
            fd = os.open(source.path, os.O_RDONLY)
            try:
                self._map_fd(fd, 0, None)
            finally:
                # The mapping keeps its own reference to the file.
                os.close(fd)
        elif isinstance(source, FileDescriptorSource):
            self._map_fd(source.fd, 0, None)
        elif isinstance(source, AssetSource):
            self._map_fd(source.fd, source.offset, source.length)
        else:
            raise ValueError(f"Unsupported model source: {source!r}")

    def _map_fd(self, fd: int, offset: int, length: Optional[int]) -> None:
        file_size = os.fstat(fd).st_size
        if length is None:
            length = file_size - offset
        if offset < 0 or length <= 0 or offset + length > file_size:
            raise ValueError(f"Region offset={offset} length={length} outside file of size {file_size}")

        # mmap offsets must be multiples of the allocation granularity.
        aligned_offset = offset - offset % mmap.ALLOCATIONGRANULARITY
        self._start = offset - aligned_offset
        self._length = length
        self._mmap = mmap.mmap(
            fd,
            self._start + length,
            access=mmap.ACCESS_READ,
            offset=aligned_offset,
        )

    @property
    def ok(self) -> bool:
        return self._mmap is not None

    @property
    def buffer(self) -> memoryview:
        if self._mmap is None:
            raise ValueError("Model source is not mapped")
        if self._view is None:
            self._view = memoryview(self._mmap)[self._start : self._start + self._length]
        return self._view

    def __len__(self) -> int:
        return self._length if self.ok else 0

    def close(self) -> None:
        try:
            if self._view is not None:
                self._view.release()
            if self._mmap is not None:
                self._mmap.close()
        except BufferError:
            # An engine still holds a view into the mapping; the region is
            # unmapped together with the last reference.
            logger.debug("Mapping for %s still exported; deferring unmap", self.source)
        self._view = None
        self._mmap = None

    def __enter__(self) -> "MappedModel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
