"""Reference-counted handles to kernel file descriptors."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .buffer import Buffer, BufferList, BufferViewList

_MAX_READ = 1024 * 1024


@dataclass(eq=False)
class _FDState:
    """A kernel file descriptor shared by every duplicate of a FileDescriptor."""

    fd: int
    eof: bool = False
    closed: bool = False
    read_count: int = 0
    write_count: int = 0

    def close(self) -> None:
        os.close(self.fd)
        self.eof = self.closed = True

    def __del__(self) -> None:
        if not self.closed:
            try:
                self.close()
            except OSError:
                pass


class FileDescriptor:
    """A handle on a file descriptor that tracks EOF and read/write counts.

    Duplicates made with :meth:`duplicate` share the same descriptor, which is
    closed when the last of them is garbage collected or on :meth:`close`.
    """

    __slots__ = ("_state",)

    def __init__(self, fd: int) -> None:
        if fd < 0:
            raise ValueError(f"invalid fd number:{fd}")
        self._state = _FDState(fd)

    def duplicate(self) -> FileDescriptor:
        """Return another handle sharing this descriptor."""
        twin = FileDescriptor.__new__(FileDescriptor)
        twin._state = self._state
        return twin

    def read(self, limit: int | None = None) -> bytes:
        """Read up to ``limit`` bytes (at most 1 MiB per call); fewer may be returned."""
        size = _MAX_READ if limit is None else min(_MAX_READ, limit)
        if size < 0:
            raise ValueError(f"negative read limit: {limit}")
        data = os.read(self._state.fd, size)
        if size > 0 and not data:
            self._state.eof = True
        if len(data) > size:
            raise RuntimeError("read() read more than requested")
        self._state.read_count += 1
        return data

    def write(
        self,
        data: BufferViewList | BufferList | Buffer | bytes | bytearray | memoryview | str,
        write_all: bool = True,
    ) -> int:
        """Write ``data``; with ``write_all`` keep writing until all of it is written.

        Returns the number of bytes written.
        """
        views = data if isinstance(data, BufferViewList) else BufferViewList(data)
        views = BufferViewList._from_views(views.as_iovecs())
        total = 0
        while True:
            iovecs = views.as_iovecs()
            if iovecs:
                written = os.writev(self._state.fd, iovecs)
            else:
                written = os.write(self._state.fd, b"")
            remaining = len(views)
            if written == 0 and remaining != 0:
                raise RuntimeError("write returned 0 given non-empty input buffer")
            if written > remaining:
                raise RuntimeError("write wrote more than length of input buffer")
            self._state.write_count += 1
            views.remove_prefix(written)
            total += written
            if not (write_all and len(views)):
                return total

    def close(self) -> None:
        """Close the underlying descriptor."""
        self._state.close()

    def set_blocking(self, blocking_state: bool) -> None:
        """Make the descriptor blocking (True) or non-blocking (False)."""
        os.set_blocking(self._state.fd, blocking_state)

    def fd_num(self) -> int:
        """The descriptor number."""
        return self._state.fd

    def fileno(self) -> int:
        """The descriptor number, for APIs that accept file-like objects."""
        return self._state.fd

    def eof(self) -> bool:
        """Whether a read has reached end of file."""
        return self._state.eof

    def closed(self) -> bool:
        """Whether the descriptor has been closed."""
        return self._state.closed

    def read_count(self) -> int:
        """Number of reads made on this descriptor."""
        return self._state.read_count

    def write_count(self) -> int:
        """Number of writes made on this descriptor."""
        return self._state.write_count

    def __enter__(self) -> FileDescriptor:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._state.closed:
            self.close()

    def __repr__(self) -> str:
        return f"FileDescriptor({self._state.fd})"