"""Shared, read-only byte strings that can cheaply discard bytes from the front."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Union

BytesLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode()
    return bytes(data)


class Buffer:
    """A read-only byte string whose storage is shared between copies.

    Discarding a prefix only moves an offset; the storage is released once
    everything has been discarded.
    """

    __slots__ = ("_storage", "_offset")

    def __init__(self, data: BytesLike = b"") -> None:
        self._storage: bytes | None = _as_bytes(data)
        self._offset = 0

    def _clone(self) -> Buffer:
        twin = Buffer.__new__(Buffer)
        twin._storage = self._storage
        twin._offset = self._offset
        return twin

    def view(self) -> memoryview:
        """A zero-copy view of the remaining bytes."""
        if self._storage is None:
            return memoryview(b"")
        return memoryview(self._storage)[self._offset :]

    def __bytes__(self) -> bytes:
        return bytes(self.view())

    def __len__(self) -> int:
        if self._storage is None:
            return 0
        return len(self._storage) - self._offset

    def __getitem__(self, index: int | slice) -> int | bytes:
        if isinstance(index, slice):
            return bytes(self.view()[index])
        return self.view()[index]

    def __repr__(self) -> str:
        return f"Buffer({bytes(self)!r})"

    def copy(self) -> bytes:
        """Return the remaining bytes as a new bytes object."""
        return bytes(self)

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes."""
        if n < 0 or n > len(self):
            raise IndexError("Buffer.remove_prefix")
        self._offset += n
        if self._storage is not None and self._offset == len(self._storage):
            self._storage = None
            self._offset = 0


class BufferList:
    """A discontiguous byte string made of a queue of Buffers."""

    __slots__ = ("_buffers",)

    def __init__(self, data: Buffer | BytesLike | None = None) -> None:
        self._buffers: deque[Buffer] = deque()
        if data is None:
            return
        if isinstance(data, Buffer):
            self._buffers.append(data._clone())
        else:
            self._buffers.append(Buffer(data))

    def buffers(self) -> tuple[Buffer, ...]:
        """The underlying Buffers, front first."""
        return tuple(self._buffers)

    def append(self, other: BufferList | Buffer | BytesLike) -> None:
        """Append the contents of another BufferList (or anything convertible to one)."""
        if not isinstance(other, BufferList):
            other = BufferList(other)
        self._buffers.extend(buf._clone() for buf in other._buffers)

    def to_buffer(self) -> Buffer:
        """Return the contents as a single Buffer; only possible when contiguous."""
        if not self._buffers:
            return Buffer()
        if len(self._buffers) == 1:
            return self._buffers[0]._clone()
        raise ValueError(
            "BufferList: please use concatenate() to combine a multi-Buffer BufferList into one Buffer"
        )

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes, dropping Buffers that become empty."""
        if n < 0:
            raise IndexError("BufferList.remove_prefix")
        while n > 0:
            if not self._buffers:
                raise IndexError("BufferList.remove_prefix")
            front = self._buffers[0]
            if n < len(front):
                front.remove_prefix(n)
                n = 0
            else:
                n -= len(front)
                self._buffers.popleft()

    def __len__(self) -> int:
        return sum(len(buf) for buf in self._buffers)

    def concatenate(self) -> bytes:
        """Copy all the bytes into one bytes object."""
        return b"".join(buf.view() for buf in self._buffers)


class BufferViewList:
    """A non-owning view of a discontiguous byte string."""

    __slots__ = ("_views",)

    def __init__(self, data: BufferList | Buffer | BytesLike) -> None:
        self._views: deque[memoryview] = deque()
        if isinstance(data, BufferList):
            self._views.extend(buf.view() for buf in data.buffers())
        elif isinstance(data, Buffer):
            self._views.append(data.view())
        elif isinstance(data, memoryview):
            self._views.append(data.cast("B") if data.format != "B" else data)
        else:
            self._views.append(memoryview(_as_bytes(data)))

    @classmethod
    def _from_views(cls, views: Iterable[memoryview]) -> BufferViewList:
        inst = cls.__new__(cls)
        inst._views = deque(views)
        return inst

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes of the view."""
        if n < 0:
            raise IndexError("BufferViewList.remove_prefix")
        while n > 0:
            if not self._views:
                raise IndexError("BufferViewList.remove_prefix")
            front = self._views[0]
            if n < len(front):
                self._views[0] = front[n:]
                n = 0
            else:
                n -= len(front)
                self._views.popleft()

    def __len__(self) -> int:
        return sum(len(view) for view in self._views)

    def as_iovecs(self) -> list[memoryview]:
        """The views as a list suitable for scatter/gather writes such as os.writev."""
        return list(self._views)