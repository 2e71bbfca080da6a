import os

import pytest

from spongeutil.buffer import BufferList
from spongeutil.file_descriptor import FileDescriptor


@pytest.fixture
def pipe():
    r, w = os.pipe()
    reader, writer = FileDescriptor(r), FileDescriptor(w)
    yield reader, writer
    for fd in (reader, writer):
        if not fd.closed():
            fd.close()


def test_round_trip(pipe):
    reader, writer = pipe
    assert writer.write(b"hello world") == 11
    assert reader.read() == b"hello world"
    assert writer.write_count() == 1
    assert reader.read_count() == 1


def test_write_str_and_bufferlist(pipe):
    reader, writer = pipe
    bl = BufferList(b"abc")
    bl.append(b"def")
    assert writer.write(bl) == 6
    writer.write("ghi")
    assert reader.read() == b"abcdefghi"


def test_read_limit(pipe):
    reader, writer = pipe
    writer.write(b"abcdef")
    assert reader.read(2) == b"ab"
    assert reader.read(10) == b"cdef"
    assert reader.read_count() == 2


def test_eof_after_writer_closed(pipe):
    reader, writer = pipe
    writer.write(b"x")
    writer.close()
    assert reader.read() == b"x"
    assert not reader.eof()
    assert reader.read() == b""
    assert reader.eof()


def test_zero_limit_does_not_set_eof(pipe):
    reader, writer = pipe
    writer.close()
    assert reader.read(0) == b""
    assert not reader.eof()
    assert reader.read_count() == 1


def test_close_sets_flags(pipe):
    reader, _ = pipe
    reader.close()
    assert reader.closed()
    assert reader.eof()


def test_duplicate_shares_state(pipe):
    reader, writer = pipe
    dup = writer.duplicate()
    dup.write(b"ab")
    assert writer.write_count() == 1
    assert dup.fd_num() == writer.fd_num()
    dup.close()
    assert writer.closed()


def test_duplicate_keeps_descriptor_open():
    r, w = os.pipe()
    writer = FileDescriptor(w)
    dup = writer.duplicate()
    del writer
    assert dup.write(b"z") == 1
    with FileDescriptor(r) as reader:
        assert reader.read() == b"z"
    dup.close()


def test_context_manager_closes():
    r, w = os.pipe()
    os.close(w)
    with FileDescriptor(r) as fd:
        assert fd.fileno() == r
    assert fd.closed()


def test_invalid_fd_rejected():
    with pytest.raises(ValueError):
        FileDescriptor(-1)


def test_set_blocking(pipe):
    reader, _ = pipe
    reader.set_blocking(False)
    assert os.get_blocking(reader.fd_num()) is False
    with pytest.raises(BlockingIOError):
        reader.read()
    reader.set_blocking(True)
    assert os.get_blocking(reader.fd_num()) is True


def test_write_all_false_writes_some(pipe):
    reader, writer = pipe
    written = writer.write(b"data", write_all=False)
    assert 0 < written <= 4
    assert reader.read() == b"data"[:written]


def test_empty_write_counts(pipe):
    _, writer = pipe
    assert writer.write(b"") == 0
    assert writer.write_count() == 1


def test_closed_read_raises(pipe):
    reader, _ = pipe
    reader.close()
    with pytest.raises(OSError):
        reader.read()