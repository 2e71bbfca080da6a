# spongeutil

Small building blocks for networking code on POSIX systems. The package uses
only the standard library.

- `spongeutil.address`: `Address` is an IPv4 address and port.
  `AddressError` is raised when a name cannot be resolved or an address
  cannot be converted.
- `spongeutil.buffer`: `Buffer` is a read-only byte string. It can drop bytes
  from its front without copying, and its storage is shared between copies.
  `BufferList` is a queue of buffers. With it, headers can go in front of a
  payload without copying the payload. `BufferViewList` is a temporary view
  over such data, used for scatter/gather writes.
- `spongeutil.file_descriptor`: `FileDescriptor` is a shared handle on an OS
  file descriptor. It tracks EOF, whether the descriptor is closed, and how
  many reads and writes have been made.
- `spongeutil.eventloop`: `EventLoop` waits on file descriptors with
  `select.poll` and runs callbacks when they are readable or writable. It
  raises an error when a callback would cause a busy loop.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Addresses

```python
from spongeutil.address import Address

addr = Address("18.243.0.1", 80)   # numeric only, no name lookup
print(addr)                        # 18.243.0.1:80
addr.ip_port()                     # ("18.243.0.1", 80)
addr.ipv4_numeric()                # the address as a host-order integer

same_ip = Address.from_ipv4_numeric(addr.ipv4_numeric())   # port 0
web = Address.resolve("localhost", "http")
```

`Address(ip, port)` accepts only a dotted quad and a port from 0 to 65535.
A port outside that range raises `ValueError`. Text that is not a numeric
address raises `AddressError`. `Address.resolve(hostname, service)` looks up
a host name and a service name or port string, and keeps the first IPv4
result. `sockaddr()` returns the `(ip, port)` tuple that the `socket` module
expects. Addresses compare equal when the IP and the port are the same, and
they can be used as dictionary keys.

## Buffers

```python
from spongeutil.buffer import Buffer, BufferList, BufferViewList

buf = Buffer(b"hello")
buf.remove_prefix(2)
bytes(buf)                  # b"llo"
buf[0]                      # 108

payload = BufferList(b"payload")
packet = BufferList(b"header:")
packet.append(payload)
packet.concatenate()        # b"header:payload"
packet.remove_prefix(7)
len(packet)                 # 7
packet.to_buffer()          # one Buffer; ValueError if several remain

views = BufferViewList(packet)
views.as_iovecs()           # list of memoryviews, ready for os.writev
```

Removing more bytes than are present raises `IndexError`. Text (`str`) is
encoded as UTF-8.

## File descriptors

```python
import os
from spongeutil.file_descriptor import FileDescriptor

r, w = os.pipe()
with FileDescriptor(r) as reader, FileDescriptor(w) as writer:
    writer.write(b"hello")      # returns 5; writes everything by default
    reader.read()               # b"hello"
    reader.read_count()         # 1
```

`read(limit)` reads at most 1 MiB per call. After a read returns no data, the
descriptor is marked at EOF. `write(data, write_all=False)` does a single
write and returns how many bytes were taken. `duplicate()` returns another
handle on the same descriptor: the handles share its state, and closing one
closes it for all. `set_blocking(False)` makes the descriptor non-blocking.
A descriptor that was never closed is closed when its last handle is garbage
collected.

## Event loop

```python
import os
from spongeutil.eventloop import Direction, EventLoop, Result
from spongeutil.file_descriptor import FileDescriptor

r, w = os.pipe()
reader, writer = FileDescriptor(r), FileDescriptor(w)
writer.write(b"hello")

loop = EventLoop()
loop.add_rule(reader, Direction.IN, lambda: print(reader.read()))
assert loop.wait_next_event(0) is Result.SUCCESS
```

`add_rule(fd, direction, callback, interest=None, cancel=None)` registers a
callback for `Direction.IN` or `Direction.OUT`. Before each poll, `interest`
is called. The descriptor is polled for its direction only while `interest`
returns true. A rule is dropped, and its `cancel` runs, in these cases: its
descriptor is closed; a reading rule has reached EOF; or a hangup is the only
event reported for it.

`wait_next_event(timeout_ms)` returns one of three results:

- `Result.SUCCESS` when the poll reported events;
- `Result.TIMEOUT` when nothing became ready in time;
- `Result.EXIT` when no rule is interested or the poll was interrupted.

A negative timeout waits indefinitely. `EventLoopError` is raised when a
descriptor reports an error. It is also raised when a callback neither read
from nor wrote to its descriptor while its `interest` still returns true.

## What it does not do

This is a library of parts. It has no command-line program, and it does not
open sockets, listen for connections or implement any protocol itself.
Addresses are IPv4 only. The event loop relies on `select.poll` and the file
descriptor writes rely on `os.writev`, so both need a POSIX system.