"""Poll-based event loop dispatching callbacks for ready file descriptors."""

from __future__ import annotations

import enum
import select
from dataclasses import dataclass
from typing import Callable

from .file_descriptor import FileDescriptor


class Direction(enum.IntEnum):
    """Whether a rule waits for readability or writability."""

    IN = select.POLLIN
    OUT = select.POLLOUT


class Result(enum.Enum):
    """Outcome of one EventLoop.wait_next_event call."""

    SUCCESS = enum.auto()
    TIMEOUT = enum.auto()
    EXIT = enum.auto()


class EventLoopError(RuntimeError):
    """Raised on a polling error or a detected busy wait."""


def _always() -> bool:
    return True


def _nothing() -> None:
    return None


@dataclass(eq=False)
class _Rule:
    fd: FileDescriptor
    direction: Direction
    callback: Callable[[], None]
    interest: Callable[[], bool]
    cancel: Callable[[], None]

    def service_count(self) -> int:
        if self.direction is Direction.IN:
            return self.fd.read_count()
        return self.fd.write_count()


class EventLoop:
    """Waits for events on file descriptors and runs the matching callbacks."""

    def __init__(self) -> None:
        self._rules: list[_Rule] = []

    def add_rule(
        self,
        fd: FileDescriptor,
        direction: Direction,
        callback: Callable[[], None],
        interest: Callable[[], bool] | None = None,
        cancel: Callable[[], None] | None = None,
    ) -> None:
        """Call ``callback`` whenever ``fd`` is ready in ``direction``.

        ``interest`` decides before each poll whether ``fd`` is polled;
        ``cancel`` runs when the rule is dropped (EOF, hangup or closure).
        """
        self._rules.append(
            _Rule(
                fd.duplicate(),
                Direction(direction),
                callback,
                interest or _always,
                cancel or _nothing,
            )
        )

    def wait_next_event(self, timeout_ms: int) -> Result:
        """Poll once and run the callbacks of ready rules.

        A negative ``timeout_ms`` waits indefinitely. Every callback must read or
        write its descriptor, or its interest must turn false, otherwise
        EventLoopError is raised to prevent a busy loop.
        """
        kept: list[_Rule] = []
        polled: list[tuple[_Rule, int]] = []
        masks: dict[int, int] = {}
        something_to_poll = False

        for rule in self._rules:
            if (rule.direction is Direction.IN and rule.fd.eof()) or rule.fd.closed():
                rule.cancel()
                continue
            kept.append(rule)
            if rule.interest():
                events = int(rule.direction)
                something_to_poll = True
            else:
                events = 0  # still registered so that errors are reported
            polled.append((rule, events))
            num = rule.fd.fd_num()
            masks[num] = masks.get(num, 0) | events
        self._rules = kept

        if not something_to_poll:
            return Result.EXIT

        poller = select.poll()
        for num, mask in masks.items():
            poller.register(num, mask)
        try:
            ready = poller.poll(timeout_ms)
        except InterruptedError:
            return Result.EXIT
        if not ready:
            return Result.TIMEOUT

        revents_by_fd = dict(ready)
        for rule, events in polled:
            revents = revents_by_fd.get(rule.fd.fd_num(), 0)
            if revents & (select.POLLERR | select.POLLNVAL):
                raise EventLoopError("EventLoop: error on polled file descriptor")
            poll_ready = bool(revents & events)
            if revents & select.POLLHUP and events and not poll_ready:
                rule.cancel()
                self._rules.remove(rule)
                continue
            if poll_ready:
                count_before = rule.service_count()
                rule.callback()
                if count_before == rule.service_count() and rule.interest():
                    raise EventLoopError(
                        "EventLoop: busy wait detected: callback did not read/write fd and is still interested"
                    )
        return Result.SUCCESS