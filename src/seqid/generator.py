"""Sequential generators: stateful sources of non-repeating IDs.

A generator exposes a single `next()` that returns the next ID, or None once
its output space is used up. Exhaustion is permanent: after the first None,
every later call returns None as well.

The integer counters here cover the usual unsigned widths. The logic lives
once in Counter; each width is a subclass that only pins WIDTH.
"""

from __future__ import annotations

import struct
import threading
from typing import Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)

_DEFAULT_WIDTH = 64


@runtime_checkable
class FiniteSequential(Protocol[T_co]):
    """A sequential ID generator that may run out of values."""

    def next(self) -> T_co | None: ...


@runtime_checkable
class UniqueGenerator(Protocol[T_co]):
    """A generator that never repeats a value.

    Implementors MUST guarantee that no emitted value is emitted again.
    This does not promise an infinite supply: None signals exhaustion.
    """

    def next(self) -> T_co | None: ...


class Counter:
    """Plain unsigned counter of a fixed bit width.

    Counter itself takes width= (64 if omitted). The fixed-width subclasses
    such as U8 pin WIDTH and refuse the keyword.

    Emits start, start + 1, ... up to (but not including) 2**width - 1.
    The maximum itself is the exhaustion sentinel and is never emitted.

    Usage:
        gen = U8()
        gen.next()  # 0
        gen.next()  # 1

        done = U8(255)
        done.next()  # None
    """

    __slots__ = ("_value", "_width")

    # None on the open-width bases; fixed-width subclasses pin it.
    WIDTH: int | None = None

    def __init__(self, start: int = 0, *, width: int | None = None) -> None:
        if self.WIDTH is not None:
            if width is not None:
                raise TypeError(f"{type(self).__name__} has a fixed width of {self.WIDTH} bits")
            width = self.WIDTH
        elif width is None:
            width = _DEFAULT_WIDTH
        self._width = width
        if self._width <= 0:
            raise ValueError(f"width must be positive, got {self._width}")
        if not 0 <= start <= self.max:
            raise ValueError(f"start {start} outside [0, {self.max}] for {self._width}-bit counter")
        self._value = start

    @property
    def width(self) -> int:
        return self._width

    @property
    def max(self) -> int:
        return (1 << self._width) - 1

    @property
    def value(self) -> int:
        """The value the next successful call will return."""
        return self._value

    @property
    def exhausted(self) -> bool:
        return self._value == self.max

    def next(self) -> int | None:
        """Return the next ID, or None if the counter reached its maximum."""
        if self._value == self.max:
            return None
        current = self._value
        self._value += 1
        return current

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


class AtomicCounter(Counter):
    """Counter whose storage is guarded by a lock.

    next(), load() and store() may be called from several threads without
    external locking. The compare/capture/increment in next() runs under the
    same lock, so two threads never receive the same value.
    """

    __slots__ = ("_lock",)

    def __init__(self, start: int = 0, *, width: int | None = None) -> None:
        super().__init__(start, width=width)
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        return self.load()

    @property
    def exhausted(self) -> bool:
        return self.load() == self.max

    def load(self) -> int:
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        """Advance the counter to value. Moving backwards is refused."""
        with self._lock:
            if value < self._value:
                raise ValueError(f"cannot lower counter from {self._value} to {value}")
            if value > self.max:
                raise ValueError(f"value {value} exceeds maximum {self.max}")
            self._value = value

    def next(self) -> int | None:
        with self._lock:
            return super().next()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.load()})"


# ─── Fixed widths ────────────────────────────────────────────────────────────

_POINTER_BITS = struct.calcsize("P") * 8


class U8(Counter):
    __slots__ = ()
    WIDTH = 8


class U16(Counter):
    __slots__ = ()
    WIDTH = 16


class U32(Counter):
    __slots__ = ()
    WIDTH = 32


class U64(Counter):
    __slots__ = ()
    WIDTH = 64


class U128(Counter):
    __slots__ = ()
    WIDTH = 128


class USize(Counter):
    __slots__ = ()
    WIDTH = _POINTER_BITS


class AtomicU8(AtomicCounter):
    __slots__ = ()
    WIDTH = 8


class AtomicU16(AtomicCounter):
    __slots__ = ()
    WIDTH = 16


class AtomicU32(AtomicCounter):
    __slots__ = ()
    WIDTH = 32


class AtomicU64(AtomicCounter):
    __slots__ = ()
    WIDTH = 64


class AtomicUSize(AtomicCounter):
    __slots__ = ()
    WIDTH = _POINTER_BITS
