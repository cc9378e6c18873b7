"""Reactive state: observable values and lists, subscriptions and task spawning."""

from __future__ import annotations

import asyncio
import inspect
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")

__all__ = [
    "Subscription",
    "Mutable",
    "ReadOnlyMutable",
    "DiffKind",
    "VecDiff",
    "MutableVec",
    "spawn",
]


class Subscription:
    """Handle for a listener or a spawned task; cancelling it stops further work."""

    def __init__(self, on_cancel: Callable[[], Any] | None = None) -> None:
        self._on_cancel = on_cancel
        self._active = True

    @property
    def active(self) -> bool:
        """Whether the subscription has not been cancelled yet."""
        return self._active

    def cancel(self) -> None:
        """Stop the subscription. Calling it again does nothing."""
        if not self._active:
            return
        self._active = False
        on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is not None:
            on_cancel()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def __repr__(self) -> str:
        return f"Subscription(active={self._active})"


class _Listeners(Generic[T]):
    """Ordered registry of callbacks that can each be removed through a Subscription."""

    def __init__(self) -> None:
        self._callbacks: dict[int, Callable[[T], Any]] = {}
        self._ids = itertools.count()

    def add(self, callback: Callable[[T], Any]) -> Subscription:
        key = next(self._ids)
        self._callbacks[key] = callback
        return Subscription(lambda: self._callbacks.pop(key, None))

    def notify(self, payload: T) -> None:
        for callback in list(self._callbacks.values()):
            callback(payload)


class Mutable(Generic[T]):
    """A value whose changes are pushed to subscribers."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._listeners: _Listeners[T] = _Listeners()

    def get(self) -> T:
        """Return the current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify every subscriber."""
        self._value = value
        self._listeners.notify(value)

    def update(self, func: Callable[[T], T]) -> T:
        """Set the value to ``func(current)`` and return the new value."""
        new_value = func(self._value)
        self.set(new_value)
        return new_value

    def subscribe(self, callback: Callable[[T], Any]) -> Subscription:
        """Call ``callback`` with the current value now and with every later value."""
        subscription = self._listeners.add(callback)
        callback(self._value)
        return subscription

    def read_only(self) -> ReadOnlyMutable[T]:
        """Return a view that can be read and observed but not set."""
        return ReadOnlyMutable(self)

    def callback(self, func: Callable[[Mutable[T]], Any]) -> Callable[[Any], None]:
        """Return an event handler that calls ``func(self)`` and ignores the event."""

        def handler(_event: Any = None) -> None:
            func(self)

        return handler

    def callback_with(self, func: Callable[[Mutable[T], Any], Any]) -> Callable[[Any], None]:
        """Return an event handler that calls ``func(self, event)``."""

        def handler(event: Any = None) -> None:
            func(self, event)

        return handler

    def __repr__(self) -> str:
        return f"Mutable({self._value!r})"


class ReadOnlyMutable(Generic[T]):
    """Read-only view over a Mutable."""

    def __init__(self, source: Mutable[T]) -> None:
        self._source = source

    def get(self) -> T:
        """Return the current value of the underlying Mutable."""
        return self._source.get()

    def subscribe(self, callback: Callable[[T], Any]) -> Subscription:
        """Observe the underlying Mutable."""
        return self._source.subscribe(callback)

    def __repr__(self) -> str:
        return f"ReadOnlyMutable({self._source.get()!r})"


class DiffKind(Enum):
    """The kinds of change a MutableVec reports."""

    REPLACE = "replace"
    INSERT_AT = "insert_at"
    UPDATE_AT = "update_at"
    REMOVE_AT = "remove_at"
    MOVE = "move"
    PUSH = "push"
    POP = "pop"
    CLEAR = "clear"


@dataclass(frozen=True)
class VecDiff(Generic[T]):
    """One change to a MutableVec."""

    kind: DiffKind
    index: int | None = None
    value: Any = None
    values: tuple = ()
    old_index: int | None = None
    new_index: int | None = None

    def apply(self, target: list) -> None:
        """Perform this change on ``target`` in place."""
        kind = self.kind
        if kind is DiffKind.REPLACE:
            target[:] = self.values
        elif kind is DiffKind.INSERT_AT:
            target.insert(self.index, self.value)
        elif kind is DiffKind.UPDATE_AT:
            target[self.index] = self.value
        elif kind is DiffKind.REMOVE_AT:
            del target[self.index]
        elif kind is DiffKind.MOVE:
            target.insert(self.new_index, target.pop(self.old_index))
        elif kind is DiffKind.PUSH:
            target.append(self.value)
        elif kind is DiffKind.POP:
            target.pop()
        elif kind is DiffKind.CLEAR:
            target.clear()


class MutableVec(Generic[T]):
    """A list whose changes are pushed to subscribers as VecDiff values."""

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._values: list[T] = list(values)
        self._listeners: _Listeners[VecDiff[T]] = _Listeners()

    def items(self) -> list[T]:
        """Return a copy of the current items."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._values))

    def __getitem__(self, index: int) -> T:
        return self._values[index]

    def _check_index(self, index: int, upper: int) -> None:
        if not 0 <= index < upper:
            raise IndexError(f"index {index} out of range for length {len(self._values)}")

    def push(self, value: T) -> None:
        """Append ``value``."""
        self._values.append(value)
        self._listeners.notify(VecDiff(DiffKind.PUSH, value=value))

    def insert(self, index: int, value: T) -> None:
        """Insert ``value`` before position ``index`` (which may equal the length)."""
        self._check_index(index, len(self._values) + 1)
        self._values.insert(index, value)
        self._listeners.notify(VecDiff(DiffKind.INSERT_AT, index=index, value=value))

    def set_at(self, index: int, value: T) -> None:
        """Replace the item at ``index``."""
        self._check_index(index, len(self._values))
        self._values[index] = value
        self._listeners.notify(VecDiff(DiffKind.UPDATE_AT, index=index, value=value))

    def remove(self, index: int) -> T:
        """Remove and return the item at ``index``."""
        self._check_index(index, len(self._values))
        value = self._values.pop(index)
        self._listeners.notify(VecDiff(DiffKind.REMOVE_AT, index=index))
        return value

    def pop(self) -> T:
        """Remove and return the last item."""
        if not self._values:
            raise IndexError("pop from empty MutableVec")
        value = self._values.pop()
        self._listeners.notify(VecDiff(DiffKind.POP))
        return value

    def move(self, old_index: int, new_index: int) -> None:
        """Move the item at ``old_index`` so that it ends up at ``new_index``."""
        length = len(self._values)
        self._check_index(old_index, length)
        self._check_index(new_index, length)
        if old_index == new_index:
            return
        self._values.insert(new_index, self._values.pop(old_index))
        self._listeners.notify(
            VecDiff(DiffKind.MOVE, old_index=old_index, new_index=new_index)
        )

    def swap(self, a: int, b: int) -> None:
        """Exchange the items at ``a`` and ``b`` using two moves."""
        length = len(self._values)
        self._check_index(a, length)
        self._check_index(b, length)
        if a < b:
            self.move(a, b)
            self.move(b - 1, a)
        elif a > b:
            self.move(a, b)
            self.move(b + 1, a)

    def replace(self, values: Iterable[T]) -> None:
        """Replace all items at once."""
        self._values = list(values)
        self._listeners.notify(VecDiff(DiffKind.REPLACE, values=tuple(self._values)))

    def clear(self) -> None:
        """Remove every item."""
        self._values.clear()
        self._listeners.notify(VecDiff(DiffKind.CLEAR))

    def subscribe(self, callback: Callable[[VecDiff[T]], Any]) -> Subscription:
        """Send a REPLACE with the current items now, then every later change."""
        subscription = self._listeners.add(callback)
        callback(VecDiff(DiffKind.REPLACE, values=tuple(self._values)))
        return subscription

    def callback(self, func: Callable[[MutableVec[T]], Any]) -> Callable[[Any], None]:
        """Return an event handler that calls ``func(self)`` and ignores the event."""

        def handler(_event: Any = None) -> None:
            func(self)

        return handler

    def callback_with(
        self, func: Callable[[MutableVec[T], Any], Any]
    ) -> Callable[[Any], None]:
        """Return an event handler that calls ``func(self, event)``."""

        def handler(event: Any = None) -> None:
            func(self, event)

        return handler

    def __repr__(self) -> str:
        return f"MutableVec({self._values!r})"


def spawn(awaitable: Awaitable[Any]) -> Subscription:
    """Run ``awaitable`` on the running event loop and return a handle that cancels it.

    Without a running loop the work is dropped and the returned handle is inactive.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        handle = Subscription()
        handle.cancel()
        return handle
    task = asyncio.ensure_future(awaitable)
    return Subscription(task.cancel)