"""
lockstep.kinds - Container kinds and the container-kind resolver

This module decides which concrete container a combinator writes into and
how the engine talks to containers:

- Kind: The closed set of abstract container categories
- SortedSet: Ordered set backing the sorted-set and navigable-set kinds
- BlockingDeque: queue.Queue that also works at both ends
- resolve: Build a fresh, empty container for a kind descriptor
- empty_like: Build a fresh, empty container shaped like an existing one
- register_kind / unregister_kind: Caller-supplied kind factories
- cursor_source, size, adder: The capabilities the engine consumes

A kind descriptor may be a Kind member, its string value ("sorted-set"),
an abstract collections.abc class, a concrete class, or a name added with
register_kind. Resolution either returns an empty mutable container that
satisfies the descriptor or raises; it never falls back to a different
shape.
"""

import inspect
import logging
import queue
from bisect import bisect_left, bisect_right
from collections import abc, deque
from enum import Enum
from typing import Any, Callable, Iterator, Optional, get_origin

from lockstep.config import get_settings
from lockstep.types import (
    ContainerInstantiationError,
    NullArgumentError,
    UnsupportedContainerKindError,
)

logger = logging.getLogger(__name__)


class Kind(str, Enum):
    """Abstract container categories, in resolution precedence order."""

    BLOCKING_DEQUE = "blocking-deque"
    BLOCKING_QUEUE = "blocking-queue"
    DEQUE = "deque"
    SEQUENCE = "sequence"
    NAVIGABLE_SET = "navigable-set"
    QUEUE = "queue"
    SET = "set"
    SORTED_SET = "sorted-set"
    COLLECTION = "collection"

    def __str__(self):
        return self.value


# =============================================================================
# Backing Types
# =============================================================================


class SortedSet(abc.MutableSet):
    """
    A set that iterates its elements in ascending order.

    Elements are kept in a sorted list and located with bisect, so lookups
    are O(log n) and inserts are O(n). An optional key function orders the
    elements; two elements with equal keys count as the same element.
    """

    __slots__ = ("_items", "_keys", "_key")

    def __init__(self, iterable=(), key: Optional[Callable[[Any], Any]] = None):
        self._key = key
        self._items: list = []
        self._keys: list = []
        for value in iterable:
            self.add(value)

    @property
    def key(self) -> Optional[Callable[[Any], Any]]:
        """The ordering key function, or None for natural ordering."""
        return self._key

    def _key_of(self, value):
        return value if self._key is None else self._key(value)

    def _index_of(self, value) -> int:
        """Return the index of value, or -1 if absent."""
        k = self._key_of(value)
        i = bisect_left(self._keys, k)
        if i < len(self._keys) and self._keys[i] == k:
            return i
        return -1

    def __contains__(self, value) -> bool:
        try:
            return self._index_of(value) >= 0
        except TypeError:
            # Not comparable with the stored elements
            return False

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __reversed__(self) -> Iterator:
        return reversed(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def add(self, value) -> None:
        """Insert value in order, unless an equal element is present."""
        k = self._key_of(value)
        i = bisect_left(self._keys, k)
        if i < len(self._keys) and self._keys[i] == k:
            return
        self._keys.insert(i, k)
        self._items.insert(i, value)

    def discard(self, value) -> None:
        """Remove value if present."""
        i = self._index_of(value)
        if i >= 0:
            del self._keys[i]
            del self._items[i]

    def first(self):
        """Return the smallest element."""
        if not self._items:
            raise KeyError("first from empty SortedSet")
        return self._items[0]

    def last(self):
        """Return the largest element."""
        if not self._items:
            raise KeyError("last from empty SortedSet")
        return self._items[-1]

    def floor(self, value):
        """Return the greatest element <= value, or None."""
        i = bisect_right(self._keys, self._key_of(value))
        return self._items[i - 1] if i else None

    def ceiling(self, value):
        """Return the least element >= value, or None."""
        i = bisect_left(self._keys, self._key_of(value))
        return self._items[i] if i < len(self._items) else None

    def lower(self, value):
        """Return the greatest element < value, or None."""
        i = bisect_left(self._keys, self._key_of(value))
        return self._items[i - 1] if i else None

    def higher(self, value):
        """Return the least element > value, or None."""
        i = bisect_right(self._keys, self._key_of(value))
        return self._items[i] if i < len(self._items) else None

    def __repr__(self):
        return f"SortedSet({self._items!r})"


class _HeadItem:
    """Marks an item that BlockingDeque._put should place at the head."""

    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value


class BlockingDeque(queue.Queue):
    """
    A thread-safe double-ended queue with an optional bound.

    put/get behave exactly like queue.Queue (FIFO). put_left inserts at the
    head and get_right removes from the tail, with the same blocking and
    timeout rules as put/get.
    """

    def _put(self, item):
        if isinstance(item, _HeadItem):
            self.queue.appendleft(item.value)
        else:
            self.queue.append(item)

    def put_left(self, item, block=True, timeout=None):
        """Put an item at the head of the deque."""
        self.put(_HeadItem(item), block, timeout)

    def put_left_nowait(self, item):
        """Put an item at the head without blocking; raises queue.Full."""
        self.put_left(item, block=False)

    def get_right(self, block=True, timeout=None):
        """Remove and return the item at the tail of the deque."""
        with self.not_empty:
            if not block:
                if not self._qsize():
                    raise queue.Empty
            elif timeout is None:
                while not self._qsize():
                    self.not_empty.wait()
            elif timeout < 0:
                raise ValueError("'timeout' must be a non-negative number")
            elif not self.not_empty.wait_for(self._qsize, timeout):
                raise queue.Empty
            item = self.queue.pop()
            self.not_full.notify()
            return item

    def get_right_nowait(self):
        """Remove the tail item without blocking; raises queue.Empty."""
        return self.get_right(block=False)


# =============================================================================
# Resolver Registry
# =============================================================================


def _blocking_deque():
    return BlockingDeque(maxsize=get_settings().blocking_capacity)


def _blocking_queue():
    return queue.Queue(maxsize=get_settings().blocking_capacity)


# Kind -> factory for the default backing
_KIND_FACTORIES: dict[Kind, Callable[[], Any]] = {
    Kind.BLOCKING_DEQUE: _blocking_deque,
    Kind.BLOCKING_QUEUE: _blocking_queue,
    Kind.DEQUE: deque,
    Kind.SEQUENCE: list,
    Kind.NAVIGABLE_SET: SortedSet,
    Kind.QUEUE: queue.PriorityQueue,
    Kind.SET: set,
    Kind.SORTED_SET: SortedSet,
    Kind.COLLECTION: list,
}

# Abstract collections.abc classes a descriptor may extend, checked in order
_ABSTRACT_CATEGORIES: tuple[tuple[type, Kind], ...] = (
    (abc.MutableSequence, Kind.SEQUENCE),
    (abc.Sequence, Kind.SEQUENCE),
    (abc.MutableSet, Kind.SET),
    (abc.Set, Kind.SET),
    (abc.Collection, Kind.COLLECTION),
)

# Caller-registered kind name -> factory
_CUSTOM_KINDS: dict[str, Callable[[], Any]] = {}

_KIND_VALUES = frozenset(k.value for k in Kind)


def register_kind(name: str, factory: Callable[[], Any]) -> Callable[[], Any]:
    """
    Register a factory for a caller-defined kind name.

    Args:
        name: The kind name passed to resolve() later
        factory: Zero-argument callable returning an empty container

    Returns:
        The factory, unchanged

    Raises:
        ValueError: If name is empty or is a built-in kind name
        TypeError: If factory is not callable
    """
    if not isinstance(name, str) or not name:
        raise ValueError(f"Kind name must be a non-empty string, got {name!r}")
    if name in _KIND_VALUES:
        raise ValueError(f"Cannot override built-in kind {name!r}")
    if not callable(factory):
        raise TypeError(f"Kind factory for {name!r} must be callable")
    _CUSTOM_KINDS[name] = factory
    logger.debug("Registered container kind %r -> %r", name, factory)
    return factory


def unregister_kind(name: str) -> None:
    """Remove a caller-registered kind. Unknown names raise KeyError."""
    del _CUSTOM_KINDS[name]
    logger.debug("Unregistered container kind %r", name)


def resolve(kind) -> Any:
    """
    Return a fresh, empty container for a kind descriptor.

    Args:
        kind: Kind member, kind string, registered name, abstract
              collections.abc class, concrete class, or a parameterized
              generic such as list[int]

    Raises:
        NullArgumentError: If kind is None
        UnsupportedContainerKindError: If kind has no known backing, or the
            backing would not be an appendable container of that kind
        ContainerInstantiationError: If constructing a concrete type failed
    """
    if kind is None:
        raise NullArgumentError("kind", "resolve")

    if isinstance(kind, Kind):
        return _build(kind, _KIND_FACTORIES[kind])

    if isinstance(kind, str):
        factory = _CUSTOM_KINDS.get(kind)
        if factory is not None:
            return _check_registered(kind, _build(kind, factory))
        try:
            tag = Kind(kind)
        except ValueError:
            raise UnsupportedContainerKindError(kind) from None
        return _build(tag, _KIND_FACTORIES[tag])

    # list[int], typing.MutableSet[str], ...
    origin = get_origin(kind)
    if isinstance(origin, type):
        kind = origin

    if not isinstance(kind, type):
        raise UnsupportedContainerKindError(kind)

    if inspect.isabstract(kind):
        return _resolve_abstract(kind)

    if _append_method_name(kind) is None:
        raise UnsupportedContainerKindError(kind)
    return _build(kind, kind)


def _resolve_abstract(kind: type) -> Any:
    """Map an abstract class onto the first matching category's default backing."""
    for abstract, tag in _ABSTRACT_CATEGORIES:
        if issubclass(kind, abstract) or issubclass(abstract, kind):
            coll = _build(tag, _KIND_FACTORIES[tag])
            if isinstance(coll, kind):
                return coll
            break
    raise UnsupportedContainerKindError(kind)


def _check_registered(kind: str, coll) -> Any:
    """Reject a registered factory's result unless it is empty and appendable."""
    if _append_method_name(type(coll)) is None or size(coll) != 0:
        logger.debug("Kind %r produced unusable container %r", kind, coll)
        raise UnsupportedContainerKindError(kind)
    return coll


def _build(kind, factory: Callable[[], Any]) -> Any:
    """Call a container factory, wrapping construction failures."""
    try:
        coll = factory()
    except Exception as exc:
        raise ContainerInstantiationError(kind, exc) from exc
    logger.debug("Resolved container kind %s -> %s", kind, type(coll).__name__)
    return coll


def empty_like(coll) -> Any:
    """
    Return a fresh, empty container with the same shape as coll.

    Shape-defining constructor arguments are carried over (deque maxlen,
    queue maxsize, SortedSet key). Containers with no append operation
    (tuple, str, frozenset, range, views, generators) resolve through
    their abstract category instead: sequences to SEQUENCE, sets to SET,
    anything else to COLLECTION.
    """
    if coll is None:
        raise NullArgumentError("coll", "empty_like")
    cls = type(coll)
    if isinstance(coll, SortedSet):
        return _build(cls, lambda: cls(key=coll.key))
    if isinstance(coll, deque):
        return _build(cls, lambda: cls(maxlen=coll.maxlen))
    if isinstance(coll, queue.Queue):
        return _build(cls, lambda: cls(maxsize=coll.maxsize))
    if _append_method_name(cls) is not None:
        return _build(cls, cls)
    if isinstance(coll, abc.Sequence):
        return resolve(Kind.SEQUENCE)
    if isinstance(coll, abc.Set):
        return resolve(Kind.SET)
    return resolve(Kind.COLLECTION)


# =============================================================================
# Container Capabilities
# =============================================================================


def _append_method_name(cls: type) -> Optional[str]:
    """Name of the method that appends one element to instances of cls."""
    if issubclass(cls, queue.Queue):
        return "put_nowait"
    if issubclass(cls, abc.MutableSequence):
        return "append"
    if issubclass(cls, abc.MutableSet):
        return "add"
    if issubclass(cls, (str, bytes, tuple, frozenset, abc.Mapping)):
        return None
    if callable(getattr(cls, "append", None)):
        return "append"
    if callable(getattr(cls, "add", None)):
        return "add"
    return None


def adder(coll) -> Callable[[Any], Any]:
    """
    Return the bound append operation of a destination container.

    Queues are filled with put_nowait, so a full bounded queue raises
    queue.Full instead of blocking.
    """
    name = _append_method_name(type(coll))
    if name is None:
        raise TypeError(f"Don't know how to add to {type(coll).__name__}")
    return getattr(coll, name)


def cursor_source(coll) -> Iterator:
    """
    Return a forward iterator over coll.

    queue.Queue family containers are read as a snapshot taken under the
    queue's own lock, in retrieval order; nothing is consumed and nothing
    blocks.
    """
    if isinstance(coll, queue.Queue):
        with coll.mutex:
            snapshot = list(coll.queue)
        if isinstance(coll, queue.PriorityQueue):
            snapshot.sort()
        elif isinstance(coll, queue.LifoQueue):
            snapshot.reverse()
        return iter(snapshot)
    return iter(coll)


def size(coll) -> Optional[int]:
    """Return the number of elements in coll, or None if it is not sized."""
    if isinstance(coll, queue.Queue):
        return coll.qsize()
    if isinstance(coll, abc.Sized):
        return len(coll)
    return None
