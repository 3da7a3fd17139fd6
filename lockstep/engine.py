"""
lockstep.engine - Lock-step iteration over several containers

Two generators drive every combinator:

- zip_tuples: one K-tuple of elements per position, stopping at the
  shortest input
- tails: one K-tuple of suffix views per position, stopping at the
  shortest input

Both validate their inputs when called, before the first step, so argument
errors never surface halfway through an iteration.
"""

from collections import abc
from typing import Any, Iterator

from lockstep.kinds import cursor_source, size
from lockstep.types import _MISSING, EmptyInputSetError, NullArgumentError


def check_containers(colls: tuple, operation: str, label: str = "colls") -> None:
    """Raise if colls is empty or any element of it is None."""
    if not colls:
        raise EmptyInputSetError(operation)
    for i, coll in enumerate(colls):
        if coll is None:
            raise NullArgumentError(f"{label}[{i}]", operation)


# =============================================================================
# N-way Zip
# =============================================================================


class Cursor:
    """
    A forward-only position tracker over one container.

    Sized containers are bounded by the size they reported when the cursor
    was created, so a cursor never reads past that many elements. Unsized
    iterables are read one element ahead to answer has_next().
    """

    __slots__ = ("_iterator", "_remaining", "_head")

    def __init__(self, coll):
        self._iterator = cursor_source(coll)
        self._remaining = size(coll)
        self._head = _MISSING

    @property
    def sized(self) -> bool:
        return self._remaining is not None

    @property
    def spent(self) -> bool:
        """True once the cursor knows it is exhausted without reading."""
        return self._remaining == 0

    def has_next(self) -> bool:
        if self._remaining == 0:
            return False
        if self._head is _MISSING:
            self._head = next(self._iterator, _MISSING)
            if self._head is _MISSING:
                # Container shrank below its reported size
                self._remaining = 0
                return False
        return True

    def next(self) -> Any:
        if not self.has_next():
            raise StopIteration
        value, self._head = self._head, _MISSING
        if self._remaining is not None:
            self._remaining -= 1
        return value


def zip_tuples(*colls, operation: str = "zip_tuples") -> Iterator[tuple]:
    """
    Iterate several containers in lock-step.

    Yields one tuple per position holding the current element of every
    container, until any container is exhausted, so the number of tuples is
    min(len(c) for c in colls). With a single container this is plain
    iteration yielding 1-tuples.

    Sized inputs are never read past that count. Unsized iterators are
    read one element ahead, so when the zip stops because a later input
    ran out, each earlier unsized iterator has lost one element to the
    look-ahead. Passing the shortest unsized iterator first avoids this.

    Raises:
        EmptyInputSetError: If no containers are given
        NullArgumentError: If any container is None
    """
    check_containers(colls, operation)
    cursors = [Cursor(coll) for coll in colls]
    # Sized cursors answer without reading, so ask them first
    probe_order = sorted(cursors, key=lambda c: not c.sized)
    return _zip(cursors, probe_order)


def _zip(cursors: list, probe_order: list) -> Iterator[tuple]:
    while not any(c.spent for c in cursors) and all(
        c.has_next() for c in probe_order
    ):
        yield tuple(c.next() for c in cursors)


# =============================================================================
# Sliding Tails
# =============================================================================


class SuffixView(abc.Sequence):
    """
    A read-only view of a sequence from a start index to its end.

    The view holds no copy: it reads through to the source on every access,
    so it reflects later changes to the source. Slicing a view returns a
    new list.
    """

    __slots__ = ("_source", "_start")

    def __init__(self, source: abc.Sequence, start: int = 0):
        if start < 0:
            raise ValueError(f"SuffixView start must be >= 0, got {start}")
        self._source = source
        self._start = start

    @property
    def source(self) -> abc.Sequence:
        return self._source

    @property
    def start(self) -> int:
        return self._start

    def __len__(self) -> int:
        return max(0, len(self._source) - self._start)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("SuffixView index out of range")
        return self._source[self._start + index]

    def __iter__(self) -> Iterator:
        i = self._start
        while i < len(self._source):
            yield self._source[i]
            i += 1

    def __eq__(self, other):
        if not isinstance(other, abc.Sequence):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self):
        return f"SuffixView({list(self)!r})"


def tails(*seqs, operation: str = "tails") -> Iterator[tuple]:
    """
    Iterate the successive suffixes of several sequences in lock-step.

    For i = 0, 1, ... yields (seqs[0][i:], seqs[1][i:], ...) as SuffixView
    objects, while i is a valid index into every sequence. Lengths are
    re-read on each step, so a sequence that shrinks ends the iteration
    early instead of raising IndexError.

    Raises:
        EmptyInputSetError: If no sequences are given
        NullArgumentError: If any sequence is None
        TypeError: If any argument is not a Sequence
    """
    check_containers(seqs, operation, "seqs")
    for i, seq in enumerate(seqs):
        if not isinstance(seq, abc.Sequence):
            raise TypeError(
                f"{operation}: seqs[{i}] must be a sequence, got {type(seq).__name__}"
            )
    return _tails(seqs)


def _tails(seqs: tuple) -> Iterator[tuple]:
    i = 0
    while all(i < len(seq) for seq in seqs):
        yield tuple(SuffixView(seq, i) for seq in seqs)
        i += 1
