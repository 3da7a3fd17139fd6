"""
lockstep.core - Collection combinators

This module contains the public combinators. Each one applies a callable
across one or more containers in lock-step, stopping at the shortest input.

Categories:
- Transformations: map_coll, map_c, map_can, map_list
- Quantifiers: some, every, not_any, not_every

Every argument check happens before the first element is visited, and
exceptions raised by the callable propagate unchanged.
"""

import logging
from typing import Any, Iterable

from lockstep.engine import tails, zip_tuples
from lockstep.kinds import adder, empty_like, resolve
from lockstep.types import Callback, NullArgumentError

logger = logging.getLogger(__name__)


def _check_callback(fn: Callback, operation: str) -> None:
    if fn is None:
        raise NullArgumentError("fn", operation)
    if not callable(fn):
        raise TypeError(f"{operation}: fn must be callable, got {type(fn).__name__}")


def _collect(result, fn: Callback, steps: Iterable[tuple]):
    """Append fn(*args) to result for every tuple in steps."""
    add = adder(result)
    for args in steps:
        add(fn(*args))
    return result


# =============================================================================
# Transformations
# =============================================================================


def map_coll(fn: Callback, *colls, kind=None, into=None):
    """Apply fn across one or more containers and collect the results.

    With one container, fn receives each element. With several, fn
    receives one element from each, position by position, until the
    shortest container runs out.

    The results are appended, in order, to:
    - into, if given (and into is returned)
    - a fresh container resolved from kind, if given
    - otherwise a fresh container shaped like the first input
    """
    _check_callback(fn, "map_coll")
    if kind is not None and into is not None:
        raise TypeError("map_coll: pass either kind or into, not both")
    steps = zip_tuples(*colls, operation="map_coll")
    if into is not None:
        result = into
    elif kind is not None:
        result = resolve(kind)
    else:
        result = empty_like(colls[0])
    return _collect(result, fn, steps)


def map_c(fn: Callback, *colls) -> None:
    """Call fn across one or more containers for its side effects only."""
    _check_callback(fn, "map_c")
    for args in zip_tuples(*colls, operation="map_c"):
        fn(*args)


def map_can(fn: Callback, kind, *colls):
    """Map over parallel collections of collections and flatten the results.

    The outer collections are zipped first. For each outer position, the
    inner containers found there are zipped in turn and every fn(*inner)
    result is appended to a single container resolved from kind.

        map_can(inc, "sequence", [[1, 2], [3, 4]])  # => [2, 3, 4, 5]
    """
    _check_callback(fn, "map_can")
    if kind is None:
        raise NullArgumentError("kind", "map_can")
    outer = list(zip_tuples(*colls, operation="map_can"))
    # Inner containers are checked up front so fn never runs on a failing call
    for position, inner in enumerate(outer):
        for i, coll in enumerate(inner):
            if coll is None:
                raise NullArgumentError(f"colls[{i}][{position}]", "map_can")
    result = resolve(kind)
    add = adder(result)
    for inner in outer:
        for args in zip_tuples(*inner, operation="map_can"):
            add(fn(*args))
    return result


def map_list(fn: Callback, *lists, kind=None):
    """Apply fn to successive suffixes of one or more sequences.

    On step i, fn receives lists[0][i:], lists[1][i:], ... as read-only
    views, for as long as i is a valid index into every list.

        map_list(sum, [1, 2, 3, 4])  # => [10, 9, 7, 4]
    """
    _check_callback(fn, "map_list")
    steps = tails(*lists, operation="map_list")
    result = resolve(kind) if kind is not None else empty_like(lists[0])
    return _collect(result, fn, steps)


# =============================================================================
# Quantifiers
# =============================================================================


def _satisfied(result: Any) -> bool:
    """Anything except None and False satisfies a quantifier (0 and "" do)."""
    return result is not None and result is not False


def some(fn: Callback, *colls) -> bool:
    """Return True as soon as fn(*args) is satisfied for one position."""
    _check_callback(fn, "some")
    for position, args in enumerate(zip_tuples(*colls, operation="some")):
        if _satisfied(fn(*args)):
            logger.debug("some: satisfied at position %d", position)
            return True
    return False


def every(fn: Callback, *colls) -> bool:
    """Return False as soon as fn(*args) is not satisfied for one position."""
    _check_callback(fn, "every")
    for position, args in enumerate(zip_tuples(*colls, operation="every")):
        if not _satisfied(fn(*args)):
            logger.debug("every: unsatisfied at position %d", position)
            return False
    return True


def not_any(fn: Callback, *colls) -> bool:
    """Return True if fn(*args) is satisfied at no position."""
    return not some(fn, *colls)


def not_every(fn: Callback, *colls) -> bool:
    """Return True if fn(*args) is unsatisfied at some position."""
    return not every(fn, *colls)
