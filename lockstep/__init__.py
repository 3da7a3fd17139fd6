"""
lockstep - Lock-step collection combinators

This package applies a callable across one or more containers at once,
position by position, stopping at the shortest input. Results are collected
into a container of a requested kind, discarded, or reduced to a boolean.

Submodules:
- types: Sentinel, Callback alias and the error taxonomy
- kinds: Kind enum, SortedSet, BlockingDeque and the container-kind resolver
- engine: The lock-step zip and sliding-tail generators
- core: map_coll, map_c, map_can, map_list, some, every, not_any, not_every
- config: Settings loaded from LOCKSTEP_* environment variables
- log: Package logger setup

Usage:
    from lockstep import map_coll, map_list, some

    map_coll(lambda x: x + 1, [1, 2, 3, 4])          # [2, 3, 4, 5]
    map_coll(lambda x: x, [3, 1, 2], kind="sorted-set")
    map_list(sum, [1, 2, 3, 4])                       # [10, 9, 7, 4]
    some(lambda a, b: a == b, [1, 2, 3], [3, 2, 1])   # True
"""

__version__ = "0.1.0"

# Re-export configuration
from lockstep.config import (
    Settings,
    configure,
    get_settings,
    load_settings,
    reset_settings,
)

# Re-export combinators
from lockstep.core import (
    every,
    map_c,
    map_can,
    map_coll,
    map_list,
    not_any,
    not_every,
    some,
)

# Re-export iteration engine
from lockstep.engine import (
    Cursor,
    SuffixView,
    tails,
    zip_tuples,
)

# Re-export container kinds
from lockstep.kinds import (
    BlockingDeque,
    Kind,
    SortedSet,
    adder,
    cursor_source,
    empty_like,
    register_kind,
    resolve,
    size,
    unregister_kind,
)
from lockstep.log import setup_logger

# Re-export errors
from lockstep.types import (
    Callback,
    ContainerInstantiationError,
    EmptyInputSetError,
    LockstepError,
    NullArgumentError,
    UnsupportedContainerKindError,
)

__all__ = [
    "__version__",
    # config
    "Settings",
    "configure",
    "get_settings",
    "load_settings",
    "reset_settings",
    # core
    "every",
    "map_c",
    "map_can",
    "map_coll",
    "map_list",
    "not_any",
    "not_every",
    "some",
    # engine
    "Cursor",
    "SuffixView",
    "tails",
    "zip_tuples",
    # kinds
    "BlockingDeque",
    "Kind",
    "SortedSet",
    "adder",
    "cursor_source",
    "empty_like",
    "register_kind",
    "resolve",
    "size",
    "unregister_kind",
    # log
    "setup_logger",
    # types
    "Callback",
    "ContainerInstantiationError",
    "EmptyInputSetError",
    "LockstepError",
    "NullArgumentError",
    "UnsupportedContainerKindError",
]
