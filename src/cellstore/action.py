"""Actions: batched writes.

Writes inside an @action commit immediately, but their dependents only
rebuild after the outermost action (or Store.transaction()) returns. A
cell written several times in one batch propagates once.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeVar

if TYPE_CHECKING:
    from cellstore.store import Store

P = ParamSpec("P")
R = TypeVar("R")


def action(store: Store) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator factory: batch all writes fn makes to store.

    Usage:
        a = store.create_atom("a", lambda: 0)
        b = store.create_atom("b", lambda: 0)

        @action(store)
        def swap():
            x, y = a.get(), b.get()
            a.set(y)
            b.set(x)
            # dependents see both writes at once
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with store.transaction():
                return fn(*args, **kwargs)

        return wrapper

    return decorator
