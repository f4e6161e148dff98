from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional, TypeVar, cast

import multimethod as _multimethod  # Avoid confusion with our own "multiple dispatch" names

RETURN = TypeVar("RETURN")


class _multipledispatch(_multimethod.multidispatch[RETURN]):
    """A `multidispatch` function with a name for error messages and lazy handler discovery.

    Handlers are registered with `.register`, like `functools.singledispatch`. The decorated
    function is the fallback. `discovery_func` is called before resolving any uncached argument
    types, giving plugin modules a chance to register their handlers on first use.
    """

    # `__new__` runs for every registered handler in the multimethod internals, so extra settings
    # are set as attributes by `multipledispatch` below rather than passed to the constructor.
    def __init__(self, func: Callable[..., RETURN]) -> None:
        super().__init__(func)
        self.canonical_name: Optional[str] = None
        self.discovery_func: Optional[Callable[[], None]] = None

    def __missing__(self, types: tuple[Any, ...]) -> Callable[..., RETURN]:
        if self.discovery_func is not None:
            self.discovery_func()
        return super().__missing__(types)

    def lookup(self, *args: type[Any]) -> Callable[..., Any]:
        """Return the handler for the argument *types*."""
        try:
            return cast(Callable[..., Any], self[args])
        except TypeError as e:  # multimethod's DispatchError
            raise ValueError(
                f"No `{self.canonical_name}` implementation found for: {args}"
            ) from e


def multipledispatch(
    canonical_name: str, *, discovery_func: Optional[Callable[[], None]] = None
) -> Callable[[Callable[..., RETURN]], _multipledispatch[RETURN]]:
    def wrap(func: Callable[..., RETURN]) -> _multipledispatch[RETURN]:
        dispatch = _multipledispatch(func)
        dispatch.canonical_name = canonical_name
        dispatch.discovery_func = discovery_func
        return dispatch

    return wrap
