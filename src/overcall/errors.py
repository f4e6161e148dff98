from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from overcall.internal.utils import qualname


class DispatchError(RuntimeError):
    """Base class for unrecoverable dispatch failures."""


class MemberNotFoundError(DispatchError):
    """No constructor or method overload accepts the supplied arguments."""

    def __init__(self, owner: type, name: str | None, args: Sequence[Any]) -> None:
        self.owner = owner
        self.name = name
        self.argument_types = tuple(type(arg) for arg in args)
        types = ", ".join(qualname(type_) for type_ in self.argument_types)
        if name is None:
            message = f"Constructor not found: {qualname(owner)}({types})"
        else:
            message = f"Method not found: {qualname(owner)}.{name}({types})"
        super().__init__(message)


class InvocationError(DispatchError):
    """The resolved member (or the host call itself) raised an exception.

    The original exception is available as `__cause__`.
    """
