"""Explicit overload registration.

Python keeps one attribute per name, so overloaded constructors and methods are declared with
`@overload`, either in a class using the `OverloadMeta` metaclass:

    class Point(metaclass=OverloadMeta):
        @overload
        def __init__(self) -> None: ...

        @overload
        def __init__(self, x: int, y: int) -> None: ...

or by chaining `OverloadSet.register` (`@__init__.register`) in a regular class body. Calls through
the class or its instances are then dispatched by an `OverloadResolver`.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from overcall.resolvers import OverloadResolver


def unwrap(variant: Any) -> Callable[..., Any]:
    """Return the function behind a `staticmethod` or `classmethod`."""
    if isinstance(variant, staticmethod | classmethod):
        return variant.__func__
    return variant


class OverloadSet:
    """The overloads declared under one name in one class.

    `variants` keeps the declaration order and the original (possibly `staticmethod` or
    `classmethod` wrapped) objects, which the host inspects to determine how to call each one.
    """

    def __init__(self, *variants: Any, resolver: OverloadResolver | None = None) -> None:
        self.variants: list[Any] = []
        self.name: str | None = None
        self.owner: type | None = None
        self.resolver = resolver
        for variant in variants:
            self.register(variant)

    def register(self, variant: Any) -> OverloadSet:
        if isinstance(variant, OverloadSet):
            for other in variant.variants:
                self.register(other)
            return self
        func = unwrap(variant)
        if not callable(func):
            raise TypeError(f"Expected a function, staticmethod or classmethod, got {variant!r}")
        if self.name is None:
            self.name = func.__name__
        self.variants.append(variant)
        return self

    def __set_name__(self, owner: type, name: str) -> None:
        self.owner, self.name = owner, name

    def __get__(self, instance: Any, owner: type | None = None) -> Callable[..., Any]:
        resolver = self.resolver
        if resolver is None:
            from overcall.resolvers import default_resolver as resolver
        if owner is None:
            owner = type(instance)
        # Resolve from the declaring class, so `super().name(...)` doesn't dispatch back down to
        # subclass overloads.
        cls = self.owner or owner
        if self.name == "__init__":
            if instance is None:
                return partial(resolver.initialize, cls=cls)
            return partial(resolver.initialize, instance, cls=cls)
        assert self.name is not None
        if instance is None:
            return partial(resolver.invoke_unbound_method, cls, self.name, target=owner)
        return partial(resolver.invoke_method, cls, instance, self.name, target=owner)

    def __len__(self) -> int:
        return len(self.variants)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {len(self)} variants)"


def overload(variant: Any) -> OverloadSet:
    """Declare one overload of a constructor or method. See the module docstring."""
    return OverloadSet(variant)


class OverloadNamespace(dict[str, Any]):
    """A class body namespace that merges repeated `@overload` definitions of a name."""

    def __setitem__(self, key: str, value: Any) -> None:
        existing = self.get(key)
        if isinstance(value, OverloadSet) and isinstance(existing, OverloadSet):
            if value is not existing:
                value = existing.register(value)
        super().__setitem__(key, value)


class OverloadMeta(type):
    """Metaclass allowing several `@overload` definitions of the same name in a class body."""

    @classmethod
    def __prepare__(mcs, name: str, bases: tuple[type, ...], **kwargs: Any) -> OverloadNamespace:
        return OverloadNamespace()
