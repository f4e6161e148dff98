from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from overcall.descriptors import Binding, MemberDescriptor, MemberKind
from overcall.hosts import Host
from overcall.internal.utils import register


class TableHost(Host):
    """A Host backed by explicit registration tables.

    Useful for classes whose members can't be introspected (or shouldn't be exposed wholesale):
    each constructor or method form is registered with its parameter types, arity and handle. A
    variable-arity form lists its trailing array type last (see `overcall.descriptors.array_type`)
    and its handle receives the packed array as a single list.
    """

    def __init__(self) -> None:
        self._constructors: defaultdict[type, list[MemberDescriptor]] = defaultdict(list)
        self._methods: defaultdict[type, list[MemberDescriptor]] = defaultdict(list)
        self._superclasses: dict[type, type | None] = {}

    def register_constructor(
        self,
        cls: type,
        parameter_types: Iterable[Any],
        handle: Callable[..., Any],
        *,
        variadic: bool = False,
    ) -> MemberDescriptor:
        descriptor = MemberDescriptor(
            name="__init__",
            owner=cls,
            kind=MemberKind.CONSTRUCTOR,
            parameter_types=tuple(parameter_types),
            variadic=variadic,
            handle=handle,
        )
        self._constructors[cls].append(descriptor)
        return descriptor

    def register_method(
        self,
        cls: type,
        name: str,
        parameter_types: Iterable[Any],
        handle: Callable[..., Any],
        *,
        variadic: bool = False,
        binding: Binding = Binding.STATIC,
    ) -> MemberDescriptor:
        descriptor = MemberDescriptor(
            name=name,
            owner=cls,
            binding=binding,
            parameter_types=tuple(parameter_types),
            variadic=variadic,
            handle=handle,
        )
        self._methods[cls].append(descriptor)
        return descriptor

    def register_superclass(self, cls: type, superclass: type | None) -> None:
        register(self._superclasses, cls, superclass)

    def constructors(self, cls: type) -> tuple[MemberDescriptor, ...]:
        return tuple(self._constructors.get(cls, ()))

    def declared_methods(
        self, cls: type, name: str | None = None
    ) -> tuple[MemberDescriptor, ...]:
        methods = self._methods.get(cls, ())
        return tuple(m for m in methods if name is None or m.name == name)

    def superclass(self, cls: type) -> type | None:
        return self._superclasses.get(cls)

    def construct(self, descriptor: MemberDescriptor, args: Sequence[Any]) -> Any:
        return descriptor.handle(*args)

    def invoke(
        self,
        descriptor: MemberDescriptor,
        receiver: Any,
        args: Sequence[Any],
        *,
        target: type | None = None,
    ) -> Any:
        if descriptor.binding is Binding.STATIC:
            return descriptor.handle(*args)
        if descriptor.binding is Binding.CLASS:
            return descriptor.handle(target or descriptor.owner, *args)
        if receiver is None:
            raise TypeError(f"{descriptor} must be called on an instance")
        return descriptor.handle(receiver, *args)
