from __future__ import annotations

import inspect
import types
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from overcall.descriptors import Binding, MemberDescriptor, MemberKind, array_type
from overcall.hosts import Host
from overcall.internal.type_hints import signature
from overcall.overloads import OverloadSet, unwrap

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
# Constructors are enumerated separately.
_SKIPPED_METHODS = frozenset({"__init__", "__new__"})


def _binding(member: Any) -> Binding | None:
    if isinstance(member, staticmethod):
        return Binding.STATIC
    if isinstance(member, classmethod | types.ClassMethodDescriptorType):
        return Binding.CLASS
    if inspect.isfunction(member) or isinstance(
        member, types.MethodDescriptorType | types.WrapperDescriptorType
    ):
        return Binding.INSTANCE
    return None  # Not a method, eg: properties, nested classes or data.


def _hint(param: inspect.Parameter) -> Any:
    return object if param.annotation is param.empty else param.annotation


def describe(
    func: Callable[..., Any],
    *,
    name: str,
    owner: type,
    kind: MemberKind,
    binding: Binding,
) -> Iterator[MemberDescriptor]:
    """Describe the positional call forms of a callable.

    Each trailing parameter with a default adds a shorter fixed-arity form and `*args` makes the
    longest form variable-arity. Members with required keyword-only parameters can't be called
    positionally and yield nothing.
    """
    fields = dict(name=name, owner=owner, kind=kind, binding=binding, handle=func)
    sig = signature(func)
    if sig is None:
        yield MemberDescriptor(parameter_types=(array_type(object),), variadic=True, **fields)
        return
    params = list(sig.parameters.values())
    if binding is not Binding.STATIC and params and params[0].kind in _POSITIONAL:
        params = params[1:]  # Drop the receiver (`self` or `cls`)
    positional: list[inspect.Parameter] = []
    var_positional: inspect.Parameter | None = None
    for param in params:
        if param.kind in _POSITIONAL:
            positional.append(param)
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            var_positional = param
        elif param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is param.empty:
            return
    required = sum(1 for param in positional if param.default is param.empty)
    hints = tuple(_hint(param) for param in positional)
    for count in range(required, len(hints) + 1):
        if var_positional is not None and count == len(hints):
            yield MemberDescriptor(
                parameter_types=(*hints, array_type(_hint(var_positional))),
                variadic=True,
                **fields,
            )
        else:
            yield MemberDescriptor(parameter_types=hints[:count], **fields)


class PythonHost(Host):
    """Introspect and call regular Python classes.

    The lineage of a class is its method resolution order, which linearizes multiple inheritance.
    """

    def constructors(self, cls: type) -> Iterator[MemberDescriptor]:
        for klass in cls.__mro__:
            init = vars(klass).get("__init__")
            if isinstance(init, OverloadSet):
                for variant in init.variants:
                    yield from describe(
                        unwrap(variant),
                        name="__init__",
                        owner=cls,
                        kind=MemberKind.CONSTRUCTOR,
                        binding=Binding.INSTANCE,
                    )
                return
            if init is not None:
                break
        yield from describe(
            cls, name="__init__", owner=cls, kind=MemberKind.CONSTRUCTOR, binding=Binding.STATIC
        )

    def declared_methods(self, cls: type, name: str | None = None) -> Iterator[MemberDescriptor]:
        members: Mapping[str, Any] = vars(cls)
        if name is not None:
            members = {name: members[name]} if name in members else {}
        for member_name, member in members.items():
            if member_name in _SKIPPED_METHODS:
                continue
            variants = member.variants if isinstance(member, OverloadSet) else [member]
            for variant in variants:
                if (binding := _binding(variant)) is None:
                    continue
                yield from describe(
                    unwrap(variant),
                    name=member_name,
                    owner=cls,
                    kind=MemberKind.METHOD,
                    binding=binding,
                )

    def superclass(self, cls: type) -> type | None:
        return cls.__base__

    def lineage(self, cls: type) -> Iterator[type]:
        return iter(cls.__mro__)

    def construct(self, descriptor: MemberDescriptor, args: Sequence[Any]) -> Any:
        if descriptor.binding is Binding.INSTANCE:
            # An overloaded `__init__`: allocate, then run the selected body.
            instance = descriptor.owner.__new__(descriptor.owner)
            self._call(descriptor, (instance,), args)
            return instance
        return self._call(descriptor, (), args)

    def invoke(
        self,
        descriptor: MemberDescriptor,
        receiver: Any,
        args: Sequence[Any],
        *,
        target: type | None = None,
    ) -> Any:
        if descriptor.binding is Binding.STATIC:
            return self._call(descriptor, (), args)
        if descriptor.binding is Binding.CLASS:
            if target is None:
                target = descriptor.owner if receiver is None else type(receiver)
            return self._call(descriptor, (target,), args)
        if receiver is None:
            raise TypeError(f"{descriptor} must be called on an instance")
        return self._call(descriptor, (receiver,), args)

    @staticmethod
    def _call(descriptor: MemberDescriptor, first: tuple[Any, ...], args: Sequence[Any]) -> Any:
        if descriptor.variadic:
            # Spread the trailing array back into `*args`.
            *leading, array = args
            return descriptor.handle(*first, *leading, *array)
        return descriptor.handle(*first, *args)
