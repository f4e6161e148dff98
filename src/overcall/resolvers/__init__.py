from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Any

from overcall.descriptors import Binding, MemberDescriptor
from overcall.errors import InvocationError, MemberNotFoundError
from overcall.hosts import Host
from overcall.hosts.python import PythonHost
from overcall.internal import wrap_exc
from overcall.resolvers.cache import MemberCache
from overcall.resolvers.matcher import find_match, pack_arguments


def _calling(descriptor: MemberDescriptor) -> AbstractContextManager[None]:
    return wrap_exc(InvocationError, prefix=f"[{descriptor}]", catch=Exception)


class OverloadResolver:
    """Find and call the constructor or method overload matching runtime arguments.

    Candidates come from the `host` (a `PythonHost` by default) and are cached per class and member
    name. The first candidate, in `sort_key` order, accepting the arguments is called. A missing
    member raises `MemberNotFoundError`; any exception raised by the call is re-raised as an
    `InvocationError` chained to the original.
    """

    def __init__(self, host: Host | None = None, *, thread_safe: bool = True) -> None:
        self.host = PythonHost() if host is None else host
        self.cache = MemberCache(self.host, thread_safe=thread_safe)

    def find_constructor(self, cls: type, args: Sequence[Any]) -> MemberDescriptor | None:
        return find_match(self.cache.constructors(cls), args)

    def find_method(self, cls: type, name: str, args: Sequence[Any]) -> MemberDescriptor | None:
        return find_match(self.cache.methods(cls, name), args)

    def resolve_constructor(self, cls: type, args: Sequence[Any]) -> MemberDescriptor:
        if (descriptor := self.find_constructor(cls, args)) is None:
            raise MemberNotFoundError(cls, None, args)
        logging.debug(f"Resolved {descriptor} for {len(args)} arguments")
        return descriptor

    def resolve_method(self, cls: type, name: str, args: Sequence[Any]) -> MemberDescriptor:
        if (descriptor := self.find_method(cls, name, args)) is None:
            raise MemberNotFoundError(cls, name, args)
        logging.debug(f"Resolved {descriptor} for {len(args)} arguments")
        return descriptor

    def invoke_constructor(self, cls: type, *args: Any) -> Any:
        descriptor = self.resolve_constructor(cls, args)
        packed = pack_arguments(descriptor, args, self.host.new_array)
        with _calling(descriptor):
            return self.host.construct(descriptor, packed)

    def invoke_class_method(self, cls: type, name: str, *args: Any) -> Any:
        return self.invoke_method(cls, None, name, *args)

    def invoke_instance_method(self, obj: Any, name: str, *args: Any) -> Any:
        return self.invoke_method(type(obj), obj, name, *args)

    def invoke_method(
        self, cls: type, obj: Any, name: str, *args: Any, target: type | None = None
    ) -> Any:
        """Call the `name` overload of `cls` matching `args`, on `obj` (or without a receiver).

        `target` is the class passed to class-bound methods. It defaults to `type(obj)`, or `cls`
        when there is no receiver.
        """
        descriptor = self.resolve_method(cls, name, args)
        return self._invoke(descriptor, cls, obj, args, target)

    def invoke_unbound_method(
        self, cls: type, name: str, *args: Any, target: type | None = None
    ) -> Any:
        """Call the `name` overload of `cls` accessed through the class, eg: `Cls.name(...)`.

        Static and class-bound overloads are tried with all of `args`. Failing that, a leading
        instance of `cls` is the receiver of an instance-bound overload matching the remaining
        arguments, as in `Cls.name(obj, ...)` or `map(Cls.name, objs)`.
        """
        if args and isinstance(args[0], cls):
            candidates = self.cache.methods(cls, name)
            unbound = [c for c in candidates if c.binding is not Binding.INSTANCE]
            if find_match(unbound, args) is None:
                bound = [c for c in candidates if c.binding is Binding.INSTANCE]
                if (descriptor := find_match(bound, args[1:])) is not None:
                    logging.debug(f"Resolved {descriptor} for {len(args) - 1} arguments")
                    return self._invoke(descriptor, cls, args[0], args[1:], target)
        return self.invoke_method(cls, None, name, *args, target=target)

    def _invoke(
        self,
        descriptor: MemberDescriptor,
        cls: type,
        obj: Any,
        args: Sequence[Any],
        target: type | None,
    ) -> Any:
        packed = pack_arguments(descriptor, args, self.host.new_array)
        if target is None:
            target = cls if obj is None else type(obj)
        with _calling(descriptor):
            return self.host.invoke(descriptor, obj, packed, target=target)

    def initialize(self, instance: Any, *args: Any, cls: type | None = None) -> None:
        """Run the constructor body matching `args` on an already allocated `instance`.

        `cls` (defaulting to `type(instance)`) selects the constructor candidates. Only constructors
        bound to an instance (eg: overloaded `__init__` variants) can initialize in place.
        """
        descriptor = self.resolve_constructor(type(instance) if cls is None else cls, args)
        if descriptor.binding is not Binding.INSTANCE:
            raise TypeError(f"{descriptor} can't initialize an existing instance")
        packed = pack_arguments(descriptor, args, self.host.new_array)
        with _calling(descriptor):
            self.host.invoke(descriptor, instance, packed)


default_resolver = OverloadResolver()

__all__ = ["MemberCache", "OverloadResolver", "default_resolver"]
