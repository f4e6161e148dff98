from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from overcall.descriptors import MemberDescriptor


class Host(ABC):
    """The type introspection and dynamic invocation capability a resolver depends on.

    A Host enumerates the constructors and *declared* (not inherited) methods of a class, walks the
    class lineage and performs the actual calls. Resolution itself is independent of the Host.
    """

    @abstractmethod
    def constructors(self, cls: type) -> Iterable[MemberDescriptor]:
        raise NotImplementedError()

    @abstractmethod
    def declared_methods(
        self, cls: type, name: str | None = None
    ) -> Iterable[MemberDescriptor]:
        """Describe the methods declared by `cls` itself, only those called `name` if given."""
        raise NotImplementedError()

    @abstractmethod
    def superclass(self, cls: type) -> type | None:
        raise NotImplementedError()

    def lineage(self, cls: type) -> Iterator[type]:
        """Yield `cls` and its ancestors, most-derived first."""
        current: type | None = cls
        while current is not None:
            yield current
            current = self.superclass(current)

    @abstractmethod
    def construct(self, descriptor: MemberDescriptor, args: Sequence[Any]) -> Any:
        raise NotImplementedError()

    @abstractmethod
    def invoke(
        self,
        descriptor: MemberDescriptor,
        receiver: Any,
        args: Sequence[Any],
        *,
        target: type | None = None,
    ) -> Any:
        """Call a method with the packed `args`.

        `receiver` is the instance for instance-bound methods (or None). `target` is the class the
        method was resolved against, passed to class-bound methods.
        """
        raise NotImplementedError()

    def new_array(self, element_type: Any, length: int) -> list[Any]:
        return [None] * length
