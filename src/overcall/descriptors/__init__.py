from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from functools import cached_property
from typing import Any, get_args

from pydantic import model_validator

from overcall.internal.models import Model
from overcall.internal.type_hints import RuntimeType, runtime_type
from overcall.internal.utils import qualname

# Candidates are ordered by parameter count first, then fixed-arity before variable-arity.
ARITY_WEIGHT = 100


class MemberKind(Enum):
    CONSTRUCTOR = "constructor"
    METHOD = "method"


class Binding(Enum):
    """How the host supplies a receiver when calling a member."""

    STATIC = "static"  # No receiver
    CLASS = "class"  # The target class is passed first
    INSTANCE = "instance"  # The instance is passed first


class MemberDescriptor(Model):
    """One callable form of a constructor or method.

    For a variable-arity form, the last of the `parameter_types` is the trailing array type, spelled
    `tuple[T, ...]`, and `T` is the `element_type`.
    """

    name: str
    owner: type
    kind: MemberKind = MemberKind.METHOD
    binding: Binding = Binding.STATIC
    parameter_types: tuple[Any, ...] = ()
    variadic: bool = False
    handle: Callable[..., Any]

    @model_validator(mode="after")
    def _check_array_parameter(self) -> MemberDescriptor:
        if self.variadic:
            if not self.parameter_types:
                raise ValueError(f"{self.name} is variadic, but has no trailing array parameter")
            try:
                array_element_type(self.parameter_types[-1])
            except TypeError as e:
                raise ValueError(str(e)) from e
        return self

    @property
    def parameter_count(self) -> int:
        return len(self.parameter_types)

    @property
    def element_type(self) -> Any:
        if not self.variadic:
            raise TypeError(f"{self} is not variadic")
        return array_element_type(self.parameter_types[-1])

    @property
    def sort_key(self) -> int:
        return self.parameter_count * ARITY_WEIGHT + (1 if self.variadic else 0)

    @cached_property
    def runtime_types(self) -> tuple[RuntimeType, ...]:
        return tuple(runtime_type(hint) for hint in self.parameter_types)

    @cached_property
    def runtime_element_type(self) -> RuntimeType:
        return runtime_type(self.element_type)

    def __str__(self) -> str:
        params = [_hint_name(hint) for hint in self.parameter_types]
        if self.variadic:
            params[-1] = f"*{_hint_name(self.element_type)}"
        return f"{qualname(self.owner)}.{self.name}({', '.join(params)})"


def array_type(element_type: Any) -> Any:
    return tuple[element_type, ...]  # type: ignore[valid-type]


def array_element_type(hint: Any) -> Any:
    args = get_args(hint)
    if len(args) != 2 or args[1] is not Ellipsis:
        raise TypeError(f"Expected a `tuple[T, ...]` array type, got {hint}")
    return args[0]


def sort_descriptors(descriptors: Iterable[MemberDescriptor]) -> tuple[MemberDescriptor, ...]:
    """Order candidates by ascending `sort_key`, keeping the enumeration order of ties."""
    return tuple(sorted(descriptors, key=lambda descriptor: descriptor.sort_key))


def _hint_name(hint: Any) -> str:
    if isinstance(hint, str):
        return hint
    return hint.__name__ if isinstance(hint, type) else repr(hint).replace("typing.", "")
