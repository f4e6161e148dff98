"""Select the first candidate whose formal parameters accept an argument list.

Candidates are expected in `sort_key` order, which makes "first compatible" prefer fewer
parameters and fixed-arity forms over variable-arity ones. There is no scoring or ambiguity check.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from overcall.descriptors import MemberDescriptor
from overcall.internal.type_hints import RuntimeType, runtime_type
from overcall.primitives import is_primitive, primitive_kind


def type_matches(hint: Any, value: Any) -> bool:
    return _runtime_type_matches(runtime_type(hint), value)


def _runtime_type_matches(type_: RuntimeType, value: Any) -> bool:
    if is_primitive(type_):
        return value is not None and primitive_kind(value) is type_
    if value is None:
        return True
    return isinstance(value, type_)


def _all_match(types: Sequence[RuntimeType], values: Sequence[Any]) -> bool:
    return all(_runtime_type_matches(type_, value) for type_, value in zip(types, values))


def _elements_match(descriptor: MemberDescriptor, values: Sequence[Any]) -> bool:
    element_type = descriptor.runtime_element_type
    return all(_runtime_type_matches(element_type, value) for value in values)


def _is_array(descriptor: MemberDescriptor, value: Any) -> bool:
    return isinstance(value, list | tuple) and _elements_match(descriptor, value)


def _prebuilt_array(descriptor: MemberDescriptor, args: Sequence[Any]) -> bool:
    """Whether the trailing argument must be read as an already packed array."""
    trailing = args[descriptor.parameter_count - 1 :]
    if _elements_match(descriptor, trailing):
        return False
    return len(args) == descriptor.parameter_count and _is_array(descriptor, args[-1])


def fixed_arity_matches(descriptor: MemberDescriptor, args: Sequence[Any]) -> bool:
    if descriptor.parameter_count != len(args):
        return False
    return _all_match(descriptor.runtime_types, args)


def variable_arity_matches(descriptor: MemberDescriptor, args: Sequence[Any]) -> bool:
    required = descriptor.parameter_count - 1
    if len(args) < required:
        return False
    if not _all_match(descriptor.runtime_types[:required], args[:required]):
        return False
    return _elements_match(descriptor, args[required:]) or _prebuilt_array(descriptor, args)


def matches(descriptor: MemberDescriptor, args: Sequence[Any]) -> bool:
    if descriptor.variadic:
        return variable_arity_matches(descriptor, args)
    return fixed_arity_matches(descriptor, args)


def find_match(
    candidates: Iterable[MemberDescriptor], args: Sequence[Any]
) -> MemberDescriptor | None:
    for candidate in candidates:
        if matches(candidate, args):
            return candidate
    return None


def pack_arguments(
    descriptor: MemberDescriptor,
    args: Sequence[Any],
    new_array: Callable[[Any, int], list[Any]],
) -> tuple[Any, ...]:
    """Shape `args` for calling `descriptor`.

    Fixed-arity arguments pass through unchanged. For variable-arity forms, the trailing arguments
    (or the items of a pre-built trailing array) are copied into a single array created with
    `new_array(element_type, length)`.
    """
    if not descriptor.variadic:
        return tuple(args)
    required = descriptor.parameter_count - 1
    leading, trailing = args[:required], args[required:]
    if _prebuilt_array(descriptor, args):
        trailing = args[-1]
    array = new_array(descriptor.element_type, len(trailing))
    for i, value in enumerate(trailing):
        array[i] = value
    return (*leading, array)
