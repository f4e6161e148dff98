from __future__ import annotations

from typing import Any, Optional

import pytest
from pydantic import ValidationError

from overcall.descriptors import (
    Binding,
    MemberDescriptor,
    MemberKind,
    array_element_type,
    array_type,
    sort_descriptors,
)


class Owner:
    pass


def _noop(*args: Any) -> None:
    pass


def method(
    *parameter_types: Any, variadic: bool = False, name: str = "method"
) -> MemberDescriptor:
    return MemberDescriptor(
        name=name, owner=Owner, parameter_types=parameter_types, variadic=variadic, handle=_noop
    )


def test_defaults() -> None:
    descriptor = method()
    assert descriptor.kind is MemberKind.METHOD
    assert descriptor.binding is Binding.STATIC
    assert descriptor.parameter_count == 0
    assert not descriptor.variadic


def test_sort_key() -> None:
    assert method().sort_key == 0
    assert method(array_type(int), variadic=True).sort_key == 101
    assert method(int, str).sort_key == 200
    assert method(int, array_type(str), variadic=True).sort_key == 201


def test_sort_descriptors_is_stable() -> None:
    first, second = method(int, name="first"), method(str, name="second")
    variadic = method(array_type(int), variadic=True)
    empty = method()
    assert sort_descriptors([variadic, first, empty, second]) == (empty, first, second, variadic)
    assert sort_descriptors([second, first]) == (second, first)
    assert sort_descriptors([]) == ()


def test_element_type() -> None:
    descriptor = method(int, array_type(str), variadic=True)
    assert descriptor.element_type is str
    assert descriptor.runtime_element_type is str
    assert descriptor.runtime_types == (int, tuple)
    with pytest.raises(TypeError, match="is not variadic"):
        method(int).element_type  # noqa: B018


def test_variadic_validation() -> None:
    with pytest.raises(ValidationError, match="has no trailing array parameter"):
        method(variadic=True)
    with pytest.raises(ValidationError, match=r"Expected a `tuple\[T, ...\]` array type"):
        method(int, variadic=True)
    with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
        MemberDescriptor(name="m", owner=Owner, handle=_noop, junk=1)  # type: ignore[call-arg]
    with pytest.raises(ValidationError, match="Input should be a valid tuple"):
        MemberDescriptor(
            name="m", owner=Owner, handle=_noop, parameter_types=[int]  # type: ignore[arg-type]
        )


def test_immutable() -> None:
    descriptor = method(int)
    with pytest.raises(ValidationError, match="Instance is frozen"):
        descriptor.name = "other"  # type: ignore[misc]
    assert {descriptor: 1}[method(int)] == 1


def test_str() -> None:
    prefix = f"{Owner.__module__}.Owner"
    assert str(method()) == f"{prefix}.method()"
    assert str(method(int, Optional[str])) == f"{prefix}.method(int, Optional[str])"
    assert str(method(int, array_type(list[int]), variadic=True)) == (
        f"{prefix}.method(int, *list[int])"
    )


def test_array_type() -> None:
    assert array_type(int) == tuple[int, ...]
    assert array_element_type(tuple[str, ...]) is str
    for hint in (tuple[int, str], list[int], int):
        with pytest.raises(TypeError, match="array type"):
            array_element_type(hint)
