from __future__ import annotations

from typing import Annotated, Any, Literal, NewType, Optional, TypeVar

import numpy as np
import pytest

from overcall.descriptors import MemberDescriptor, array_type
from overcall.primitives import char, float32, int32, int64, uint8
from overcall.resolvers.matcher import (
    find_match,
    fixed_arity_matches,
    matches,
    pack_arguments,
    type_matches,
    variable_arity_matches,
)


class Animal:
    pass


class Dog(Animal):
    pass


UserId = NewType("UserId", str)
AnimalT = TypeVar("AnimalT", bound=Animal)


def _noop(*args: Any) -> None:
    pass


def method(*parameter_types: Any, variadic: bool = False) -> MemberDescriptor:
    return MemberDescriptor(
        name="method",
        owner=Animal,
        parameter_types=parameter_types,
        variadic=variadic,
        handle=_noop,
    )


def new_array(element_type: Any, length: int) -> list[Any]:
    return [None] * length


@pytest.mark.parametrize(
    ("hint", "value", "expected"),
    [
        # Primitive kinds: exact, non-null.
        (int, 1, True),
        (int, True, False),
        (int, None, False),
        (int, 1.0, False),
        (int, int64(1), False),
        (int64, int64(1), True),
        (int64, 1, False),
        (int64, int32(1), False),
        (int64, np.int64(1), True),
        (int32, np.int32(1), True),
        (int32, np.int64(1), False),
        (uint8, np.uint8(1), True),
        (bool, True, True),
        (bool, np.bool_(False), True),
        (bool, 0, False),
        (float, 1.5, True),
        (float, 1, False),
        (float, np.float64(1.5), True),
        (float, float32(1.5), False),
        (float32, np.float32(1.5), True),
        (complex, 1j, True),
        (char, char("a"), True),
        (char, "a", False),
        # Reference types: subclasses and None.
        (str, "a", True),
        (str, None, True),
        (str, 1, False),
        (Animal, Dog(), True),
        (Dog, Animal(), False),
        (Dog, None, True),
        (object, 1, True),
        (Any, None, True),
        (Optional[int], None, True),
        (Optional[int], 1, True),
        (Optional[int], "a", False),
        (int | str, "a", True),
        (Annotated[Animal, "meta"], Dog(), True),
        (list[int], ["not", "checked"], True),
        (list[int], ("a",), False),
        (tuple[int, ...], (1, 2), True),
        (Literal["a", 1], "b", True),
        (Literal["a", 1], 1.5, False),
        (UserId, "someone", True),
        (AnimalT, Dog(), True),
        (AnimalT, 1, False),
    ],
)
def test_type_matches(hint: Any, value: Any, expected: bool) -> None:
    assert type_matches(hint, value) is expected


def test_fixed_arity_matches() -> None:
    descriptor = method(int, str)
    assert fixed_arity_matches(descriptor, (1, "a"))
    assert fixed_arity_matches(descriptor, (1, None))
    assert not fixed_arity_matches(descriptor, (1,))
    assert not fixed_arity_matches(descriptor, (1, "a", "b"))
    assert not fixed_arity_matches(descriptor, ("a", 1))
    assert fixed_arity_matches(method(), ())


def test_variable_arity_matches() -> None:
    descriptor = method(int, array_type(int), variadic=True)
    assert variable_arity_matches(descriptor, (1,))
    assert variable_arity_matches(descriptor, (1, 2))
    assert variable_arity_matches(descriptor, (1, 2, 3, 4))
    assert not variable_arity_matches(descriptor, ())
    assert not variable_arity_matches(descriptor, ("1", 2))
    assert not variable_arity_matches(descriptor, (1, 2, "3"))
    assert not variable_arity_matches(descriptor, (1, None))
    # Pre-built trailing arrays
    assert variable_arity_matches(descriptor, (1, [2, 3]))
    assert variable_arity_matches(descriptor, (1, (2, 3)))
    assert variable_arity_matches(descriptor, (1, []))
    assert not variable_arity_matches(descriptor, (1, [2, "3"]))
    assert not variable_arity_matches(descriptor, (1, [2], 3))

    references = method(array_type(str), variadic=True)
    assert variable_arity_matches(references, ())
    assert variable_arity_matches(references, (None, "a"))
    assert variable_arity_matches(references, (["a", None],))
    assert not variable_arity_matches(references, ([1],))

    assert matches(descriptor, (1, 2)) and not matches(method(int), (1, 2))


def test_find_match_takes_the_first_compatible_candidate() -> None:
    animal, dog = method(Animal), method(Dog)
    # No specificity scoring: the first compatible candidate wins, even if less specific.
    assert find_match([animal, dog], (Dog(),)) is animal
    assert find_match([dog, animal], (Dog(),)) is dog
    assert find_match([dog, animal], (Animal(),)) is animal
    assert find_match([dog], (Animal(),)) is None
    assert find_match([], ()) is None


def test_pack_arguments() -> None:
    fixed = method(int, str)
    assert pack_arguments(fixed, [1, "a"], new_array) == (1, "a")

    variadic = method(int, array_type(int), variadic=True)
    assert pack_arguments(variadic, (1,), new_array) == (1, [])
    assert pack_arguments(variadic, (1, 2, 3), new_array) == (1, [2, 3])
    assert pack_arguments(variadic, (1, (2, 3)), new_array) == (1, [2, 3])

    # Elements are read individually first, so a lone str is one element, not an array of chars.
    strings = method(array_type(str), variadic=True)
    assert pack_arguments(strings, ("ab",), new_array) == (["ab"],)
    assert pack_arguments(strings, (["a", "b"],), new_array) == (["a", "b"],)

    created: list[tuple[Any, int]] = []

    def tracking_array(element_type: Any, length: int) -> list[Any]:
        created.append((element_type, length))
        return new_array(element_type, length)

    pack_arguments(variadic, (1, 2, 3), tracking_array)
    assert created == [(int, 2)]
