import re
from typing import Any

import pytest

from overcall.internal.dispatch import multipledispatch


class A:
    pass


class A1(A):
    pass


class B:
    pass


class B1(B):
    pass


def test_multipledispatch() -> None:
    @multipledispatch("test")
    def test(a: A, b: B) -> Any:
        return "good_a_b"

    @test.register
    def good_a_b1(a: A, b: B1) -> Any:
        return "good_a_b1"

    @test.register
    def good_a1_b(a: A1, b: B) -> Any:
        return "good_a1_b"

    # Check that the non-annotated registration works
    @test.register(A1, B1)
    def good_a1_b1(a, b) -> Any:  # type: ignore[no-untyped-def]
        return "good_a1_b1"

    assert test.canonical_name == "test"
    assert test(A(), B()) == "good_a_b"
    assert test(A(), B1()) == "good_a_b1"
    assert test(A1(), B()) == "good_a1_b"
    assert test(A1(), B1()) == "good_a1_b1"
    assert test.lookup(A1, B1) is good_a1_b1

    with pytest.raises(
        ValueError,
        match=re.escape("No `test` implementation found for: (<class 'int'>, <class 'int'>)"),
    ):
        test.lookup(int, int)


def test_multipledispatch_discovery() -> None:
    calls: list[None] = []

    def discover() -> None:
        calls.append(None)

        @test.register
        def discovered(value: A1) -> str:
            return "discovered"

    @multipledispatch("test", discovery_func=discover)
    def test(value: object) -> str:
        return "fallback"

    assert test(A1()) == "discovered"
    assert calls
    n_calls = len(calls)
    # Cached dispatches skip discovery.
    assert test(A1()) == "discovered"
    assert len(calls) == n_calls
