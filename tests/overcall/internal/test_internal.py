import pytest

from overcall.errors import InvocationError
from overcall.internal import wrap_exc


def test_wrap_exc() -> None:
    root_error = ValueError("test")
    with pytest.raises(ValueError, match="a - test") as exc:
        with wrap_exc(ValueError, prefix="a"):
            raise root_error
    assert exc.value.__cause__ is root_error

    with pytest.raises(ValueError, match="ab - test") as exc:
        with wrap_exc(ValueError, prefix="a"), wrap_exc(ValueError, prefix="b"):
            raise root_error
    assert exc.value.__cause__ is root_error

    with wrap_exc(ValueError, prefix="shouldn't run"):
        x = 5
    assert x == 5


def test_wrap_exc_catch() -> None:
    root_error = KeyError("k")
    with pytest.raises(InvocationError, match=r"^\[a\]\[b\] - KeyError: 'k'$") as exc:
        with wrap_exc(InvocationError, prefix="[a]", catch=Exception):
            with wrap_exc(InvocationError, prefix="[b]", catch=Exception):
                raise root_error
    assert exc.value.__cause__ is root_error

    # Exceptions not listed in `catch` pass through.
    with pytest.raises(KeyError):
        with wrap_exc(InvocationError, prefix="[a]", catch=ValueError):
            raise root_error
