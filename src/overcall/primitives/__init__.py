"""Primitive value kinds.

A parameter annotated with one of the `PRIMITIVE_KINDS` only accepts arguments carrying exactly that
kind: there is no widening (an `int` is not a `float` nor an `int64`, a `bool` is not an `int`) and
`None` is rejected. Boxed values (eg: numpy scalars) carry the kind of the value they wrap, as
reported by `primitive_kind`.
"""

from __future__ import annotations

__path__ = __import__("pkgutil").extend_path(__path__, __name__)

import struct
from types import ModuleType
from typing import Any, ClassVar, Self

from overcall.internal.dispatch import multipledispatch
from overcall.internal.utils import import_submodules


class _int(int):
    _bits: ClassVar[int]
    _signed: ClassVar[bool]
    _min: ClassVar[int]
    _max: ClassVar[int]

    def __init_subclass__(cls, *, bits: int, signed: bool, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._bits, cls._signed = bits, signed
        if signed:
            cls._min, cls._max = -(2 ** (bits - 1)), (2 ** (bits - 1)) - 1
        else:
            cls._min, cls._max = 0, (2**bits) - 1

    def __new__(cls, i: int) -> Self:
        if isinstance(i, _int) and not isinstance(i, cls) and i._bits == cls._bits:
            # Reinterpret the bits between the signed and unsigned kinds of the same width.
            i = int(i) % (2**cls._bits)
            if cls._signed and i > cls._max:
                i -= 2**cls._bits
        if i > cls._max:
            raise ValueError(f"{i} is too large for {cls.__name__}.")
        if i < cls._min:
            hint = f" Hint: cast to int{cls._bits} first." if not cls._signed else ""
            raise ValueError(f"{i} is too small for {cls.__name__}.{hint}")
        return super().__new__(cls, i)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))

    # Arithmetic stays within the kind (and range checks the result).

    def __add__(self, x: int) -> Self:
        return type(self)(super().__add__(x))

    def __floordiv__(self, x: int) -> Self:
        return type(self)(super().__floordiv__(x))

    def __mod__(self, x: int) -> Self:
        return type(self)(super().__mod__(x))

    def __mul__(self, x: int) -> Self:
        return type(self)(super().__mul__(x))

    def __neg__(self) -> Self:
        return type(self)(super().__neg__())

    def __radd__(self, x: int) -> Self:
        return type(self)(super().__radd__(x))

    def __rmul__(self, x: int) -> Self:
        return type(self)(super().__rmul__(x))

    def __rsub__(self, x: int) -> Self:
        return type(self)(super().__rsub__(x))

    def __sub__(self, x: int) -> Self:
        return type(self)(super().__sub__(x))


class int8(_int, bits=8, signed=True):
    pass


class int16(_int, bits=16, signed=True):
    pass


class int32(_int, bits=32, signed=True):
    pass


class int64(_int, bits=64, signed=True):
    pass


class uint8(_int, bits=8, signed=False):
    pass


class uint16(_int, bits=16, signed=False):
    pass


class uint32(_int, bits=32, signed=False):
    pass


class uint64(_int, bits=64, signed=False):
    pass


class float32(float):
    """A float rounded to single precision."""

    def __new__(cls, x: float) -> Self:
        return super().__new__(cls, struct.unpack("f", struct.pack("f", x))[0])

    def __repr__(self) -> str:
        return f"float32({float(self)})"


class char(str):
    """A single character."""

    def __new__(cls, s: str) -> Self:
        if len(s) != 1:
            raise ValueError(f"char must be a single character, got {s!r}")
        return super().__new__(cls, s)

    def __repr__(self) -> str:
        return f"char({str(self)!r})"


SIGNED_INTS: dict[int, type[_int]] = {1: int8, 2: int16, 4: int32, 8: int64}
UNSIGNED_INTS: dict[int, type[_int]] = {1: uint8, 2: uint16, 4: uint32, 8: uint64}

PRIMITIVE_KINDS: frozenset[type] = frozenset(
    {bool, int, float, complex, char, float32, *SIGNED_INTS.values(), *UNSIGNED_INTS.values()}
)


def is_primitive(type_: Any) -> bool:
    return isinstance(type_, type) and type_ in PRIMITIVE_KINDS


_submodules: dict[str, ModuleType] | None = None


def _discover() -> None:
    global _submodules
    if _submodules is None:
        _submodules = import_submodules(__path__, __name__)


@multipledispatch("primitive_kind", discovery_func=_discover)
def primitive_kind(value: object) -> type:
    """Return the primitive kind carried by a (possibly boxed) value."""
    return type(value)


register_boxed_kind = primitive_kind.register

__all__ = [
    "PRIMITIVE_KINDS",
    "char",
    "float32",
    "int16",
    "int32",
    "int64",
    "int8",
    "is_primitive",
    "primitive_kind",
    "register_boxed_kind",
    "uint16",
    "uint32",
    "uint64",
    "uint8",
]
