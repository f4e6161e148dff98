from __future__ import annotations

import numpy as np

from overcall.primitives import SIGNED_INTS, UNSIGNED_INTS, float32, register_boxed_kind

# NOTE: numpy scalars are the "boxed" form of the primitive kinds. Scalars without a matching kind
# (eg: float16, longdouble, complex64) carry their own numpy type, so they only match parameters
# annotated with that numpy type.


@register_boxed_kind
def _bool(value: np.bool_) -> type:
    return bool


@register_boxed_kind
def _signed(value: np.signedinteger) -> type:
    return SIGNED_INTS.get(value.dtype.itemsize, type(value))


@register_boxed_kind
def _unsigned(value: np.unsignedinteger) -> type:
    return UNSIGNED_INTS.get(value.dtype.itemsize, type(value))


@register_boxed_kind
def _floating(value: np.floating) -> type:
    return {np.dtype(np.float32): float32, np.dtype(np.float64): float}.get(
        value.dtype, type(value)
    )


@register_boxed_kind
def _complex(value: np.complexfloating) -> type:
    return complex if value.dtype == np.dtype(np.complex128) else type(value)
