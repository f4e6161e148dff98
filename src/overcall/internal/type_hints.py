from __future__ import annotations

import inspect
import sys
from collections.abc import Callable
from typing import (
    Annotated,
    Any,
    ForwardRef,
    Literal,
    NewType,
    TypeVar,
    Union,
    cast,
    get_args,
    get_origin,
)
from types import UnionType

NoneType = cast(type, type(None))  # mypy otherwise treats type(None) as an object

RuntimeType = type | tuple[type, ...]


def discard_Annotated(type_: Any) -> Any:
    return get_args(type_)[0] if is_annotated_hint(type_) else type_


def runtime_type(hint: Any) -> RuntimeType:
    """Reduce a type hint to something `isinstance` accepts.

    Parametrized generics are reduced to their origin (eg: `list[int]` -> `list`), so the element
    types are *not* checked.
    """
    hint = discard_Annotated(hint)
    if hint is Any or hint is inspect.Parameter.empty:
        return object
    if isinstance(hint, str | ForwardRef):
        return object  # Unresolved forward references aren't checked
    if hint is None:
        return NoneType
    if isinstance(hint, TypeVar):
        return object if hint.__bound__ is None else runtime_type(hint.__bound__)
    if isinstance(hint, NewType):
        return runtime_type(hint.__supertype__)
    origin = get_origin(hint)
    if is_union(origin):
        return _flatten(runtime_type(arg) for arg in get_args(hint))
    if origin is Literal:
        return _flatten(type(value) for value in get_args(hint))
    if origin is not None:
        return runtime_type(origin)
    if isinstance(hint, type):
        return hint
    raise TypeError(f"Unable to check values against the {hint!r} hint")


def _flatten(types: Any) -> tuple[type, ...]:
    flat: dict[type, None] = {}  # Ordered set
    for type_ in types:
        for member in type_ if isinstance(type_, tuple) else (type_,):
            flat[member] = None
    return tuple(flat)


def signature(fn: Callable[..., Any], *, follow_wrapped: bool = True) -> inspect.Signature | None:
    """Convenience wrapper around `inspect.signature`.

    String annotations (eg: from `from __future__ import annotations`) are evaluated. Annotations
    that can't be evaluated at runtime (eg: names imported under `TYPE_CHECKING`) are left as
    strings, which `runtime_type` doesn't check. Returns `None` for callables without an
    introspectable signature (eg: some C builtins).
    """
    try:
        return inspect.signature(fn, follow_wrapped=follow_wrapped, eval_str=True)
    except ValueError:
        return None
    except (AttributeError, NameError, SyntaxError, TypeError):
        # Fall back to evaluating the annotations one at a time.
        sig = inspect.signature(fn, follow_wrapped=follow_wrapped)
    namespace = _namespace(fn)
    return sig.replace(
        parameters=[
            param.replace(annotation=_eval_hint(param.annotation, namespace))
            for param in sig.parameters.values()
        ],
        return_annotation=_eval_hint(sig.return_annotation, namespace),
    )


def _namespace(fn: Callable[..., Any]) -> dict[str, Any]:
    target = inspect.unwrap(fn)
    if (namespace := getattr(target, "__globals__", None)) is not None:
        return cast(dict[str, Any], namespace)
    module = sys.modules.get(getattr(target, "__module__", None) or "")
    return vars(module) if module is not None else {}


def _eval_hint(hint: Any, namespace: dict[str, Any]) -> Any:
    if not isinstance(hint, str):
        return hint
    try:
        return eval(hint, namespace)  # noqa: S307
    except (AttributeError, NameError, SyntaxError, TypeError):
        return hint


# Hint inspection helpers


def is_annotated(type_: Any) -> bool:
    return type_ is Annotated


def is_annotated_hint(type_: Any) -> bool:
    return is_annotated(get_origin(type_))


def is_union(type_: Any) -> bool:
    # `Union[int, str]` or `int | str`
    return type_ is Union or type_ is UnionType


def is_union_hint(type_: Any) -> bool:
    return is_union(get_origin(type_))
