from __future__ import annotations

import importlib
import pkgutil
import threading
from collections.abc import Callable, Iterable
from types import ModuleType
from typing import Any, TypeVar, cast

K = TypeVar("K")
V = TypeVar("V")


class ClassName:
    def __get__(self, obj: Any, type_: type[Any]) -> str:
        return type_.__name__


class_name = cast(Callable[[], str], ClassName)


def qualname(obj: Any) -> str:
    """Return the dotted `module.QualName` of a class or function, for messages."""
    module = getattr(obj, "__module__", None)
    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)
    if module in (None, "builtins"):
        return name
    return f"{module}.{name}"


def import_submodules(
    path: Iterable[str],  # module.__path__ is a list[str]
    name: str,
    *,
    lock: threading.Lock = threading.Lock(),
) -> dict[str, ModuleType]:
    """Import the direct submodules of the package at `path` (its `__path__`) named `name`.

    Used to load the modules registering `multipledispatch` handlers on first use. Call it lazily,
    not at import time, to avoid import cycles.
    """
    with lock:
        return {
            name: importlib.import_module(name)
            for _, name, _ in pkgutil.iter_modules(list(path), prefix=f"{name}.")
        }


def register(registry: dict[K, V], key: K, value: V) -> V:
    if key in registry:
        raise ValueError(f"{key} is already registered with: {registry[key]}!")
    registry[key] = value
    return value
