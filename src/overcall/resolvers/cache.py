from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import TypeVar

from overcall.descriptors import MemberDescriptor, sort_descriptors
from overcall.hosts import Host
from overcall.internal.utils import qualname

Candidates = tuple[MemberDescriptor, ...]
K = TypeVar("K")


class MemberCache:
    """Memoize the ordered candidates of each class (constructors) and (class, name) (methods).

    Entries are built once, on first request, and never invalidated: classes are assumed not to
    change after their members are first enumerated. Misses are computed under a lock (unless
    `thread_safe=False`) and entries are immutable tuples, so readers never see partial entries.
    """

    def __init__(self, host: Host, *, thread_safe: bool = True) -> None:
        self.host = host
        self._constructors: dict[type, Candidates] = {}
        self._methods: dict[type, dict[str, Candidates]] = {}
        self._lock: AbstractContextManager[object] = (
            threading.Lock() if thread_safe else nullcontext()
        )

    def constructors(self, cls: type) -> Candidates:
        if (candidates := self._constructors.get(cls)) is not None:
            return candidates
        return self._fill(
            self._constructors, cls, lambda: sort_descriptors(self.host.constructors(cls)), cls
        )

    def methods(self, cls: type, name: str) -> Candidates:
        index = self._methods.get(cls)
        if index is not None and (candidates := index.get(name)) is not None:
            return candidates
        with self._lock:
            index = self._methods.setdefault(cls, {})
        return self._fill(index, name, lambda: self._collect_methods(cls, name), cls, name)

    def _collect_methods(self, cls: type, name: str) -> Candidates:
        candidates: list[MemberDescriptor] = []
        for klass in self.host.lineage(cls):
            # Sort each level separately, so overrides in subclasses come first.
            candidates.extend(sort_descriptors(self.host.declared_methods(klass, name)))
        return tuple(candidates)

    def _fill(
        self,
        entries: dict[K, Candidates],
        key: K,
        build: Callable[[], Candidates],
        cls: type,
        name: str | None = None,
    ) -> Candidates:
        with self._lock:
            if (candidates := entries.get(key)) is None:
                candidates = entries[key] = build()
                member = "constructors" if name is None else f"`{name}` methods"
                logging.debug(f"Cached {len(candidates)} {member} of {qualname(cls)}")
        return candidates

    def __len__(self) -> int:
        return len(self._constructors) + sum(len(index) for index in self._methods.values())
