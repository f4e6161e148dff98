import logging

import numpy as np

from overcall import MemberNotFoundError, OverloadMeta, OverloadResolver, TableHost, overload
from overcall.descriptors import Binding, array_type
from overcall.primitives import int64


class Point(metaclass=OverloadMeta):
    @overload
    def __init__(self) -> None:
        self.x, self.y = 0, 0

    @overload
    def __init__(self, x: int, y: int) -> None:
        self.x, self.y = x, y

    @overload
    def shift(self, dx: int) -> "Point":
        return Point(self.x + dx, self.y)

    @overload
    def shift(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"


class Ledger:
    def __init__(self) -> None:
        self.entries: list[int64] = []

    def record(self, amount: int64, *tags: str) -> int:
        self.entries.append(amount)
        return len(tags)


class Counter:
    """Described by hand with a TableHost, rather than introspected."""

    def __init__(self) -> None:
        self.value = 0


logging.basicConfig(level=logging.DEBUG)

resolver = OverloadResolver()

print(Point().shift(1), Point(1, 2).shift(1, 1))
print(resolver.invoke_instance_method(Point(), "shift", 3))

ledger = resolver.invoke_constructor(Ledger)
print(resolver.invoke_instance_method(ledger, "record", int64(10), "food", "travel"))
print(resolver.invoke_instance_method(ledger, "record", np.int64(5)))
try:
    resolver.invoke_instance_method(ledger, "record", 5)  # int isn't int64
except MemberNotFoundError as e:
    print(e)

host = TableHost()
host.register_constructor(Counter, [], Counter)
host.register_method(
    Counter,
    "add",
    [int, array_type(int)],
    lambda counter, first, rest: setattr(counter, "value", counter.value + first + sum(rest)),
    variadic=True,
    binding=Binding.INSTANCE,
)
table_resolver = OverloadResolver(host)
counter = table_resolver.invoke_constructor(Counter)
table_resolver.invoke_instance_method(counter, "add", 1, 2, 3)
print(counter.value)
