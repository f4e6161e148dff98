from types import ModuleType

import pytest

from overcall.internal.utils import class_name, import_submodules, qualname, register


def test_class_name() -> None:
    class Test:
        key = class_name()

    assert Test.key == "Test"
    assert Test().key == "Test"


def test_qualname() -> None:
    class Test:
        def method(self) -> None:
            pass

    assert qualname(Test) == f"{__name__}.test_qualname.<locals>.Test"
    assert qualname(Test.method) == f"{__name__}.test_qualname.<locals>.Test.method"
    assert qualname(int) == "int"
    assert qualname(len) == "len"
    assert qualname(type(None)) == "NoneType"


def test_import_submodules() -> None:
    import overcall.primitives

    output = import_submodules(overcall.primitives.__path__, overcall.primitives.__name__)
    assert set(output) == {"overcall.primitives.numpy"}
    assert all(isinstance(mod, ModuleType) for mod in output.values())


def test_register() -> None:
    registry: dict[str, int] = {}
    assert register(registry, "a", 1) == 1
    assert registry == {"a": 1}
    with pytest.raises(ValueError, match="a is already registered with: 1!"):
        register(registry, "a", 2)
    assert registry == {"a": 1}
