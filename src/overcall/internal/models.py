from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, dataclass_transform

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from overcall.internal.utils import class_name


# Type checkers read model defaults from the metaclass' `dataclass_transform`, not from
# `model_config`. Re-declaring it with `frozen_default=True` lets them treat our models as immutable
# (and so hashable, which descriptors must be to key caches and sets).
@dataclass_transform(
    field_specifiers=(Field, PrivateAttr), frozen_default=True, kw_only_default=True
)
class ModelMeta(type(BaseModel)):
    pass


class Model(BaseModel, metaclass=ModelMeta):
    """Base for the value objects of the package: immutable, strictly validated and hashable."""

    _abstract_: ClassVar[bool] = True  # Only applies to the class setting it
    _type_key_: ClassVar[str] = class_name()

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
    )

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        cls._abstract_ = vars(cls).get("_abstract_", False)

    if not TYPE_CHECKING:

        def __new__(cls, *args, **kwargs):
            if cls._abstract_:
                raise TypeError(f"{cls._type_key_} cannot be instantiated directly.")
            return super().__new__(cls)

    def model_post_init(self, __context: Any) -> None:
        super().model_post_init(__context)
        hash(self)  # Fail early on unhashable field values (eg: lists)
