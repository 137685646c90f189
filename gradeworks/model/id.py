"""Prefixed short-UUID identifiers, e.g. ``gcmp$Hg3vXkqLm5Qz8RtYbN2wAe``.

Each identifier type carries a four-letter prefix, so an id pasted into the
wrong field fails validation instead of silently matching nothing.
"""

from __future__ import annotations

import typing as t

import annotated_types as ant
import pydantic as p
import pydantic_core.core_schema as core_schema
import shortuuid

KeyLength = 22


class ShortUUIDKey(str):
    prefix: t.ClassVar[str]
    separator: t.ClassVar[str]

    @p.validate_call
    def __init_subclass__(cls, prefix: t.Annotated[str, ant.Len(4)], separator: t.Annotated[str, ant.Len(1)] = "$"):
        super().__init_subclass__()
        cls.prefix = prefix
        cls.separator = separator

    def __new__(cls, s: str | None = None, /, key: str | None = None) -> t.Self:
        """Mint a new id, wrap a bare ``key``, or validate a prefixed string ``s``."""
        if s is None:
            return super().__new__(cls, f"{cls.prefix}{cls.separator}{key or shortuuid.uuid()}")

        head = cls.prefix + cls.separator
        if not s.startswith(head):
            raise ValueError(f"invalid {cls.__name__}: {s!r} does not begin with {head!r}")
        body = s[len(head) :]
        if len(body) != KeyLength:
            raise ValueError(f"invalid {cls.__name__}: key must have length {KeyLength}")
        alphabet = shortuuid.get_alphabet()
        if bad := set(body) - set(alphabet):
            raise ValueError(f"invalid {cls.__name__}: unexpected characters {''.join(sorted(bad))!r}")
        return super().__new__(cls, s)

    @classmethod
    def __get_pydantic_core_schema__(cls, src: t.Any, handler: p.GetCoreSchemaHandler) -> core_schema.CoreSchema:
        from_str = core_schema.no_info_after_validator_function(cls, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_str]),
            serialization=core_schema.plain_serializer_function_ser_schema(str.__str__),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, src: t.Any, handler: p.GetJsonSchemaHandler) -> p.json_schema.JsonSchemaValue:
        pattern = f"^{cls.prefix}\\{cls.separator}[{shortuuid.get_alphabet()}]{{{KeyLength}}}$"
        return {"type": "string", "pattern": pattern}

    @property
    def key(self) -> str:
        return self[len(self.prefix) + len(self.separator) :]

    def __hash__(self) -> int:
        return str.__hash__(self)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.key}>"


# fmt: off
class SubjectID(ShortUUIDKey, prefix="subj"): ...
class GradeComponentID(ShortUUIDKey, prefix="gcmp"): ...
class SubjectCriterionID(ShortUUIDKey, prefix="crit"): ...
# fmt: on
