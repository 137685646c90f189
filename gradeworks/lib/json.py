"""JSON encoding for the values our records and command output carry."""

from __future__ import annotations

import base64
import datetime
import decimal
import enum
import functools
import json as pyjson
import pathlib
import typing as t

import pydantic as p

JSONPrimitive = str | int | float | bool | None
JSONValue = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]


@functools.singledispatch
def encode(obj: t.Any) -> JSONValue:
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@encode.register(p.BaseModel)
def _(obj: p.BaseModel) -> JSONValue:
    return obj.model_dump(mode="json")


@encode.register(decimal.Decimal)
def _(obj: decimal.Decimal) -> JSONValue:
    # as a string, so that 8.10 stays 8.10 rather than becoming a float
    return str(obj)


@encode.register(enum.Enum)
def _(obj: enum.Enum) -> JSONValue:
    return obj.value


@encode.register(datetime.date)
def _(obj: datetime.date) -> JSONValue:
    return obj.isoformat()


@encode.register(pathlib.PurePath)
def _(obj: pathlib.PurePath) -> JSONValue:
    return str(obj)


@encode.register(set)
@encode.register(frozenset)
def _(obj: set[t.Any] | frozenset[t.Any]) -> JSONValue:
    return list(obj)


@encode.register(bytes)
def _(obj: bytes) -> JSONValue:
    return base64.b64encode(obj).decode("utf8")


class JSONEncoder(pyjson.JSONEncoder):
    def default(self, o: t.Any) -> JSONValue:
        return encode(o)


def dumps(obj: t.Any, *, cls: type[pyjson.JSONEncoder] = JSONEncoder, **kwargs: t.Any) -> str:
    return pyjson.dumps(obj, cls=cls, **kwargs)
