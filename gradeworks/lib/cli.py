from __future__ import annotations

import enum
import pathlib
import typing as t

import click
import pydantic as p
from click import *  # noqa: F401, F403 # pyright: ignore [reportWildcardImportFromLibrary]

# Stands in for click in our command modules: everything click exports, plus
# the parameter types shared across commands.


class EnumType(click.Choice):
    """Choice over an enum's values, converted to the member."""

    def __init__(self, enum_cls: type[enum.Enum]):
        self.enum_cls = enum_cls
        super().__init__([str(m.value) for m in enum_cls], case_sensitive=False)
        self.name = enum_cls.__name__

    def convert(self, value: t.Any, param: click.Parameter | None, ctx: click.Context | None) -> enum.Enum:
        if isinstance(value, self.enum_cls):
            return value
        return self.enum_cls(super().convert(value, param, ctx))


class FileURLType(click.ParamType):
    """A local path or ``file://`` URL naming an existing directory."""

    name = "directory"

    def convert(self, value: t.Any, param: click.Parameter | None, ctx: click.Context | None) -> p.FileUrl:
        if isinstance(value, p.FileUrl):
            return value
        text = str(value)
        if "://" in text:
            if not text.startswith("file://"):
                self.fail(f"{text}: only local directories are supported", param, ctx)
            text = text.removeprefix("file://")
        path = pathlib.Path(text).expanduser().absolute()
        if not path.is_dir():
            self.fail(f"{value}: no such directory", param, ctx)
        return p.FileUrl(path.as_uri())
