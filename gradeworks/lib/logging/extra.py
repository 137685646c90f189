import logging
import string
import textwrap
import typing as t

import pygments
from pygments.formatters import Terminal256Formatter
from pygments.lexers.data import JsonLexer  # pyright: ignore [reportMissingTypeStubs]
from pygments.style import Style

import gradeworks.lib.json as json

from .style import LogStyle

# attributes every LogRecord carries; anything else on a record came in through extra=
ReservedKeys = frozenset(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__) | {
    "asctime",
    "message",
    "taskName",
}


class _ExtraEncoder(json.JSONEncoder):
    def default(self, o: t.Any) -> t.Any:
        if isinstance(o, bytes):
            return f"<{len(o)} bytes>"
        try:
            return super().default(o)
        except TypeError:
            return repr(o)


class ExtraFormatter(logging.Formatter):
    """Delegates to a base formatter, then appends whatever the caller passed
    as ``extra=`` rendered as JSON, highlighted when writing to a terminal."""

    def __init__(
        self,
        base: type[logging.Formatter],
        format: str | None,
        datefmt: str | None = None,
        indent: bool = True,
        pyg_style: type[Style] = LogStyle,
        style: t.Literal["%", "{", "$"] = "%",
        validate: bool = True,
        **kwargs: t.Any,
    ):
        self.base = base(format, datefmt=datefmt, style=style, validate=validate, **kwargs)
        self.pyg_style = pyg_style
        self.indent = 4 if indent else None

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if "\n" in msg:
            self._hang(record, msg)
        message = self.base.format(record)

        extra = {k: v for k, v in record.__dict__.items() if k not in ReservedKeys}
        if not extra:
            return message

        rendered = json.dumps(extra, cls=_ExtraEncoder, sort_keys=True, indent=self.indent)
        if self.highlight:
            formatter = Terminal256Formatter(style=self.pyg_style)
            rendered = pygments.highlight(rendered, JsonLexer(), formatter)  # pyright: ignore
        return f"{message} {rendered.strip()}"

    def _hang(self, record: logging.LogRecord, msg: str) -> None:
        # continuation lines line up under the first character of the message
        prefix = self.base.format(record)
        prefix = prefix[: prefix.find(msg)]
        width = sum(1 for c in prefix if c in string.printable)
        first, rest = msg.split("\n", 1)
        record.msg = f"{first}\n{textwrap.indent(rest, ' ' * width)}"
        record.args = None

    @property
    def highlight(self) -> bool:
        if getattr(self.base, "no_color", False):
            return False
        stream = getattr(self.base, "stream", None)
        return bool(stream is not None and getattr(stream, "isatty", lambda: False)())

    def __getattr__(self, name: str) -> t.Any:
        return getattr(self.base, name)
