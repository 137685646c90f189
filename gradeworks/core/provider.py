import datetime
import inspect
import logging
import logging.config
import typing as t

TraceLevel: t.Final = 5

TimestampProvider = t.Callable[[], datetime.datetime]

Scope = t.Literal["mod", "cls", "fn"]


class TraceLogLevelLogger(logging.Logger):
    def trace(self, message: str, *args: t.Any, **kwargs: t.Any) -> None:
        if self.isEnabledFor(TraceLevel):
            self._log(TraceLevel, message, args, **kwargs)


class LoggingProvider(object):
    """Applies a ``dictConfig`` mapping and hands out loggers named after the
    module, class or function that asks for one."""

    def __init__(self, config: dict[str, t.Any], debug: bool):
        self.install_trace_level()
        logging.config.dictConfig(config)
        logging.captureWarnings(debug)

    @staticmethod
    def install_trace_level() -> None:
        logging.addLevelName(TraceLevel, "TRACE")
        logging.setLoggerClass(TraceLogLevelLogger)

    @classmethod
    def get_logger(cls, scope: Scope = "mod", name: str | None = None, n_frames: int = 1) -> TraceLogLevelLogger:
        if name is None:
            name = cls._caller_name(inspect.stack()[n_frames], scope)
        return t.cast(TraceLogLevelLogger, logging.getLogger(name))

    @staticmethod
    def _caller_name(frame: inspect.FrameInfo, scope: Scope) -> str:
        module = frame.frame.f_globals["__name__"]
        if scope == "mod":
            return module

        f_locals = frame.frame.f_locals
        owner: type | None = None
        if "self" in f_locals:
            owner = type(f_locals["self"])
        elif isinstance(f_locals.get("cls"), type):
            owner = f_locals["cls"]

        if scope == "cls":
            if owner is None:
                raise RuntimeError(f"{frame.function}() is not a method, cannot name a logger after its class")
            return f"{owner.__module__}.{owner.__name__}"
        if owner is None:
            return f"{module}.{frame.function}"
        return f"{module}.{owner.__name__}.{frame.function}"
