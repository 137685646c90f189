import typing as t

from pydantic_settings import BaseSettings as PydanticBaseSettings

from gradeworks.model import BaseModel


class _DictInitialized(PydanticBaseSettings, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    def __init__(self, cf: dict[str, t.Any] | None = None, **kwargs: t.Any):
        # specifically allow initialization with a dict
        if cf is not None:
            kwargs = {**cf, **kwargs}
        super().__init__(**kwargs)


class BaseSettings(_DictInitialized):
    pass


class BaseSecrets(_DictInitialized):
    pass
