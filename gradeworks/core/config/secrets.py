import typing as t

import pydantic as p
from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import PydanticBaseSettingsSource

from gradeworks.model import BaseModel, DeploymentEnvironment

from .base import BaseSecrets
from .source import AnsibleVaultSecretsSource


class PinataSecrets(BaseSecrets):
    api_key: p.Secret[str]
    api_secret: p.Secret[str]


class Secrets(BaseSecrets, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    """Credentials decrypted from the environment's vault file, if it has one."""

    root: p.FileUrl
    env: DeploymentEnvironment

    pinata: PinataSecrets | None = None

    @classmethod
    def settings_customise_sources(
        cls, settings_cls: type[PydanticBaseSettings], init_settings: PydanticBaseSettingsSource, **_: t.Any
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, AnsibleVaultSecretsSource(settings_cls)
