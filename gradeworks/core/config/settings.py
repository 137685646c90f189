import typing as t

import pydantic as p
from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import PydanticBaseSettingsSource

from gradeworks.model import BaseModel, DeploymentEnvironment

from .base import BaseSettings
from .grading import GradingSettings
from .logging import LoggingSettings
from .source import OverrideSettingsSource, YAMLCascadingSettingsSource
from .vendor import VendorSettings


class Settings(BaseSettings, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    """Everything under the config root, merged for one environment.

    ``root``, ``env`` and ``override`` are passed in by the caller; the other
    fields come from ``<field>.yaml`` files and ``override`` entries.
    """

    root: p.FileUrl
    env: DeploymentEnvironment
    override: tuple[str, ...] = ()

    logging: LoggingSettings = p.Field(default=..., validate_default=True)
    grading: GradingSettings = p.Field(default_factory=GradingSettings)
    vendor: VendorSettings = p.Field(default_factory=VendorSettings)

    @classmethod
    def settings_customise_sources(
        cls, settings_cls: type[PydanticBaseSettings], init_settings: PydanticBaseSettingsSource, **_: t.Any
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # environment variables and dotenv files are not consulted
        return init_settings, OverrideSettingsSource(settings_cls), YAMLCascadingSettingsSource(settings_cls)
