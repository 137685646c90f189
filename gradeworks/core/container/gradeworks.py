from __future__ import annotations

import datetime
import sys
import types

import pydantic as p
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Object, Provider, Resource, Singleton

from gradeworks.model import BaseModel, DeploymentEnvironment

from ..config import Secrets, Settings
from ..provider import LoggingProvider, TimestampProvider
from .grading import GradingContainer
from .vendor import VendorContainer


class BootConfiguration(BaseModel):
    """The arguments a container was booted with."""

    debug: bool
    env: DeploymentEnvironment
    config_root: p.FileUrl
    secrets_path: p.FileUrl | None = None
    override: tuple[str, ...] = ()


class GradeworksContainer(DeclarativeContainer):
    config: Configuration = Configuration()
    secrets: Configuration = Configuration()

    debug: Provider[bool] = Singleton(bool)
    env: Provider[DeploymentEnvironment] = Singleton(DeploymentEnvironment)
    booted: Provider[BootConfiguration | None] = Object(None)

    utcnow: Provider[TimestampProvider] = Object(lambda: datetime.datetime.now(datetime.UTC))

    logging: Provider[LoggingProvider] = Resource(LoggingProvider, config=config.logging, debug=debug)
    grading: Provider[GradingContainer] = Container(GradingContainer, config=config.grading)
    vendor: Provider[VendorContainer] = Container(
        VendorContainer, config=config.vendor, secrets=secrets, utcnow=utcnow
    )

    @staticmethod
    def boot(
        ct: GradeworksContainer,
        /,
        debug: bool,
        env: DeploymentEnvironment,
        config_root: p.FileUrl,
        secrets_path: p.FileUrl | None = None,
        override: tuple[str, ...] | None = None,
        wiring: tuple[str | types.ModuleType, ...] = (),
    ) -> BootConfiguration:
        """Load settings and secrets into ``ct``, configure logging and wire
        every imported ``gradeworks`` module for injection."""
        if config_root.scheme != "file":
            raise ValueError(f"unsupported scheme for config root: {config_root.scheme}")
        bc = BootConfiguration(
            debug=debug, env=env, config_root=config_root, secrets_path=secrets_path, override=override or ()
        )

        settings = Settings(env=env, root=config_root, override=bc.override)
        ct.config.from_pydantic(settings)
        ct.debug.override(debug)
        ct.env.override(env)

        modules = [mod for name, mod in sys.modules.items() if name.startswith("gradeworks.")]
        ct.wire(modules=[*wiring, *modules])

        logger = ct.logging().get_logger()
        for o in bc.override:
            key, value = o.split("=", 1)
            logger.info("overriding configuration parameter", extra={"key": key.strip(), "value": value.strip()})

        ct.secrets.from_pydantic(Secrets(env=env, root=secrets_path or config_root), exclude_none=True)

        logger.debug("configuration finished", extra={"config": str(config_root), "env": env.value})
        ct.booted.override(bc)
        return bc
