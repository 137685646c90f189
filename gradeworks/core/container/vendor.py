from __future__ import annotations

import pydantic as p
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Dependency, Factory, Provider

from gradeworks.lib.vendor import PinataClient

from ..provider import TimestampProvider


class PinataContainer(DeclarativeContainer):
    @staticmethod
    def provide_client(
        api_base_url: str,
        gateway_url: str,
        max_file_size_mb: int,
        timeout: float,
        api_key: p.Secret[str] | None,
        api_secret: p.Secret[str] | None,
        utcnow: TimestampProvider,
    ) -> PinataClient:
        if api_key is None or api_secret is None:
            raise RuntimeError("pinata credentials are not configured; add them to secrets.vault.yaml")
        return PinataClient(
            api_key=api_key,
            api_secret=api_secret,
            api_base_url=api_base_url,
            gateway_url=gateway_url,
            max_file_size_mb=max_file_size_mb,
            timeout=timeout,
            utcnow=utcnow,
        )

    config: Configuration = Configuration()
    secrets: Configuration = Configuration()
    utcnow: Provider[TimestampProvider] = Dependency()

    # a factory because each client owns an httpx connection pool bound to
    # the event loop it is used from
    client: Provider[PinataClient] = Factory(
        provide_client,
        api_base_url=config.api_base_url,
        gateway_url=config.gateway_url,
        max_file_size_mb=config.max_file_size_mb,
        timeout=config.timeout,
        api_key=secrets.api_key,
        api_secret=secrets.api_secret,
        utcnow=utcnow,
    )


class VendorContainer(DeclarativeContainer):
    config: Configuration = Configuration()
    secrets: Configuration = Configuration()
    utcnow: Provider[TimestampProvider] = Dependency()

    pinata: Provider[PinataContainer] = Container(
        PinataContainer, config=config.pinata, secrets=secrets.pinata, utcnow=utcnow
    )
