from __future__ import annotations

import pydantic as p

from .base import BaseSettings


class PinataSettings(BaseSettings):
    api_base_url: p.HttpUrl = p.HttpUrl("https://api.pinata.cloud")
    gateway_url: p.HttpUrl = p.HttpUrl("https://gateway.pinata.cloud/ipfs/")
    max_file_size_mb: int = p.Field(default=100, gt=0)
    timeout: float = p.Field(default=30.0, gt=0)

    @p.field_serializer("api_base_url", "gateway_url")
    def serialize_url(self, v: p.HttpUrl) -> str:
        return str(v)


class VendorSettings(BaseSettings):
    pinata: PinataSettings = PinataSettings()
