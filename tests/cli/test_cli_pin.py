"""Tests for the ``gradeworks pin`` commands."""

from __future__ import annotations

import typing as t
from pathlib import Path

import httpx
import pydantic as p
import pytest
from click.testing import CliRunner, Result
from dependency_injector import providers

from gradeworks.cli.__main__ import main
from gradeworks.core import GradeworksContainer
from gradeworks.lib.vendor import PinataClient

Cid = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"


def respond(request: httpx.Request) -> httpx.Response:
    match (request.method, request.url.path):
        case ("POST", "/pinning/pinFileToIPFS"):
            return httpx.Response(200, json={"IpfsHash": Cid, "PinSize": 5, "isDuplicate": True})
        case ("DELETE", _):
            return httpx.Response(200, text="OK")
        case ("GET", "/data/pinList"):
            return httpx.Response(200, json={"count": 0, "rows": []})
        case ("GET", _):
            return httpx.Response(200, content=b"hello")
    return httpx.Response(405)


@pytest.fixture
def invoke(config_root: Path) -> t.Callable[..., Result]:
    def run(*args: str) -> Result:
        ct = GradeworksContainer()
        client = PinataClient(
            api_key=p.Secret("test-key"),
            api_secret=p.Secret("test-secret"),
            api_base_url="https://pinata.test",
            gateway_url="https://gateway.pinata.test/ipfs/",
            transport=httpx.MockTransport(respond),
        )
        ct.vendor().pinata().client.override(providers.Object(client))
        return CliRunner().invoke(main, ["-E", "test", "-c", str(config_root), "pin", *args], obj=ct)

    return run


class TestPinCommands(object):
    def test_upload(self, invoke: t.Callable[..., Result], tmp_path: Path) -> None:
        path = tmp_path / "report.txt"
        path.write_text("hello")

        result = invoke("upload", str(path))

        assert result.exit_code == 0, result.output
        assert f"cid:  {Cid}" in result.output
        assert f"url:  https://gateway.pinata.test/ipfs/{Cid}" in result.output
        assert "(content was already pinned)" in result.output

    def test_url(self, invoke: t.Callable[..., Result]) -> None:
        result = invoke("url", Cid)

        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == f"https://gateway.pinata.test/ipfs/{Cid}"

    def test_download_to_file(self, invoke: t.Callable[..., Result], tmp_path: Path) -> None:
        output = tmp_path / "out.bin"

        result = invoke("download", Cid, "-O", str(output))

        assert result.exit_code == 0, result.output
        assert output.read_bytes() == b"hello"

    def test_unpin(self, invoke: t.Callable[..., Result]) -> None:
        result = invoke("unpin", Cid)

        assert result.exit_code == 0, result.output
        assert f"unpinned {Cid}" in result.output

    def test_status_when_not_pinned(self, invoke: t.Callable[..., Result]) -> None:
        result = invoke("status", Cid)

        assert result.exit_code == 0, result.output
        assert f"{Cid}: not pinned" in result.output


class TestMissingCredentials(object):
    def test_reports_unconfigured_credentials(self, config_root: Path) -> None:
        result = CliRunner().invoke(
            main, ["-E", "test", "-c", str(config_root), "pin", "url", Cid], obj=GradeworksContainer()
        )

        assert result.exit_code != 0
        assert isinstance(result.exception, RuntimeError)
        assert "credentials are not configured" in str(result.exception)
