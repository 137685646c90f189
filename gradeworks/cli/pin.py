"""CLI commands for the file-pinning service."""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path

import gradeworks.lib.cli as click
from gradeworks.core import di
from gradeworks.lib.vendor import PinataClient


@click.group("pin")
def pin():
    """Pin, fetch and unpin files on IPFS through Pinata."""
    ...


@pin.command("upload")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", "-n", default=None, help="File name to record with the pin (defaults to the file's)")
@di.inject
def upload(path: Path, name: str | None, client: PinataClient = di.Provide["vendor.pinata.client"]) -> None:
    """Upload the file at PATH and print its CID and gateway URL."""
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

    async def run():
        async with client:
            return await client.upload(path.read_bytes(), name or path.name, content_type=content_type)

    result = asyncio.run(run())
    click.echo(f"cid:  {result.cid}")
    click.echo(f"url:  {result.url}")
    click.echo(f"size: {result.size}")
    if result.is_duplicate:
        click.echo("(content was already pinned)")


@pin.command("url")
@click.argument("cid")
@di.inject
def url(cid: str, client: PinataClient = di.Provide["vendor.pinata.client"]) -> None:
    """Print the gateway URL for CID."""
    click.echo(client.url(cid))


@pin.command("download")
@click.argument("cid")
@click.option(
    "--output", "-O", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write to file, not stdout"
)
@di.inject
def download(cid: str, output: Path | None, client: PinataClient = di.Provide["vendor.pinata.client"]) -> None:
    """Fetch CID from the gateway."""

    async def run():
        async with client:
            return await client.download(cid)

    data = asyncio.run(run())
    if output is None:
        click.get_binary_stream("stdout").write(data)
    else:
        output.write_bytes(data)
        click.echo(f"wrote {len(data)} bytes to {output}", err=True)


@pin.command("unpin")
@click.argument("cid")
@di.inject
def unpin(cid: str, client: PinataClient = di.Provide["vendor.pinata.client"]) -> None:
    """Remove the pin for CID."""

    async def run():
        async with client:
            await client.unpin(cid)

    asyncio.run(run())
    click.echo(f"unpinned {cid}")


@pin.command("status")
@click.argument("cid")
@di.inject
def status(cid: str, client: PinataClient = di.Provide["vendor.pinata.client"]) -> None:
    """Show the pins recorded for CID."""

    async def run():
        async with client:
            return await client.status(cid)

    pins = asyncio.run(run())
    if not pins.rows:
        click.echo(f"{cid}: not pinned")
        return
    for row in pins.rows:
        state = "unpinned" if row.date_unpinned else "pinned"
        name = row.metadata.name if row.metadata and row.metadata.name else "-"
        click.echo(f"{row.ipfs_pin_hash}  {state}  {row.size}  {name}")
