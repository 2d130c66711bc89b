"""Backblaze B2 CLI - Main commands."""
import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="blaze",
    help="Backblaze B2 cloud storage CLI",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def format_timestamp(millis: int) -> str:
    """Format a B2 millisecond timestamp as UTC."""
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging for every command."""
    from blazepy import setup_logging

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    setup_logging(level)


@app.command()
def buckets(
    key_id: str = typer.Option(..., "--id", "-i", envvar="B2_APPLICATION_KEY_ID", help="Application key id"),
    secret: str = typer.Option(..., "--secret", "-s", envvar="B2_APPLICATION_KEY", help="Application key"),
):
    """List buckets of the account."""
    from blazepy import B2Client, B2APIError

    async def do_list():
        async with B2Client(key_id, secret) as b2:
            try:
                found = await b2.list_buckets()
            except B2APIError as e:
                console.print(f"[red]Listing buckets failed: {e.kind.name}: {e.message}[/red]")
                raise typer.Exit(1)

            table = Table()
            table.add_column("Name")
            table.add_column("Type", style="cyan")
            table.add_column("Id", style="dim")
            for bucket in found:
                table.add_row(bucket.name, bucket.bucket_type or "-", bucket.id)
            console.print(table)

    run_async(do_list())


@app.command()
def ls(
    bucket_name: str = typer.Argument(..., help="Bucket name"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Only names with this prefix"),
    long: bool = typer.Option(False, "-l", "--long", help="Long format with details"),
    key_id: str = typer.Option(..., "--id", "-i", envvar="B2_APPLICATION_KEY_ID", help="Application key id"),
    secret: str = typer.Option(..., "--secret", "-s", envvar="B2_APPLICATION_KEY", help="Application key"),
):
    """List files in a bucket."""
    from blazepy import B2Client, B2APIError

    async def list_files():
        async with B2Client(key_id, secret) as b2:
            try:
                bucket = await b2.get_bucket(bucket_name)
                if bucket is None:
                    console.print(f"[red]Bucket not found: {bucket_name}[/red]")
                    raise typer.Exit(1)

                files = [f async for f in bucket.iter_files(prefix=prefix)]
            except B2APIError as e:
                console.print(f"[red]Listing failed: {e.kind.name}: {e.message}[/red]")
                raise typer.Exit(1)

            if long:
                table = Table()
                table.add_column("Size", justify="right")
                table.add_column("Uploaded")
                table.add_column("Name")
                table.add_column("Id", style="dim")
                for f in files:
                    table.add_row(f"{f.size:,}", format_timestamp(f.upload_timestamp), f.name, f.id)
                console.print(table)
            else:
                for f in files:
                    console.print(f.name)

    run_async(list_files())


@app.command()
def upload(
    bucket_name: str = typer.Argument(..., help="Destination bucket name"),
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Destination file name"),
    key_id: str = typer.Option(..., "--id", "-i", envvar="B2_APPLICATION_KEY_ID", help="Application key id"),
    secret: str = typer.Option(..., "--secret", "-s", envvar="B2_APPLICATION_KEY", help="Application key"),
):
    """Upload a file to a bucket."""
    from blazepy import B2Client, B2APIError

    async def do_upload():
        async with B2Client(key_id, secret) as b2:
            try:
                bucket = await b2.get_bucket(bucket_name)
                if bucket is None:
                    console.print(f"[red]Bucket not found: {bucket_name}[/red]")
                    raise typer.Exit(1)

                with console.status(f"Uploading {file_path.name}..."):
                    uploaded = await bucket.upload_file(file_path, name or file_path.name)
            except B2APIError as e:
                console.print(f"[red]Upload failed: {e.kind.name}: {e.message}[/red]")
                raise typer.Exit(1)

            console.print(f"[green]Uploaded {uploaded.name}[/green] ({uploaded.size:,} bytes)")
            console.print(f"File id: {uploaded.id}")

    run_async(do_upload())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
