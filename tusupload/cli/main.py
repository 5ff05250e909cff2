"""tusupload CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

app = typer.Typer(
    name="tusupload",
    help="Resumable chunked uploads",
    add_completion=False
)
console = Console()

DEFAULT_ENDPOINT = "http://localhost:8082/upload"


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    endpoint: str = typer.Option(DEFAULT_ENDPOINT, "--endpoint", "-e", envvar="TUSUPLOAD_ENDPOINT", help="Upload endpoint URL"),
    name: str = typer.Option(None, "--name", "-n", help="Display name (defaults to file name)"),
    description: str = typer.Option(None, "--description", help="Upload description"),
    distributor: str = typer.Option(None, "--distributor", help="Distributor field"),
    resume: str = typer.Option(None, "--resume", "-r", help="Continue an existing upload resource"),
    max_retries: int = typer.Option(3, "--max-retries", help="Re-attempts per chunk"),
    timeout: float = typer.Option(60.0, "--timeout", help="Per-request timeout in seconds"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Initial chunk size in bytes"),
    fixed: bool = typer.Option(False, "--fixed", help="Disable adaptive chunk sizing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Upload a file to a resumable upload endpoint."""
    from tusupload import TusClient, UploadError, UploadProgress

    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    metadata = {}
    if description:
        metadata['description'] = description
    if distributor:
        metadata['distributor'] = distributor

    async def do_upload():
        try:
            config = TusClient.create_config(
                endpoint,
                timeout=timeout,
                max_retries=max_retries,
                adaptive=not fixed,
                chunk_size=chunk_size
            )
        except ValueError as e:
            console.print(f"[red]Invalid options: {e}[/red]")
            raise typer.Exit(2)

        async with TusClient(config=config) as client:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                TextColumn("{task.fields[chunk]}"),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=100, chunk="")

                def on_progress(p: UploadProgress):
                    progress.update(
                        task,
                        completed=p.percentage,
                        chunk=f"chunk {p.chunk_size // 1024} KB"
                    )

                try:
                    result = await client.upload(
                        file_path,
                        name=name,
                        metadata=metadata or None,
                        resource_id=resume,
                        progress_callback=on_progress
                    )
                except UploadError as e:
                    progress.stop()
                    console.print(f"[red]Upload failed: {e}[/red]")
                    if e.resource_id:
                        console.print(
                            f"Resource: {e.resource_id}  offset: {e.offset}  attempts: {e.attempts}"
                        )
                        console.print(f"Retry with: --resume {e.resource_id}")
                    raise typer.Exit(1)

        table = Table(show_header=False)
        table.add_row("Resource", result.resource_id)
        table.add_row("Size", f"{result.file_size:,} bytes")
        table.add_row("Chunks", str(result.chunks_sent))
        table.add_row("Retries", str(result.retries))
        table.add_row("Time", f"{result.elapsed:.2f}s")
        console.print("[green]Upload complete[/green]")
        console.print(table)

    run_async(do_upload())


@app.command()
def offset(
    resource_id: str = typer.Argument(..., help="Upload resource id"),
    endpoint: str = typer.Option(DEFAULT_ENDPOINT, "--endpoint", "-e", envvar="TUSUPLOAD_ENDPOINT", help="Upload endpoint URL"),
):
    """Show how many bytes the server holds for an upload."""
    from tusupload import TusClient, UploadError

    async def do_query():
        async with TusClient(endpoint) as client:
            try:
                value = await client.get_offset(resource_id)
            except UploadError as e:
                console.print(f"[red]Query failed: {e}[/red]")
                raise typer.Exit(1)
        console.print(f"{resource_id}: {value:,} bytes")

    run_async(do_query())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
