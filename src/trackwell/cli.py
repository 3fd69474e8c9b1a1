"""Typer CLI for Trackwell."""

import typer
from rich.console import Console

app = typer.Typer(name="trackwell", help="Trackwell: product lifecycle record store")
console = Console()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
):
    """Start the Trackwell API server."""
    import uvicorn
    from trackwell.app import create_app
    from trackwell.common.config import get_settings
    from trackwell.common.logging import setup_logging

    setup_logging(get_settings().log_level)
    console.print(f"[bold green]Starting Trackwell on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command()
def digest(
    text: str = typer.Argument(..., help="Text to digest, e.g. a batch number"),
):
    """Print the attestation digest Trackwell derives for a text."""
    from trackwell.common.digest import digest_text

    console.print(f"[bold]{digest_text(text)}[/bold]")


@app.command()
def health(
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
):
    """Check Trackwell server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] v{data['version']}")
    except (httpx.HTTPError, ValueError, KeyError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
