"""Typer CLI for Widget-Relay."""

import asyncio
import json

import typer
from rich.console import Console

app = typer.Typer(name="widget-relay", help="Widget-Relay: branded chat widget relay")
console = Console()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
):
    """Start the Widget-Relay API server."""
    import uvicorn
    from widget_relay.app import create_app

    console.print(f"[bold green]Starting Widget-Relay on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command()
def token(
    org_id: str = typer.Argument(..., help="Organization identifier"),
):
    """Print a signed organization bearer token."""
    from widget_relay.common.security import issue_org_token

    console.print(issue_org_token(org_id), soft_wrap=True)


@app.command()
def slug():
    """Generate a public slug (offline, no DB required)."""
    from widget_relay.chat_config.service import generate_slug
    from widget_relay.common.config import get_settings

    console.print(f"[bold]{generate_slug(get_settings().slug_length)}[/bold]")


@app.command("test-connection")
def test_connection(
    base_url: str = typer.Argument(..., help="Workflow runner base URL"),
    workflow_id: str = typer.Argument(..., help="Workflow identifier"),
    api_key: str = typer.Option(..., envvar="RELAY_WORKFLOW_API_KEY", help="Workflow API key"),
    message: str = typer.Option(None, help="Test message to send"),
):
    """Send a diagnostic message straight to a workflow endpoint."""
    from widget_relay.common.config import get_settings
    from widget_relay.relay.client import RelaySuccess, WorkflowRelay

    relay = WorkflowRelay(get_settings())
    result = asyncio.run(relay.test_connection(base_url, workflow_id, api_key, message))

    if isinstance(result, RelaySuccess):
        console.print(f"[bold green]{result.message}[/bold green]")
        console.print_json(json.dumps(result.payload, default=str))
    else:
        console.print(f"[bold red]{result.message}[/bold red]: {result.error}")
        raise typer.Exit(1)


@app.command()
def ask(
    config_id: int = typer.Argument(..., help="Numeric configuration id"),
    message: str = typer.Argument(..., help="Message to relay"),
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
    session: str = typer.Option(None, help="Session id (random when omitted)"),
):
    """Relay a chat message through a running server."""
    from widget_relay.client import ChatClient, ChatClientError

    with ChatClient(url, session_id=session) as client:
        try:
            reply = client.send(config_id, message)
        except ChatClientError as e:
            console.print(f"[bold red]Error:[/bold red] {e.message}")
            raise typer.Exit(1)
    console.print(reply.response)
    console.print(f"[dim]session {reply.session_id}[/dim]")


@app.command()
def health(
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
):
    """Check Widget-Relay server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] — v{data['version']}")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
