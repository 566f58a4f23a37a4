"""Taskbox CLI — run the API server and mint development tokens.

Usage:
    taskbox serve                                  # uvicorn on TASKBOX_HOST:TASKBOX_PORT
    taskbox serve --port 9000 --reload             # dev server with autoreload
    taskbox issue-token 3f6c... --email a@b.co     # token for the jwt provider
"""

from typing import Optional

import click

from taskbox.config import settings


@click.group()
def cli():
    """Taskbox — personal task lists behind bearer-token auth."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: TASKBOX_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: TASKBOX_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "taskbox.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,  # structlog owns logging
    )


@cli.command("issue-token")
@click.argument("user_id")
@click.option("--email", default=None, help="Email claim to embed")
@click.option("--minutes", default=None, type=int, help="Lifetime in minutes")
def issue_token(user_id: str, email: Optional[str], minutes: Optional[int]):
    """Print an access token accepted by the jwt identity provider."""
    if settings.identity_provider != "jwt":
        raise click.ClickException(
            "issue-token only works with TASKBOX_IDENTITY_PROVIDER=jwt"
        )
    if settings.environment != "development":
        raise click.ClickException("issue-token is for development only")

    from taskbox.auth.jwt import create_access_token

    click.echo(create_access_token(user_id, email=email, expires_minutes=minutes))


if __name__ == "__main__":
    cli()
