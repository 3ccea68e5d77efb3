"""Entry point for the ping-pong monitor — `pingpong` console script."""

from __future__ import annotations

import logging

import uvicorn
from rich.console import Console
from rich.panel import Panel

from src.config import settings

console = Console()


def main() -> None:
    """Start the API server; uvicorn handles SIGINT/SIGTERM shutdown."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    console.print(
        Panel.fit(
            f"[bold]Ping-Pong Monitor[/bold]\n"
            f"Bind:     {settings.api_host}:{settings.port}\n"
            f"Interval: {settings.ping_interval_seconds:.0f}s\n"
            f"Main:     {settings.main_server_url}\n"
            f"Proxy:    {settings.proxy_server_url}\n"
            f"Socket:   {settings.socket_server_url}",
            title="pingpong",
            border_style="green",
        )
    )

    uvicorn.run(
        "src.api.server:app",
        host=settings.api_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
