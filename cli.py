"""CLI entry point for where-relay."""

import asyncio
import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, Config, load_config
from core.exceptions import ProbeError
from services.probe import StatusProbe
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


class _ConsoleLogger:
    """Minimal logger for one-shot commands."""

    def log_relay(self, method, path, target_url, status, elapsed_ms, *, headers=None) -> None:
        pass

    def log_probe(self, latency: int, upstream_status: int | None) -> None:
        pass

    def log_error(self, route: str, status: int, message: str) -> None:
        console.print(f"[red][ERROR][/red] {route} {status}: {message}")


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            sys.exit(print_probe_status(config))

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        console.print(f"[red][ERROR][/red] Unknown option: {arg}")
        _print_help()
        sys.exit(2)

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    # Run with dashboard
    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Relay started", port=config.proxy.port, upstream=config.upstream.host)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Relay stopped", duration=str(duration))
        dashboard.stop()


def print_probe_status(config: Config) -> int:
    """Run one status probe and print the result. Returns an exit code."""
    import httpx

    async def _probe():
        async with httpx.AsyncClient() as client:
            return await StatusProbe(client, config.probe).check(_ConsoleLogger())

    try:
        result = asyncio.run(_probe())
    except ProbeError as e:
        console.print(f"[red]Degraded[/red] {config.probe.url}: {e}")
        return 1

    style = "green" if result["github_status"] == "accessible" else "yellow"
    console.print(f"[bold]Probe:[/bold] {config.probe.url}")
    console.print(f"[bold]GitHub:[/bold] [{style}]{result['github_status']}[/{style}]")
    console.print(f"[bold]Latency:[/bold] {result['latency']} ms")
    return 0


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Where? Relay[/bold cyan]

Relays /proxy/<path> to github.com/<path> with permissive CORS headers.

[bold]Usage:[/bold]
    where-relay              Start with live dashboard
    where-relay --check      Probe upstream reachability once
    where-relay --config     Show config location
    where-relay --help       Show this help

[bold]Git:[/bold]
    git config --global url."http://127.0.0.1:8080/proxy/".insteadOf "https://github.com/"
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
