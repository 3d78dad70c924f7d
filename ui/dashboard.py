"""Real-time CLI dashboard for relay monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_relay_log

console = Console()


class RelayInfo:
    """Info about a single relayed request."""

    def __init__(self, method: str, path: str, status: int, elapsed_ms: int, timestamp: datetime):
        self.method = method
        self.path = path[:60] + "..." if len(path) > 60 else path
        self.status = status
        self.elapsed_ms = elapsed_ms
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent relays and upstream health."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._relays: list[RelayInfo] = []
        self._max_relays = 10
        self._counts = {"relayed": 0, "probes": 0, "errors": 0}
        self._last_probe: tuple[int, int | None, datetime] | None = None
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_relay(
        self,
        method: str,
        path: str,
        target_url: str,
        status: int,
        elapsed_ms: int,
        *,
        headers: list[tuple[str, str]] | None = None,
    ) -> None:
        """Log a request relayed upstream."""
        with self._lock:
            self._counts["relayed"] += 1
            self._relays.insert(0, RelayInfo(method, path, status, elapsed_ms, datetime.now()))
            self._relays = self._relays[: self._max_relays]

            if self.config.proxy.debug:
                write_relay_log(method, path, target_url, status, elapsed_ms, headers or [])
            write_cli_log("RELAY", f"{method} {path}", status=status, ms=elapsed_ms)

            self._refresh()

    def log_probe(self, latency: int, upstream_status: int | None) -> None:
        """Log a status probe result."""
        with self._lock:
            self._counts["probes"] += 1
            self._last_probe = (latency, upstream_status, datetime.now())
            write_cli_log("PROBE", self.config.probe.url, latency=latency, status=upstream_status)
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._counts["errors"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["body"].split_row(
            Layout(name="relays", ratio=2),
            Layout(name="upstream", ratio=1),
        )

        layout["header"].update(self._build_header())
        layout["relays"].update(self._build_relays_panel())
        layout["upstream"].update(self._build_upstream_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Where? Relay", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Relayed: {self._counts['relayed']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Probes: {self._counts['probes']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Errors: {self._counts['errors']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_relays_panel(self) -> Panel:
        """Build recent relays panel."""
        if self._relays:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Path", ratio=3)
            table.add_column("Status", width=6)
            table.add_column("ms", width=6, justify="right")

            for relay in self._relays:
                style = "green" if relay.status < 400 else "red"
                table.add_row(
                    relay.timestamp.strftime("%H:%M:%S"),
                    relay.method,
                    relay.path,
                    f"[{style}]{relay.status}[/{style}]",
                    str(relay.elapsed_ms),
                )
            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title=f"[blue]Relays -> {self.config.upstream.host}[/blue]", border_style="blue")

    def _build_upstream_panel(self) -> Panel:
        """Build last probe panel."""
        if self._last_probe:
            latency, status, timestamp = self._last_probe
            content = Table.grid(padding=(0, 1))
            content.add_column()
            content.add_column()
            if status is None:
                content.add_row("[bold]State:[/bold]", "[red]unreachable[/red]")
            else:
                accessible = 200 <= status < 400
                label = "[green]accessible[/green]" if accessible else "[yellow]limited[/yellow]"
                content.add_row("[bold]State:[/bold]", label)
                content.add_row("[bold]Status:[/bold]", str(status))
            content.add_row("[bold]Latency:[/bold]", f"{latency} ms")
            content.add_row("[bold]Time:[/bold]", timestamp.strftime("%H:%M:%S"))
        else:
            content = Text("No probes yet...", style="dim")

        return Panel(content, title="[magenta]Upstream[/magenta]", border_style="magenta")

    def _build_footer(self) -> Panel:
        """Build footer with errors and usage hint."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            base = f"http://{self.config.proxy.host}:{self.config.proxy.port}{self.config.upstream.prefix}"
            content = Text(
                f'git config --global url."{base}".insteadOf '
                f'"{self.config.upstream.scheme}://{self.config.upstream.host}/"',
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
