"""Console report — a rich table of every target's health record."""

from __future__ import annotations

from collections.abc import Mapping

from rich.console import Console
from rich.table import Table

from src.health.engine import Status
from src.health.store import HealthRecord

COLUMNS = (
    ("Server", 15),
    ("Status", 10),
    ("Response Time", 15),
    ("Last Ping", 25),
    ("Uptime", 10),
    ("Resource Usage", 20),
    ("URL", 50),
)

_STATUS_STYLE = {
    Status.SUCCESS: "green",
    Status.FAILED: "red",
    Status.UNKNOWN: "yellow",
}


def build_table(records: Mapping[str, HealthRecord]) -> Table:
    table = Table(title="Server Pings", show_lines=False)
    for header, width in COLUMNS:
        table.add_column(header, max_width=width, overflow="fold")

    for rec in records.values():
        table.add_row(
            rec.name,
            f"[{_STATUS_STYLE[rec.status]}]{rec.status.value}[/]",
            f"{rec.response_time_ms}ms",
            rec.last_ping_at or "N/A",
            rec.uptime,
            rec.resource_usage,
            rec.url,
        )
    return table


def print_report(records: Mapping[str, HealthRecord], console: Console | None = None) -> None:
    """Print the table for a store snapshot (used as the cycle-complete callback)."""
    console = console or Console()
    console.print(build_table(records))
    console.rule(style="dim")
