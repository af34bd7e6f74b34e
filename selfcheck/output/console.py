"""
Self-Check Console Output
==========================

Rich-based console formatters for self-check results: a score meter for
the three scorers, warning and positive lists, breach tables and the
reachability panel.

Results produced from simulated data are always preceded by a
prominent SIMULATED banner.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Any, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import ToolkitConsole
from shared.models import ScanResult


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

_LEVEL_COLOURS: dict[str, str] = {
    # password strength
    "Weak": "bold red",
    "Fair": "bold yellow",
    "Good": "bold green",
    "Strong": "bold bright_green",
    "Very Strong": "bold bright_green",
    # URL threat
    "Safe": "bold bright_green",
    "Suspicious": "bold yellow",
    "Dangerous": "bold white on red",
    # WiFi
    "Excellent": "bold bright_green",
    "Poor": "bold red",
}

_METER_WIDTH = 40
_METER_SEGMENTS = ("red", "yellow", "green", "bright_green")


class SelfCheckConsoleOutput:
    """Console output formatters for self-check results.

    Usage::

        output = SelfCheckConsoleOutput(ToolkitConsole())
        output.display(result)
    """

    def __init__(self, console: Optional[ToolkitConsole] = None) -> None:
        self.console = console or ToolkitConsole()
        self._rich = self.console.rich

    def display(self, result: ScanResult) -> None:
        """Dispatch on ``result.tool_name``."""
        if result.rejected:
            self.console.error(result.summary)
            return
        if result.simulated:
            self._simulated_banner(result)

        handlers = {
            "password": self.display_password,
            "generator": self.display_generated,
            "url": self.display_url,
            "wifi": self.display_wifi,
            "breach": self.display_breach,
            "status": self.display_status,
        }
        handlers[result.tool_name](result)

    # ------------------------------------------------------------------ #
    #  Scorers
    # ------------------------------------------------------------------ #

    def display_password(self, result: ScanResult) -> None:
        """Strength meter, details table and improvement suggestions."""
        self.console.section("Password Analysis")
        data = result.metadata
        if result.score is None:
            self.console.info(result.summary)
            return

        self._rich.print(Panel(
            self._meter(result.score, result.level, higher_is_better=True),
            title="Strength Meter",
            border_style="cyan",
        ))

        tbl = self._property_table()
        tbl.add_row("Length", str(data.get("length", 0)))
        tbl.add_row("Entropy", f"{data.get('entropy', 0.0):.1f} bits")
        tbl.add_row("Character Types", ", ".join(data.get("detected_char_types", [])) or "-")
        self._rich.print(tbl)

        feedback = data.get("feedback", [])
        if feedback:
            self._rich.print()
            self._rich.print("[bold]Suggestions:[/bold]")
            for message in feedback:
                self._rich.print(f"  [yellow]⚠[/yellow] {escape(message)}")

    def display_generated(self, result: ScanResult) -> None:
        self.console.section("Generated Password")
        data = result.metadata
        self._rich.print(Panel(
            Text(data.get("password", ""), style="bold bright_green"),
            title=f"{data.get('length', 0)} characters, pool of {data.get('pool_size', 0)}",
            border_style="bright_green",
        ))
        if result.score is not None:
            self._rich.print(self._meter(result.score, result.level, higher_is_better=True))

    def display_url(self, result: ScanResult) -> None:
        """Threat meter plus warning and positive indicator lists."""
        self.console.section("URL Phishing Analysis")
        self._rich.print(Panel(
            self._meter(result.score or 0, result.level, higher_is_better=False),
            title=f"Risk Score: {escape(result.metadata.get('hostname', ''))}",
            border_style="cyan",
        ))
        self._indicator_lists(result.metadata)

    def display_wifi(self, result: ScanResult) -> None:
        self.console.section("WiFi Configuration Analysis")
        data = result.metadata

        self._rich.print(Panel(
            self._meter(result.score or 0, result.level, higher_is_better=False),
            title="Risk Score",
            border_style="cyan",
        ))

        tbl = self._property_table()
        tbl.add_row("SSID", Text(data.get("ssid", "")))
        tbl.add_row(
            "Encryption",
            Text(
                f"{data.get('encryption', '')} ({data.get('encryption_rating', '')}): "
                f"{data.get('encryption_description', '')}"
            ),
        )
        if data.get("channel") is not None:
            tbl.add_row("Channel", str(data["channel"]))
        if data.get("signal_dbm") is not None:
            tbl.add_row("Signal", f"{data['signal_dbm']} dBm")
        self._rich.print(tbl)
        self.console.findings_table([f for f in result.findings if not f.recommendation])

        recommendations = data.get("recommendations", [])
        if recommendations:
            self._rich.print()
            self._rich.print("[bold]Security Recommendations:[/bold]")
            for advice in recommendations:
                self._rich.print(f"  [cyan]•[/cyan] {escape(advice)}")

    # ------------------------------------------------------------------ #
    #  Collectors
    # ------------------------------------------------------------------ #

    def display_breach(self, result: ScanResult) -> None:
        self.console.section("Email Breach Check")
        data = result.metadata
        breaches = data.get("breaches", [])

        if not data.get("breached"):
            self.console.success(data.get("message", result.summary))
            return

        self.console.warning(data.get("message", result.summary))
        self.console.table(
            "Breaches",
            ["Name", "Date", "Accounts", "Title"],
            [
                (b["name"], b["breach_date"], f"{b['pwn_count']:,}", b["title"])
                for b in breaches
            ],
            caption=escape(f"Source: {data.get('source', 'live')}"),
        )
        self._rich.print(
            "[bold]Recommendation:[/bold] change reused passwords and "
            "enable two-factor authentication."
        )

    def display_status(self, result: ScanResult) -> None:
        self.console.section("Website Status")
        data = result.metadata
        simulated_fields = set(data.get("simulated_fields", []))

        def mark(field: str, value: Any) -> str:
            text = escape(str(value))
            return f"{text} [dim](simulated)[/dim]" if field in simulated_fields else text

        tbl = self._property_table()
        tbl.add_row("Domain", Text(data.get("domain", result.target)))
        tbl.add_row("Global Status", mark("global_status", data.get("global_status")))
        tbl.add_row("From Here", Text(data.get("user_status", "")))
        tbl.add_row("Status Code", str(data.get("status_code") or "-"))
        tbl.add_row("Response Time", mark("response_time_ms", f"{data.get('response_time_ms', 0)} ms"))
        tbl.add_row("Issue", mark("issue", data.get("issue", "")))
        self._rich.print(tbl)

        if data.get("just_for_user"):
            self.console.warning("The site is up, the problem is on your side.")
        elif data.get("is_down"):
            self.console.error(f"{data.get('domain')} appears to be down for everyone.")
        else:
            self.console.success(f"{data.get('domain')} is up.")

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #

    def _simulated_banner(self, result: ScanResult) -> None:
        fields = result.metadata.get("simulated_fields") or []
        detail = f" Simulated fields: {', '.join(fields)}." if fields else ""
        self._rich.print(Panel(
            Text(
                "SIMULATED RESULT - the live service could not be used, "
                f"so this answer was generated locally.{detail}",
                style="bold black on yellow",
            ),
            border_style="bold yellow",
        ))

    def _indicator_lists(self, data: dict[str, Any]) -> None:
        findings = data.get("findings", [])
        warnings = [f["message"] for f in findings if f["tag"] == "warning"]
        positives = [f["message"] for f in findings if f["tag"] == "positive"]
        if warnings:
            self._rich.print("[bold]Warnings:[/bold]")
            for message in warnings:
                self._rich.print(f"  [yellow]⚠[/yellow] {escape(message)}")
        if positives:
            self._rich.print("[bold]Positive Indicators:[/bold]")
            for message in positives:
                self._rich.print(f"  [green]✔[/green] {escape(message)}")

    @staticmethod
    def _property_table() -> Table:
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        return tbl

    @staticmethod
    def _meter(score: int, level: str, *, higher_is_better: bool) -> Text:
        """Coloured 0-100 bar; colours run red to green in the good direction."""
        filled = max(0, min(_METER_WIDTH, int((score / 100) * _METER_WIDTH)))
        segments = _METER_SEGMENTS if higher_is_better else _METER_SEGMENTS[::-1]

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{score}/100  ")
        meter.append("[", style="dim")
        for i in range(_METER_WIDTH):
            if i < filled:
                meter.append("█", style=segments[i * len(segments) // _METER_WIDTH])
            else:
                meter.append("░", style="dim")
        meter.append("]  ", style="dim")
        meter.append(level.upper(), style=_LEVEL_COLOURS.get(level, "white"))
        return meter
