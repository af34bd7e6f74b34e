"""
CyberSecure Toolkit Console Interface
======================================

Rich-powered console abstraction giving every tool the same banner,
section headers, severity-coloured messages, tables and spinners.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_TOOLKIT_THEME = Theme(
    {
        "toolkit.banner": "bold bright_green",
        "toolkit.section": "bold bright_cyan",
        "toolkit.success": "bold green",
        "toolkit.warning": "bold yellow",
        "toolkit.error": "bold red",
        "toolkit.info": "bold bright_blue",
        "toolkit.dim": "dim white",
        "toolkit.critical": "bold white on red",
        "toolkit.high": "bold red",
        "toolkit.medium": "bold yellow",
        "toolkit.low": "bold bright_cyan",
        "toolkit.informational": "bold bright_blue",
        "toolkit.positive": "green",
    }
)

_BANNER_ART = r"""[bright_green]
   ___      _              ___
  / __|_  _| |__  ___ _ _ / __| ___ __ _  _ _ _ ___
 | (_| || | '_ \/ -_) '_|\__ \/ -_) _| || | '_/ -_)
  \___\_, |_.__/\___|_|  |___/\___\__|\_,_|_| \___|
      |__/
[/bright_green]"""

_TAGLINE = "Security Self-Check Toolkit"

SEVERITY_STYLES: dict[str, str] = {
    "CRITICAL": "toolkit.critical",
    "HIGH": "toolkit.high",
    "MEDIUM": "toolkit.medium",
    "LOW": "toolkit.low",
    "INFO": "toolkit.informational",
}


class ToolkitConsole:
    """Unified console interface for the toolkit.

    Usage::

        con = ToolkitConsole()
        con.banner()
        con.section("URL Analysis")
        con.success("No phishing indicators detected")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        """
        Args:
            quiet:  Suppress all output (library / test mode).
            record: Keep rendered output for later export.
        """
        self._console = Console(
            theme=_TOOLKIT_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    def banner(self, version: str = "1.0.0") -> None:
        subtitle = (
            f"[toolkit.banner]{_TAGLINE}[/toolkit.banner]\n"
            f"[toolkit.dim]Version: {version}[/toolkit.dim]"
        )
        self._console.print(
            Panel(
                Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
                border_style="bright_green",
                padding=(0, 2),
            )
        )

    def section(self, title: str) -> None:
        """Print a section header rule."""
        self._console.rule(f"  {title}  ", style="toolkit.section")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(
            f"[toolkit.success][✔] SUCCESS:[/toolkit.success] {escape(message)}"
        )

    def warning(self, message: str) -> None:
        self._console.print(
            f"[toolkit.warning][⚠] WARNING:[/toolkit.warning] {escape(message)}"
        )

    def error(self, message: str) -> None:
        self._console.print(
            f"[toolkit.error][✘] ERROR:[/toolkit.error] {escape(message)}"
        )

    def info(self, message: str) -> None:
        self._console.print(
            f"[toolkit.info][ℹ] INFO:[/toolkit.info] {escape(message)}"
        )

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
    ) -> None:
        """Render a styled table; every cell is stringified and escaped."""
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        for col_name in columns:
            tbl.add_column(col_name)
        for row in rows:
            tbl.add_row(*(escape(str(cell)) for cell in row))
        self._console.print(tbl)

    def findings_table(self, findings: Sequence[Any]) -> None:
        """Render findings with severity colouring.

        Expects objects with ``severity``, ``title`` and ``description``
        attributes (see :class:`shared.models.Finding`).
        """
        if not findings:
            return

        tbl = Table(
            title="Findings",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        tbl.add_column("#", style="dim", width=4, justify="right")
        tbl.add_column("Severity", width=10)
        tbl.add_column("Title")
        tbl.add_column("Description", ratio=2)

        for idx, finding in enumerate(findings, start=1):
            sev = getattr(finding, "severity", "INFO")
            sev_name = sev.value if hasattr(sev, "value") else str(sev).upper()
            style = SEVERITY_STYLES.get(sev_name, "")
            tbl.add_row(
                str(idx),
                f"[{style}]{sev_name}[/{style}]" if style else sev_name,
                escape(str(getattr(finding, "title", ""))),
                escape(str(getattr(finding, "description", ""))),
            )

        self._console.print(tbl)

    @contextmanager
    def status(self, message: str = "Working...") -> Generator[Any, None, None]:
        """Spinner shown while a network check is in flight."""
        with self._console.status(
            f"[toolkit.info]{message}[/toolkit.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj
