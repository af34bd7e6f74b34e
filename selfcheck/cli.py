"""
Self-Check CLI
===============

Click-based command-line interface for the self-check tools.

Usage::

    python -m selfcheck password
    python -m selfcheck generate --length 20 --no-symbols
    python -m selfcheck url "http://paypal-secure-login.com/verify"
    python -m selfcheck wifi --ssid HomeNetwork5G --encryption WPA3 --channel 6
    python -m selfcheck breach user@example.com --offline
    python -m selfcheck --output json status example.com

Rejected input prints an error and exits with status 2.

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
import contextlib
from pathlib import Path
from typing import Optional

import click

from shared.config import ToolkitConfig
from shared.console import ToolkitConsole
from shared.models import ScanResult

from selfcheck import __version__
from selfcheck.core.engine import SelfCheckEngine
from selfcheck.core.models import CharsetSelection, EncryptionType
from selfcheck.output.console import SelfCheckConsoleOutput
from selfcheck.output.report import SelfCheckReportGenerator

REJECTED_EXIT_CODE = 2


def _run_async(coro):
    """Run an async engine call from a synchronous Click handler."""
    return asyncio.run(coro)


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="selfcheck")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="TOML configuration file (default: config.toml in the project root).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json", "html"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path (for JSON/HTML output).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """CyberSecure Self-Check -- personal security self-assessment.

    Score passwords, generate new ones, check URLs for phishing signs,
    rate a WiFi setup, look up email breaches and check whether a
    website is down.
    """
    ctx.ensure_object(dict)

    toolkit_config = ToolkitConfig.load(config)
    ctx.obj["config"] = toolkit_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet

    console = ToolkitConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["display"] = SelfCheckConsoleOutput(console)
    ctx.obj["reporter"] = SelfCheckReportGenerator()

    if not quiet and output == "console":
        console.banner(version=__version__)


def _engine(ctx: click.Context) -> SelfCheckEngine:
    """Build the engine after subcommand flags have adjusted the config."""
    return SelfCheckEngine(ctx.obj["config"])


def _spinner(ctx: click.Context, message: str):
    """Spinner for console output only; JSON on stdout stays clean."""
    if ctx.obj["output_format"] != "console":
        return contextlib.nullcontext()
    return ctx.obj["console"].status(message)


def _handle_output(ctx: click.Context, result: ScanResult) -> None:
    """Render *result* in the selected format; exit 2 when rejected."""
    output_format = ctx.obj["output_format"]
    output_file = ctx.obj["output_file"]
    reporter: SelfCheckReportGenerator = ctx.obj["reporter"]
    console: ToolkitConsole = ctx.obj["console"]

    if result.rejected:
        console.error(result.summary)
        ctx.exit(REJECTED_EXIT_CODE)

    if output_format == "console":
        ctx.obj["display"].display(result)
    elif output_format == "json":
        if output_file:
            path = reporter.generate_json(result, Path(output_file))
            console.success(f"JSON report saved to: {path}")
        else:
            click.echo(reporter.render_json(result))
    elif output_format == "html":
        if output_file:
            path = Path(output_file)
        else:
            output_dir = Path(ctx.obj["config"].global_settings.output_dir)
            path = output_dir / f"selfcheck_report_{result.tool_name}.html"
        path = reporter.generate_html(result, path)
        console.success(f"HTML report saved to: {path}")


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("password", required=False)
@click.pass_context
def password(ctx: click.Context, password: Optional[str]) -> None:
    """Score the strength of a password.

    Prompts with hidden input when PASSWORD is omitted, which keeps the
    password out of shell history.
    """
    if password is None:
        password = click.prompt("Password", hide_input=True, default="", show_default=False)
    result = _run_async(_engine(ctx).analyze_password(password))
    _handle_output(ctx, result)


@cli.command()
@click.option("--length", "-l", type=int, default=None,
              help="Password length (default from configuration).")
@click.option("--uppercase/--no-uppercase", default=None, help="Include A-Z.")
@click.option("--lowercase/--no-lowercase", default=None, help="Include a-z.")
@click.option("--digits/--no-digits", default=None, help="Include 0-9.")
@click.option("--symbols/--no-symbols", default=None, help="Include symbols.")
@click.option("--secure", is_flag=True, default=False,
              help="Draw from the operating system CSPRNG.")
@click.pass_context
def generate(
    ctx: click.Context,
    length: Optional[int],
    uppercase: Optional[bool],
    lowercase: Optional[bool],
    digits: Optional[bool],
    symbols: Optional[bool],
    secure: bool,
) -> None:
    """Generate a random password from the selected character pools."""
    settings = ctx.obj["config"].password
    if length is None:
        length = settings.default_length
    if not settings.min_length <= length <= settings.max_length:
        raise click.BadParameter(
            f"must be between {settings.min_length} and {settings.max_length}",
            param_hint="--length",
        )
    if secure:
        settings.secure_random = True

    charset = CharsetSelection(
        uppercase=settings.uppercase if uppercase is None else uppercase,
        lowercase=settings.lowercase if lowercase is None else lowercase,
        digits=settings.digits if digits is None else digits,
        symbols=settings.symbols if symbols is None else symbols,
    )
    result = _run_async(_engine(ctx).generate_password(length, charset))
    _handle_output(ctx, result)


@cli.command()
@click.argument("url")
@click.pass_context
def url(ctx: click.Context, url: str) -> None:
    """Score a URL for phishing indicators (no request is made)."""
    result = _run_async(_engine(ctx).analyze_url(url))
    _handle_output(ctx, result)


@cli.command()
@click.option("--ssid", "-s", required=True, help="Network name.")
@click.option(
    "--encryption", "-e",
    required=True,
    type=click.Choice([e.value for e in EncryptionType], case_sensitive=False),
    help="Encryption protocol shown by the router.",
)
@click.option("--channel", type=int, default=None, help="WiFi channel.")
@click.option("--signal", "signal_dbm", type=int, default=None,
              help="Signal strength in dBm (e.g. -65).")
@click.pass_context
def wifi(
    ctx: click.Context,
    ssid: str,
    encryption: str,
    channel: Optional[int],
    signal_dbm: Optional[int],
) -> None:
    """Rate a WiFi configuration from its declared settings."""
    result = _run_async(_engine(ctx).analyze_wifi(
        ssid, encryption, channel=channel, signal_dbm=signal_dbm
    ))
    _handle_output(ctx, result)


@cli.command()
@click.argument("email")
@click.option("--offline", is_flag=True, default=False,
              help="Skip the live API and use the local simulation.")
@click.pass_context
def breach(ctx: click.Context, email: str, offline: bool) -> None:
    """Check whether EMAIL appears in known data breaches."""
    if offline:
        ctx.obj["config"].breach.live_lookup = False
    with _spinner(ctx, "Checking breach databases..."):
        result = _run_async(_engine(ctx).check_breach(email))
    _handle_output(ctx, result)


@cli.command()
@click.argument("target")
@click.option("--offline", is_flag=True, default=False,
              help="Skip network probes and use the local simulation.")
@click.pass_context
def status(ctx: click.Context, target: str, offline: bool) -> None:
    """Check whether a website is down for everyone or just you."""
    if offline:
        ctx.obj["config"].status.live_check = False
    with _spinner(ctx, f"Checking {target}..."):
        result = _run_async(_engine(ctx).check_status(target))
    _handle_output(ctx, result)


def main() -> None:
    """Entry point for the self-check CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
