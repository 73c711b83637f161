"""
shellpilot — CLI entrypoint.

Usage:
    shellpilot --help
    shellpilot ask "show disk usage"
    shellpilot interactive
    shellpilot doctor
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from shellpilot import __version__
from shellpilot.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)
from shellpilot.ui.cli.render import render_report, render_result


@click.group()
@click.version_option(version=__version__, prog_name="shellpilot")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to shellpilot.yml (default: auto-detect).",
)
@click.option(
    "--env-file",
    "env_file",
    type=click.Path(exists=False),
    default=None,
    help="Path to a .env file (default: ./.env when present).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    env_file: str | None,
) -> None:
    """shellpilot — natural-language requests to safe shell commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["env_file"] = Path(env_file) if env_file else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(verbose=verbose, quiet=quiet, debug=debug),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
        quiet_third_party=not debug,
    )


@cli.command()
@click.argument("text", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--mock", is_flag=True, help="Use the mock AI backend (no network).")
@click.pass_context
def ask(ctx: click.Context, text: tuple[str, ...], as_json: bool, mock: bool) -> None:
    """Turn a request into commands and run them."""
    from shellpilot.core.use_cases.ask import ask as run_ask

    result = run_ask(
        " ".join(text),
        config_path=ctx.obj.get("config_path"),
        env_file=ctx.obj.get("env_file"),
        mock=mock,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.report is not None and result.report.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None  # guaranteed after error check above

    if not ctx.obj.get("quiet"):
        click.secho(f"🤖 Asking {result.backend}...", fg="cyan")
        click.echo()

    render_report(report, verbose=ctx.obj.get("verbose", False), quiet=ctx.obj.get("quiet", False))
    click.echo()

    if not report.ok:
        sys.exit(1)


@cli.command("exec", context_settings={"ignore_unknown_options": True})
@click.argument("name")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.option("--timeout", "-t", type=int, default=None, help="Deadline in seconds (default: 30).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def exec_command(
    ctx: click.Context,
    name: str,
    arguments: tuple[str, ...],
    timeout: int | None,
    as_json: bool,
) -> None:
    """Run one allowed command directly (no AI involved)."""
    from shellpilot.core.use_cases.execute import run_command

    out = run_command(
        name,
        arguments,
        timeout=timeout,
        config_path=ctx.obj.get("config_path"),
        env_file=ctx.obj.get("env_file"),
    )

    if as_json:
        click.echo(json.dumps(out.to_dict(), indent=2))
        sys.exit(0 if out.result is not None and out.result.succeeded else 1)

    if out.error:
        click.secho(f"❌ {out.error}", fg="red")
        sys.exit(1)

    assert out.request is not None and out.result is not None
    click.echo(f"  $ {out.request.display}")
    render_result(out.result, verbose=ctx.obj.get("verbose", False))

    if not out.result.succeeded:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def allowed(ctx: click.Context, as_json: bool) -> None:
    """List the commands that may be executed."""
    from shellpilot.core.config.loader import ConfigError, load_settings

    try:
        settings = load_settings(
            config_path=ctx.obj.get("config_path"),
            env_file=ctx.obj.get("env_file"),
            require_backend=False,
        )
        allowlist = settings.build_allowlist()
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"commands": list(allowlist.names), "total": len(allowlist)}, indent=2))
        return

    source = "configured" if settings.allowed_commands is not None else "default"
    click.secho(f"🔒 Allowed commands ({len(allowlist)}, {source}):", fg="cyan", bold=True)
    for name in allowlist:
        click.echo(f"   • {name}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--mock", is_flag=True, help="Check against the mock AI backend.")
@click.pass_context
def doctor(ctx: click.Context, as_json: bool, mock: bool) -> None:
    """Check configuration, backend connectivity and allowed commands."""
    from shellpilot.core.use_cases.doctor import run_doctor

    system_health = run_doctor(
        config_path=ctx.obj.get("config_path"),
        env_file=ctx.obj.get("env_file"),
        mock=mock,
    )

    if as_json:
        click.echo(json.dumps(system_health.to_dict(), indent=2))
        sys.exit(0 if system_health.ok else 1)

    status_icons = {
        "healthy": ("💚", "green"),
        "degraded": ("🟡", "yellow"),
        "unhealthy": ("🔴", "red"),
        "unknown": ("❔", "white"),
    }
    icon, color = status_icons.get(system_health.status, ("❔", "white"))

    click.echo()
    click.secho(f"{icon} System Health: {system_health.status.upper()}", fg=color, bold=True)
    click.echo(f"   {system_health.timestamp}")
    click.echo()

    for component in system_health.components:
        c_icon, c_color = status_icons.get(component.status, ("❔", "white"))
        click.secho(f"   {c_icon} {component.name}", fg=c_color, bold=True)
        click.echo(f"      {component.message}")

        if ctx.obj.get("verbose") and component.details:
            for key, val in component.details.items():
                click.echo(f"      {key}: {val}")

    click.echo()

    if not system_health.ok:
        sys.exit(1)


# ── Sub-command registration ────────────────────────────────────

from shellpilot.ui.cli.interactive import interactive  # noqa: E402

cli.add_command(interactive)


if __name__ == "__main__":
    cli()
