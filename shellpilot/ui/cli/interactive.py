"""
CLI command for the interactive session.

Reads one request per line and hands each to the same orchestrator.
A failed request is reported and the session continues.
"""

from __future__ import annotations

import sys

import click

from shellpilot.ui.cli.render import render_report

EXIT_WORDS = ("quit", "exit")


@click.command()
@click.option("--mock", is_flag=True, help="Use the mock AI backend (no network).")
@click.pass_context
def interactive(ctx: click.Context, mock: bool) -> None:
    """Interactive mode — type requests, 'quit' or 'exit' to leave."""
    from shellpilot.core.config.loader import ConfigError
    from shellpilot.core.use_cases.ask import ask, load_orchestrator

    try:
        orchestrator = load_orchestrator(
            config_path=ctx.obj.get("config_path"),
            env_file=ctx.obj.get("env_file"),
            mock=mock,
        )
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    verbose = ctx.obj.get("verbose", False)
    info = orchestrator.backend.describe()
    click.secho(f"🤖 shellpilot: {info['name']} ({info.get('model', '?')})", fg="cyan", bold=True)
    click.echo("   Type 'quit' or 'exit' to leave.")

    while True:
        click.echo()
        try:
            line = click.prompt("You", default="", show_default=False, prompt_suffix=": ")
        except click.Abort:
            # EOF / Ctrl-C
            click.echo()
            break

        text = line.strip()
        if not text:
            continue
        if text.lower() in EXIT_WORDS:
            break

        result = ask(text, orchestrator=orchestrator)
        assert result.report is not None
        render_report(result.report, verbose=verbose)

    click.echo("Goodbye!")
