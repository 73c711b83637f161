"""
Terminal rendering for execution reports and command results.
"""

from __future__ import annotations

import click

from shellpilot.core.models.command import CommandResult
from shellpilot.core.models.plan import ExecutionReport

_STATUS_COLORS = {
    "ok": "green",
    "partial": "yellow",
    "failed": "red",
    "no_commands": "white",
    "backend_failed": "red",
}


def _indent(text: str, prefix: str = "      ") -> str:
    return "\n".join(prefix + line for line in text.rstrip("\n").splitlines())


def render_result(result: CommandResult, verbose: bool = False) -> None:
    """Print one command outcome, with its captured output."""
    if result.succeeded:
        click.secho(f"     ✅ Success ({result.duration_ms:.0f} ms)", fg="green")
    else:
        click.secho(
            f"     ❌ Failed (exit {result.exit_code}): {result.error_message}",
            fg="red",
        )

    if result.output.strip():
        click.echo(_indent(result.output))
    if verbose:
        click.echo(f"      completed at {result.completed_at}")


def render_report(report: ExecutionReport, verbose: bool = False, quiet: bool = False) -> None:
    """Print a report: the plan, then each command and its outcome."""
    if report.backend_error is not None:
        click.secho(f"❌ AI backend error: {report.backend_error}", fg="red", bold=True)
        return

    plan = report.plan
    if plan.degraded:
        click.secho(f"⚠️  {plan.degradation}", fg="yellow")
        click.echo()
        click.echo(plan.explanation)
        return

    if not quiet:
        if plan.reasoning:
            click.secho(f"🤔 Thoughts: {plan.reasoning}", fg="cyan")
        if plan.explanation:
            click.secho(f"💡 Explanation: {plan.explanation}", fg="cyan")
        click.echo(f"📊 Confidence: {plan.confidence * 100:.1f}%")
        click.echo()

    if not plan.commands:
        click.echo("   No commands to run.")
        return

    click.secho(f"⚡ Executing {len(plan.commands)} command(s):", fg="white", bold=True)
    for index, (request, result) in enumerate(zip(plan.commands, report.results), start=1):
        click.echo(f"  {index}. {request.display}")
        render_result(result, verbose=verbose)

    color = _STATUS_COLORS.get(report.status, "white")
    click.echo()
    click.secho(
        f"   {report.succeeded}/{report.total} succeeded ({report.status})",
        fg=color,
    )
