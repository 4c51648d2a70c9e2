"""
CLI commands for agent discovery and installation.

Thin wrappers over ``agent_discovery.core.services``.
"""

from __future__ import annotations

import json
import sys

import click

from agent_discovery.core.models import (
    AgentKind,
    AgentStatus,
    DetectionResult,
    Installed,
    InstallProgress,
    Settings,
    VersionMismatch,
)

_TIMEOUT = click.FloatRange(min=0, min_open=True)


def _parse_agent(
    ctx: click.Context, param: click.Parameter, value: str | None,
) -> AgentKind | None:
    """Click callback: ``claude`` / ``claude-code`` / ``CLAUDE_CODE`` → AgentKind."""
    if value is None:
        return None
    try:
        return AgentKind.parse(value)
    except ValueError:
        choices = ", ".join(k.value for k in AgentKind.all())
        raise click.BadParameter(f"unknown agent '{value}' (choose from {choices})")


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj.get("settings") or Settings()


def _version_label(status: AgentStatus) -> str:
    if status.version is not None:
        return str(status.version)
    if isinstance(status, Installed) and status.raw_version:
        return status.raw_version
    return "version unknown"


def _echo_result(result: DetectionResult) -> None:
    name = result.agent.display_name
    status = result.status

    if result.failed:
        click.secho(f"   ❓ {name}: {result.message}", fg="yellow")
    elif isinstance(status, Installed):
        method = f" (via {status.install_method})" if status.install_method else ""
        click.secho(f"   ✅ {name}", fg="green", nl=False)
        click.echo(f"  {_version_label(status)}  → {status.executable}{method}")
    elif isinstance(status, VersionMismatch):
        click.secho(
            f"   ⚠️  {name}: found {status.found}, requires {status.required}",
            fg="yellow",
        )
    else:
        click.secho(f"   ❌ {name}: not installed", dim=True)


# ── Detect ──────────────────────────────────────────────────────


@click.command()
@click.argument("agent", required=False, callback=_parse_agent)
@click.option("--timeout", type=_TIMEOUT, default=None, help="Per-agent probe timeout (seconds).")
@click.option("--skip-version", is_flag=True, help="Only locate executables, don't run them.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(
    ctx: click.Context,
    agent: AgentKind | None,
    timeout: float | None,
    skip_version: bool,
    as_json: bool,
) -> None:
    """Detect installed agents (all of them, or just AGENT)."""
    from agent_discovery.core.services.detection import detect_all

    defaults = _settings(ctx).detect
    options = defaults.to_options().model_copy(update={
        "timeout": timeout or defaults.timeout,
        "skip_version": skip_version or defaults.skip_version,
    })

    results = detect_all(options, agents=[agent] if agent else None)

    if as_json:
        click.echo(json.dumps(
            {kind.value: r.to_dict() for kind, r in results.items()}, indent=2,
        ))
    else:
        if not ctx.obj.get("quiet"):
            click.secho("🔎 Coding agents:", fg="cyan", bold=True)
        for result in results.values():
            _echo_result(result)

    # Single-agent lookups double as a scriptable "is it usable?" check.
    if agent is not None:
        status = results[agent].status
        if status is None or not status.is_usable:
            sys.exit(1)


# ── Observe ─────────────────────────────────────────────────────


@click.command()
@click.argument("agent", callback=_parse_agent)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def info(ctx: click.Context, agent: AgentKind, as_json: bool) -> None:
    """Show how AGENT is installed on this platform."""
    from agent_discovery.core.data.catalog import get_install_info

    install_info = get_install_info(agent, overrides=_settings(ctx).agents)

    if as_json:
        click.echo(json.dumps(
            {"agent": agent.value, **install_info.model_dump(mode="json")}, indent=2,
        ))
        return

    click.secho(f"📦 {agent.display_name}", fg="cyan", bold=True)
    if not install_info.is_supported:
        click.secho("   ⚠️  Not supported on this platform", fg="yellow")

    click.echo(f"   Install: {install_info.primary.raw_command}")
    if install_info.primary.description:
        click.echo(f"            {install_info.primary.description}")

    for alt in install_info.alternatives:
        click.echo(f"   Alt:     {alt.raw_command}")

    for prereq in install_info.prerequisites:
        url = f"  ({prereq.install_url})" if prereq.install_url else ""
        click.echo(f"   Needs:   {prereq.name}{url}")

    click.echo(f"   Verify:  {install_info.verification.command}")
    if install_info.docs_url:
        click.echo(f"   Docs:    {install_info.docs_url}")


@click.command("can-install")
@click.argument("agent", callback=_parse_agent)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def can_install(ctx: click.Context, agent: AgentKind, as_json: bool) -> None:
    """Check platform support and prerequisites for AGENT."""
    from agent_discovery.core.models import InstallError
    from agent_discovery.core.services.install import can_install as check

    try:
        check(agent, overrides=_settings(ctx).agents)
    except InstallError as e:
        if as_json:
            click.echo(json.dumps({"agent": agent.value, "ok": False, **e.to_dict()}, indent=2))
        else:
            click.secho(f"❌ {e.message}", fg="red")
            click.echo(f"   💡 {e.fix_suggestion()}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"agent": agent.value, "ok": True}, indent=2))
    else:
        click.secho(f"✅ {agent.display_name} can be installed", fg="green")


# ── Act ─────────────────────────────────────────────────────────


@click.command()
@click.argument("agent", callback=_parse_agent)
@click.option("--timeout", type=_TIMEOUT, default=None, help="Installer timeout (seconds).")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    agent: AgentKind,
    timeout: float | None,
    yes: bool,
    as_json: bool,
) -> None:
    """Install AGENT using its primary install method."""
    from agent_discovery.core.data.catalog import get_install_info
    from agent_discovery.core.models import InstallError, InstallerFailed
    from agent_discovery.core.services.install import SubstringClassifier
    from agent_discovery.core.services.install import install as run_install

    settings = _settings(ctx)
    options = settings.install.to_options()
    if timeout:
        options = options.model_copy(update={"timeout": timeout})

    if not yes:
        command = get_install_info(agent, overrides=settings.agents).primary.raw_command
        click.confirm(
            f"Install {agent.display_name} by running:\n   {command}\nProceed?",
            abort=True,
        )

    show_progress = not as_json and not ctx.obj.get("quiet")

    def on_progress(event: InstallProgress) -> None:
        if show_progress:
            click.echo(f"   → {event.description}...")

    try:
        run_install(
            agent,
            options,
            on_progress,
            classifier=SubstringClassifier().with_markers(settings.install.network_markers),
            overrides=settings.agents,
            settle_delay=settings.install.settle_delay,
            detect_options=settings.detect.to_options(),
        )
    except InstallError as e:
        if as_json:
            click.echo(json.dumps({"agent": agent.value, "ok": False, **e.to_dict()}, indent=2))
        else:
            click.secho(f"❌ {e.message}", fg="red")
            if isinstance(e, InstallerFailed) and e.stderr:
                click.echo(e.stderr.rstrip())
            click.echo(f"   💡 {e.fix_suggestion()}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"agent": agent.value, "ok": True}, indent=2))
    else:
        click.secho(f"✅ {agent.display_name} installed", fg="green")
