"""
Agent Discovery — CLI entrypoint.

Usage:
    agent-discovery --help
    agent-discovery detect
    agent-discovery detect codex --json
    agent-discovery install gemini --yes
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from agent_discovery import __version__
from agent_discovery.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    LOG_LEVEL_ENV,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="agent-discovery")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to agents.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Agent Discovery — find and install AI coding agent CLIs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )

    # ── Settings (agents.yml) ───────────────────────────────────
    from agent_discovery.core.config.loader import ConfigError, load_settings

    try:
        ctx.obj["settings"] = load_settings(ctx.obj["config_path"])
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


# ── Register commands ───────────────────────────────────────────

from agent_discovery.ui.cli.agents import can_install, detect, info, install  # noqa: E402

cli.add_command(detect)
cli.add_command(info)
cli.add_command(can_install)
cli.add_command(install)


def main() -> None:
    """Console-script entry point."""
    cli()


if __name__ == "__main__":
    main()
