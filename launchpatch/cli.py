"""
Click CLI for inspecting and applying launch workarounds.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Tuple

import click

from .config import Settings
from .context import LauncherContext
from .environment import redact_environment
from .errors import LaunchPatchError
from .gate import GateDecision
from .orchestrator import LaunchOrchestrator, build_command
from .request import LaunchRequest
from .workarounds import install_workarounds


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_request(path: str) -> LaunchRequest:
    with open(path) as f:
        return LaunchRequest.from_dict(json.load(f))


def _startup(ctx) -> Tuple[LauncherContext, List[GateDecision]]:
    context = LauncherContext.create(settings=ctx.obj["settings"])
    decisions = asyncio.run(install_workarounds(context))
    return context, decisions


def _request_output(request: LaunchRequest, context: LauncherContext) -> Dict[str, Any]:
    data = request.to_dict()
    if data["spawn_options"] is not None and data["spawn_options"]["env"] is not None:
        data["spawn_options"]["env"] = redact_environment(data["spawn_options"]["env"])
    data["command"] = build_command(request, context.platform)
    return data


@click.group()
@click.option("--json", "output_json", is_flag=True, help="Output machine-readable JSON")
@click.option("--log-level", default=None, help="Log level (default: LAUNCHPATCH_LOG_LEVEL or INFO)")
@click.pass_context
def main(ctx, output_json, log_level):
    """launchpatch - pre-launch workarounds for game launches."""
    ctx.ensure_object(dict)
    try:
        settings = Settings.from_env()
        if log_level:
            settings = Settings(disabled=settings.disabled, log_level=log_level)
    except ValueError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)
    _setup_logging(settings.log_level)
    ctx.obj["json"] = output_json
    ctx.obj["settings"] = settings


@main.command()
@click.pass_context
def probe(ctx):
    """Evaluate every workaround's applicability on this host."""
    context, decisions = _startup(ctx)

    if ctx.obj["json"]:
        print(json.dumps([
            {"name": d.name, "applicable": d.applicable, "reason": d.reason}
            for d in decisions
        ]))
        return

    click.echo(f"Platform: {context.platform.os}")
    for d in decisions:
        mark = "applies" if d.applicable else "skipped"
        click.echo(f"  {d.name}: {mark} ({d.reason})")


@main.command()
@click.argument("request_json", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def patch(ctx, request_json):
    """Apply applicable workarounds to a launch request and print the result."""
    try:
        request = _load_request(request_json)
        context, _ = _startup(ctx)
        LaunchOrchestrator(context.pipeline, context.platform).prepare(request)
    except (LaunchPatchError, ValueError, KeyError) as e:
        click.echo(f"Patch failed: {e}", err=True)
        sys.exit(1)

    output = _request_output(request, context)
    if ctx.obj["json"]:
        print(json.dumps(output))
    else:
        click.echo(f"Applied middleware: {', '.join(context.pipeline.names()) or 'none'}")
        click.echo(json.dumps(output, indent=2))


@main.command()
@click.argument("request_json", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def launch(ctx, request_json):
    """Apply workarounds, spawn the game and wait for it to exit."""
    try:
        request = _load_request(request_json)
        context, _ = _startup(ctx)
        proc = LaunchOrchestrator(context.pipeline, context.platform).launch(request)
    except (LaunchPatchError, ValueError, KeyError, OSError) as e:
        click.echo(f"Launch failed: {e}", err=True)
        sys.exit(1)

    try:
        sys.exit(proc.wait())
    except KeyboardInterrupt:
        click.echo("\nLaunch interrupted by user", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
