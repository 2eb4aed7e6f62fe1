"""
Launch orchestration: run the middleware pipeline, then spawn the game.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Any, Callable, Dict, List, Optional

from .errors import MutationFailure
from .pipeline import MiddlewarePipeline
from .probes import PlatformInfo
from .request import LaunchRequest, RuleArgument

logger = logging.getLogger(__name__)

Spawner = Callable[..., Any]


def _rule_matches(rule: Dict[str, Any], platform: PlatformInfo) -> bool:
    if rule.get("features"):
        # feature flags (demo mode, custom resolution) are never enabled here
        return False
    os_rule = rule.get("os") or {}
    name = os_rule.get("name")
    if name and name != platform.os:
        return False
    arch = os_rule.get("arch")
    if arch and arch == "x86" and sys.maxsize > 2**32:
        return False
    return True


def rules_allow(rules, platform: PlatformInfo) -> bool:
    """Evaluate a profile rule list; the last matching rule decides."""
    if not rules:
        return True
    allowed = False
    for rule in rules:
        if _rule_matches(rule, platform):
            allowed = rule.get("action", "allow") == "allow"
    return allowed


def resolve_arguments(entries, platform: PlatformInfo) -> List[str]:
    resolved: List[str] = []
    for entry in entries or []:
        if isinstance(entry, RuleArgument):
            if rules_allow(entry.rules, platform):
                resolved.extend(entry.values())
        elif isinstance(entry, str):
            resolved.append(entry)
    return resolved


def build_command(request: LaunchRequest, platform: PlatformInfo) -> List[str]:
    """Assemble the full command line for a (patched) launch request."""
    cmd = [request.java_path]
    if request.version.arguments is not None:
        cmd.extend(resolve_arguments(request.version.arguments.jvm, platform))
    cmd.extend(request.extra_jvm_args or [])
    if request.main_class:
        cmd.append(request.main_class)
    if request.version.arguments is not None:
        cmd.extend(resolve_arguments(request.version.arguments.game, platform))
    cmd.extend(request.game_args)
    return cmd


class LaunchOrchestrator:
    """Runs registered middleware against a request and spawns the process."""

    def __init__(
        self,
        pipeline: MiddlewarePipeline,
        platform: Optional[PlatformInfo] = None,
        spawner: Optional[Spawner] = None,
    ):
        self.pipeline = pipeline
        self.platform = platform or PlatformInfo.detect()
        self.spawner = spawner or subprocess.Popen

    def prepare(self, request: LaunchRequest) -> LaunchRequest:
        return self.pipeline.run(request)

    def launch(self, request: LaunchRequest):
        """
        Patch ``request`` and spawn the game process.

        Raises:
            MutationFailure: a middleware failed; nothing is spawned
        """
        try:
            self.prepare(request)
        except MutationFailure as e:
            logger.error(f"Launch of {request.version.id} aborted: {e}")
            raise

        cmd = build_command(request, self.platform)
        options = request.spawn_options
        kwargs: Dict[str, Any] = {"cwd": request.game_directory}
        if options is not None:
            kwargs["cwd"] = options.cwd or request.game_directory
            kwargs["env"] = options.env
            kwargs["shell"] = options.shell
            kwargs["start_new_session"] = options.detached

        logger.info(f"Spawning {request.side.value} {request.version.id} ({len(cmd)} args)")
        return self.spawner(cmd, **kwargs)
