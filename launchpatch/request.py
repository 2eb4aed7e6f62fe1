"""
Launch request data model passed through the middleware pipeline.

A ``None`` field means "absent" and is distinct from an empty value; hooks
call the ``ensure_*`` helpers before mutating optional fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class LaunchSide(str, Enum):
    """Which side of the game is being launched."""
    CLIENT = "client"
    SERVER = "server"


@dataclass(frozen=True)
class RuleArgument:
    """A rule-gated JVM argument from a version profile, e.g. macOS-only flags."""
    rules: tuple
    value: Union[str, tuple]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuleArgument":
        value = data.get("value", ())
        if isinstance(value, list):
            value = tuple(value)
        return cls(rules=tuple(data.get("rules", ())), value=value)

    def to_dict(self) -> Dict[str, Any]:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {"rules": list(self.rules), "value": value}

    def values(self) -> List[str]:
        if isinstance(self.value, str):
            return [self.value]
        return list(self.value)


JvmArgument = Union[str, RuleArgument]


def _parse_arguments(raw: List[Any]) -> List[Any]:
    parsed: List[Any] = []
    for item in raw:
        if isinstance(item, dict):
            parsed.append(RuleArgument.from_dict(item))
        else:
            parsed.append(item)
    return parsed


def _copy_list(value: Optional[List[Any]]) -> Optional[List[Any]]:
    return list(value) if value is not None else None


def _dump_arguments(entries: List[Any]) -> List[Any]:
    return [e.to_dict() if isinstance(e, RuleArgument) else e for e in entries]


@dataclass
class VersionArguments:
    """Modern (1.13+) argument block of a version profile."""
    jvm: List[JvmArgument] = field(default_factory=list)
    game: List[Any] = field(default_factory=list)


@dataclass
class VersionProfile:
    """Resolved version profile; ``arguments`` is None for legacy profiles."""
    id: str
    arguments: Optional[VersionArguments] = None


@dataclass
class SpawnOptions:
    """Options handed to the process spawner."""
    env: Optional[Dict[str, str]] = None
    cwd: Optional[str] = None
    shell: bool = False
    detached: bool = True


@dataclass
class LaunchRequest:
    """Mutable bundle describing the next game process to create."""
    side: LaunchSide
    game_directory: str
    version: VersionProfile
    java_path: str = "java"
    main_class: Optional[str] = None
    game_args: List[str] = field(default_factory=list)
    extra_jvm_args: Optional[List[str]] = None
    spawn_options: Optional[SpawnOptions] = None

    def ensure_extra_jvm_args(self) -> List[str]:
        if self.extra_jvm_args is None:
            self.extra_jvm_args = []
        return self.extra_jvm_args

    def ensure_spawn_options(self) -> SpawnOptions:
        if self.spawn_options is None:
            self.spawn_options = SpawnOptions(
                env={},
                cwd=self.game_directory,
                shell=False,
                detached=True,
            )
        return self.spawn_options

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LaunchRequest":
        """Create from the JSON shape used by the CLI."""
        version_data = data.get("version") or {}
        arguments = None
        raw_args = version_data.get("arguments")
        if raw_args is not None:
            arguments = VersionArguments(
                jvm=_parse_arguments(raw_args.get("jvm") or []),
                game=_parse_arguments(raw_args.get("game") or []),
            )

        spawn = None
        spawn_data = data.get("spawn_options")
        if spawn_data is not None:
            spawn = SpawnOptions(
                env=spawn_data.get("env"),
                cwd=spawn_data.get("cwd"),
                shell=bool(spawn_data.get("shell", False)),
                detached=bool(spawn_data.get("detached", True)),
            )

        return cls(
            side=LaunchSide(data.get("side", "client")),
            game_directory=data["game_directory"],
            version=VersionProfile(id=version_data.get("id", "unknown"), arguments=arguments),
            java_path=data.get("java_path", "java"),
            main_class=data.get("main_class"),
            game_args=list(data.get("game_args", [])),
            extra_jvm_args=_copy_list(data.get("extra_jvm_args")),
            spawn_options=spawn,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        version: Dict[str, Any] = {"id": self.version.id}
        if self.version.arguments is not None:
            version["arguments"] = {
                "jvm": _dump_arguments(self.version.arguments.jvm),
                "game": _dump_arguments(self.version.arguments.game),
            }

        result: Dict[str, Any] = {
            "side": self.side.value,
            "game_directory": self.game_directory,
            "version": version,
            "java_path": self.java_path,
            "main_class": self.main_class,
            "game_args": list(self.game_args),
            "extra_jvm_args": self.extra_jvm_args,
            "spawn_options": None,
        }
        if self.spawn_options is not None:
            result["spawn_options"] = {
                "env": self.spawn_options.env,
                "cwd": self.spawn_options.cwd,
                "shell": self.spawn_options.shell,
                "detached": self.spawn_options.detached,
            }
        return result
