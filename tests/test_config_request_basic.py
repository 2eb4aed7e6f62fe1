"""
Tests for settings loading and the launch request model.
"""

import pytest
from pydantic import ValidationError

from launchpatch.config import Settings
from launchpatch.request import LaunchRequest, LaunchSide, RuleArgument


def test_settings_from_env():
    settings = Settings.from_env({
        "LAUNCHPATCH_DISABLED": "rtss-workaround, amd-gpu-workaround,",
        "LAUNCHPATCH_LOG_LEVEL": "debug",
    })
    assert settings.disabled == ["rtss-workaround", "amd-gpu-workaround"]
    assert settings.log_level == "DEBUG"
    assert settings.is_disabled("rtss-workaround")


def test_settings_defaults():
    settings = Settings.from_env({})
    assert settings.disabled == []
    assert settings.log_level == "INFO"


def test_settings_rejects_unknown_level():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_request_from_dict_keeps_absent_fields_absent():
    request = LaunchRequest.from_dict({
        "side": "server",
        "game_directory": "/srv/mc",
        "version": {"id": "1.8.9"},
    })
    assert request.side == LaunchSide.SERVER
    assert request.extra_jvm_args is None
    assert request.spawn_options is None
    assert request.version.arguments is None


def test_request_dict_round_trip_with_rules():
    data = {
        "side": "client",
        "game_directory": "/games/mc",
        "version": {
            "id": "1.21.1",
            "arguments": {
                "jvm": [
                    {"rules": [{"action": "allow", "os": {"name": "osx"}}], "value": ["-XstartOnFirstThread"]},
                    "-Djna.tmpdir=${natives_directory}",
                ],
                "game": ["--username", "${auth_player_name}"],
            },
        },
        "java_path": "java",
        "main_class": "net.minecraft.client.main.Main",
        "game_args": [],
        "extra_jvm_args": [],
        "spawn_options": {"env": None, "cwd": "/games/mc", "shell": False, "detached": True},
    }
    request = LaunchRequest.from_dict(data)
    assert isinstance(request.version.arguments.jvm[0], RuleArgument)
    assert request.version.arguments.jvm[0].values() == ["-XstartOnFirstThread"]
    assert request.extra_jvm_args == []
    assert request.to_dict() == data


def test_ensure_helpers_only_initialize_once():
    request = LaunchRequest.from_dict({"game_directory": "/g", "version": {"id": "x"}})
    args = request.ensure_extra_jvm_args()
    args.append("-Xmx1G")
    assert request.ensure_extra_jvm_args() is args

    options = request.ensure_spawn_options()
    assert options.env == {}
    assert options.cwd == "/g"
    assert request.ensure_spawn_options() is options
