"""
Shared builders for launch requests used across tests.
"""

from launchpatch.request import (
    LaunchRequest,
    LaunchSide,
    RuleArgument,
    VersionArguments,
    VersionProfile,
)


def make_request(side=LaunchSide.CLIENT, extra_jvm_args=None, jvm=None, spawn_options=None, legacy=False):
    arguments = None
    if not legacy:
        arguments = VersionArguments(
            jvm=list(jvm) if jvm is not None else [
                RuleArgument(rules=({"action": "allow", "os": {"name": "osx"}},), value="-XstartOnFirstThread"),
                "-Djna.tmpdir=${natives_directory}",
                "-Dorg.lwjgl.system.SharedLibraryExtractPath=${natives_directory}",
                "-Dio.netty.native.workdir=${natives_directory}",
                "-Djava.library.path=${natives_directory}",
                "-cp",
                "${classpath}",
            ],
            game=["--username", "${auth_player_name}"],
        )
    return LaunchRequest(
        side=side,
        game_directory="/games/minecraft",
        version=VersionProfile(id="1.21.1", arguments=arguments),
        java_path="/usr/bin/java",
        main_class="net.minecraft.client.main.Main",
        game_args=["--demo"],
        extra_jvm_args=extra_jvm_args,
        spawn_options=spawn_options,
    )
