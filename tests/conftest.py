import pytest

from launchpatch.request import LaunchSide, SpawnOptions

from helpers import make_request


@pytest.fixture
def client_request():
    return make_request(extra_jvm_args=["-Xmx2G", "-Djna.tmpdir=/tmp/jna"])


@pytest.fixture
def server_request():
    return make_request(
        side=LaunchSide.SERVER,
        extra_jvm_args=["-Xmx2G", "-Djna.tmpdir=/tmp/jna"],
        spawn_options=SpawnOptions(env={"PATH": "/bin"}, cwd="/srv"),
    )
