"""Functional tests for the container runtime wrapper.

Uses a small stand-in docker client with real attributes and real docker-py
exception types — no Docker daemon required.
"""

import docker
import pytest
from docker.errors import APIError, DockerException, NotFound

from docker_enforce.runtime import DockerRuntime, is_container_running


# ---------------------------------------------------------------------------
# Helpers — client stand-ins shaped like docker.DockerClient
# ---------------------------------------------------------------------------


class FakeContainer:
    def __init__(
        self,
        name: str,
        exit_code: int = 0,
        output: bytes = b"",
        exec_error: Exception | None = None,
    ):
        self.name = name
        self.exit_code = exit_code
        self.output = output
        self.exec_error = exec_error
        self.exec_calls: list[list[str]] = []

    def exec_run(self, cmd):
        self.exec_calls.append(cmd)
        if self.exec_error is not None:
            raise self.exec_error
        return self.exit_code, self.output


class FakeContainers:
    def __init__(self, containers: list[FakeContainer], list_error: Exception | None = None):
        self._containers = {c.name: c for c in containers}
        self._list_error = list_error

    def list(self):
        if self._list_error is not None:
            raise self._list_error
        return list(self._containers.values())

    def get(self, name: str):
        if name not in self._containers:
            raise NotFound(f"No such container: {name}")
        return self._containers[name]


class FakeClient:
    def __init__(self, *containers: FakeContainer, list_error: Exception | None = None):
        self.containers = FakeContainers(list(containers), list_error)


# ---------------------------------------------------------------------------
# Status check
# ---------------------------------------------------------------------------


def test_running_container_names():
    runtime = DockerRuntime(FakeClient(FakeContainer("web"), FakeContainer("db")))
    assert runtime.running_container_names() == ["web", "db"]


def test_container_running_exact_match():
    runtime = DockerRuntime(FakeClient(FakeContainer("web-1")))
    assert runtime.is_container_running("web-1")
    assert not runtime.is_container_running("web")
    assert not runtime.is_container_running("web-10")


@pytest.mark.parametrize("error", [
    APIError("500 Server Error"),
    DockerException("Error while fetching server API version"),
    ConnectionError("Connection refused"),
])
def test_runtime_failure_means_not_running(error):
    runtime = DockerRuntime(FakeClient(FakeContainer("web"), list_error=error))
    assert not runtime.is_container_running("web")


def test_docker_unavailable_means_not_running(monkeypatch):
    def _no_daemon():
        raise DockerException("Error while fetching server API version")

    monkeypatch.setattr(docker, "from_env", _no_daemon)
    assert not DockerRuntime().is_container_running("web")


def test_client_property_raises_runtime_error(monkeypatch):
    def _no_daemon():
        raise DockerException("socket missing")

    monkeypatch.setattr(docker, "from_env", _no_daemon)
    with pytest.raises(RuntimeError, match="Docker is not available"):
        DockerRuntime().client


def test_module_level_helper_uses_given_runtime():
    runtime = DockerRuntime(FakeClient(FakeContainer("web")))
    assert is_container_running("web", runtime=runtime)
    assert not is_container_running("api", runtime=runtime)


# ---------------------------------------------------------------------------
# Exec
# ---------------------------------------------------------------------------


def test_exec_command_word_splits_and_decodes():
    container = FakeContainer("web", exit_code=0, output=b"added 1 package\n")
    runtime = DockerRuntime(FakeClient(container))

    exit_code, output = runtime.exec_command("web", 'npm install "left pad"')

    assert exit_code == 0
    assert output == "added 1 package\n"
    assert container.exec_calls == [["npm", "install", "left pad"]]


def test_exec_command_propagates_exit_code():
    runtime = DockerRuntime(FakeClient(FakeContainer("web", exit_code=2, output=None)))
    assert runtime.exec_command("web", "npm test") == (2, "")


def test_exec_command_missing_container_raises():
    runtime = DockerRuntime(FakeClient())
    with pytest.raises(RuntimeError, match="Failed to exec in container 'web'"):
        runtime.exec_command("web", "npm test")


def test_exec_command_unbalanced_quote_raises_runtime_error():
    container = FakeContainer("web")
    runtime = DockerRuntime(FakeClient(container))
    with pytest.raises(RuntimeError, match="No closing quotation"):
        runtime.exec_command("web", "node -e 'console.log(1)")
    assert container.exec_calls == []


def test_exec_command_lost_daemon_raises_runtime_error():
    container = FakeContainer("web", exec_error=ConnectionError("daemon went away"))
    runtime = DockerRuntime(FakeClient(container))
    with pytest.raises(RuntimeError, match="daemon went away"):
        runtime.exec_command("web", "npm test")
