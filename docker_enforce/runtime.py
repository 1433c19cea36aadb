"""Container runtime access through the Docker Engine API.

Two operations only: list running container names, and run a command inside
a named container. Runtime failures during the status check mean "not
running"; they never propagate.
"""

import logging
import shlex

from docker.errors import DockerException

logger = logging.getLogger(__name__)

# docker-py raises DockerException for API/daemon errors; requests connection
# errors (OSError subclasses) can escape on a dead socket; shlex raises
# ValueError on unbalanced quotes.
_RUNTIME_ERRORS = (DockerException, OSError, RuntimeError, ValueError)


class DockerRuntime:
    """Thin wrapper over a lazily created docker client."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            try:
                import docker
                self._client = docker.from_env()
            except DockerException as e:
                raise RuntimeError(f"Docker is not available: {e}")
        return self._client

    def running_container_names(self) -> list[str]:
        """Names of running containers (``docker ps --format '{{.Names}}'``)."""
        return [c.name for c in self.client.containers.list()]

    def is_container_running(self, container_name: str) -> bool:
        """Exact name membership in the running set; any failure counts as not running."""
        try:
            names = self.running_container_names()
        except _RUNTIME_ERRORS as e:
            logger.debug("Container status check failed: %s", e)
            return False
        return container_name in names

    def exec_command(self, container_name: str, command: str) -> tuple[int, str]:
        """Run command inside the container and return (exit_code, output).

        The command is word-split the way ``docker exec <name> <command>``
        would be on the host shell. Raises RuntimeError on Docker errors,
        a lost daemon connection, or a command that cannot be word-split.
        """
        try:
            argv = shlex.split(command)
            container = self.client.containers.get(container_name)
            exit_code, output = container.exec_run(argv)
        except _RUNTIME_ERRORS as e:
            raise RuntimeError(f"Failed to exec in container '{container_name}': {e}")
        decoded = output.decode("utf-8", errors="replace") if output else ""
        return exit_code, decoded


def is_container_running(container_name: str, runtime: DockerRuntime | None = None) -> bool:
    return (runtime or DockerRuntime()).is_container_running(container_name)
