"""Enforcement decision: allow, warn, block, or rewrite an intercepted command."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from docker_enforce import display
from docker_enforce.config import DockerConfig, load_config
from docker_enforce.patterns import is_allowed, should_intercept
from docker_enforce.runtime import is_container_running

logger = logging.getLogger(__name__)

Action = Literal["allow", "block", "warn", "transform"]


@dataclass(frozen=True)
class EnforceResult:
    action: Action
    message: str | None = None
    transformed_command: str | None = None


def evaluate(
    command: str,
    config: DockerConfig,
    is_running: Callable[[str], bool] | None = None,
) -> EnforceResult:
    """Apply the policy to one command and print the user-facing message.

    Order: disabled mode, interception, allow-list, then the mode itself.
    The container status is only queried in transform mode.
    """
    if config.enforcement == "disabled":
        return EnforceResult(action="allow")

    if not should_intercept(command, config):
        return EnforceResult(action="allow")

    if is_allowed(command, config):
        logger.debug("Allow-listed: %s", command)
        return EnforceResult(action="allow")

    container_name = config.container_name
    mode = config.enforcement

    if mode == "block":
        display.show_block_message(command, container_name)
        return EnforceResult(action="block", message="Docker-first policy violation")

    if mode == "warn":
        display.show_warning(command, container_name)
        return EnforceResult(action="warn")

    if mode == "transform":
        if not container_name:
            display.show_no_container()
            return EnforceResult(action="block", message="No container configured")
        if not (is_running or is_container_running)(container_name):
            display.show_container_not_running(container_name)
            return EnforceResult(action="block", message="Container not running")
        transformed = display.docker_exec_command(container_name, command)
        display.show_transform(transformed)
        return EnforceResult(action="transform", transformed_command=transformed)

    display.show_unknown_mode(mode)
    logger.debug("Unknown enforcement mode %r, allowing: %s", mode, command)
    return EnforceResult(action="allow")


def enforce(
    command: str,
    project_path: str | Path | None = None,
    is_running: Callable[[str], bool] | None = None,
) -> EnforceResult:
    """Load the project policy and evaluate command against it."""
    config = load_config(project_path)
    return evaluate(command, config, is_running=is_running)
