"""Command classification: which commands are subject to the Docker-first policy."""

import logging
import re

from docker_enforce.config import DockerConfig

logger = logging.getLogger(__name__)

# Start-anchored, no trailing boundary: "npm installer" is intercepted too.
INTERCEPT_PATTERNS: dict[str, re.Pattern[str]] = {
    "npm": re.compile(r"^npm\s+(install|ci|run|test|exec|start|build)"),
    "npx": re.compile(r"^npx\s+"),
    "yarn": re.compile(r"^yarn\s+(add|install|run|start|build)"),
    "pnpm": re.compile(r"^pnpm\s+(add|install|run|start|build)"),
    "node": re.compile(r"^node\s+"),
    "tsx": re.compile(r"^tsx\s+"),
    "bun": re.compile(r"^bun\s+(run|install|add)"),
}


def matching_tool(command: str, config: DockerConfig) -> str | None:
    """Return the first enabled tool whose pattern matches, else None.

    Tool names in the config that have no known pattern are ignored.
    """
    for tool, enabled in config.intercept_patterns.items():
        pattern = INTERCEPT_PATTERNS.get(tool)
        if enabled and pattern is not None and pattern.search(command):
            return tool
    return None


def should_intercept(command: str, config: DockerConfig) -> bool:
    tool = matching_tool(command, config)
    if tool is not None:
        logger.debug("Intercepted by %s pattern: %s", tool, command)
    return tool is not None


def is_allowed(command: str, config: DockerConfig) -> bool:
    """Check the command against the host allow-list.

    Exact match, or the entry followed by a single space. This is a raw
    string prefix test: "npm run lint" does not allow "npm run lint:fix".
    """
    for allowed in config.allowed_host_commands:
        if command == allowed or command.startswith(allowed + " "):
            return True
    return False


def would_block(command: str, config: DockerConfig) -> bool:
    """Intercepted and not allow-listed, regardless of mode or container state."""
    return should_intercept(command, config) and not is_allowed(command, config)
