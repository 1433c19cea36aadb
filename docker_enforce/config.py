import os
import json
import logging
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

# Project-relative location of the policy file
CONFIG_FILE = Path(".claude") / "docker-config.json"

ENFORCEMENT_MODES: tuple[str, ...] = ("block", "warn", "transform", "disabled")

# Every known tool is intercepted unless the project config says otherwise.
_DEFAULT_INTERCEPT_PATTERNS: dict[str, bool] = {
    "npm": True,
    "npx": True,
    "yarn": True,
    "pnpm": True,
    "node": True,
    "tsx": True,
    "bun": True,
}


class DockerConfig(BaseModel):
    """Docker-first policy for a single project.

    Field names are snake_case; the JSON file uses the camelCase aliases.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    container_name: Optional[str] = Field(default=None, alias="containerName")
    # Kept as a plain string: unknown modes are reported at enforcement time, not rejected here
    enforcement: str = Field(default="block")
    allowed_host_commands: list[str] = Field(default_factory=list, alias="allowedHostCommands")
    intercept_patterns: dict[str, bool] = Field(
        default_factory=lambda: dict(_DEFAULT_INTERCEPT_PATTERNS),
        alias="interceptPatterns",
    )

    @field_validator("allowed_host_commands", mode="before")
    @classmethod
    def _parse_allowed(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @model_validator(mode="before")
    @classmethod
    def fill_from_env(cls, data: dict) -> dict:
        """Drop explicit nulls, then let env vars override file values."""
        if not isinstance(data, dict):
            raise ValueError(f"config must be a JSON object, got {type(data).__name__}")
        # null means "use the default": "enforcement": null blocks, it does not
        # fall through to the unknown-mode allow.
        data = {k: v for k, v in data.items() if v is not None}

        env_map = {
            "containerName": "DOCKER_ENFORCE_CONTAINER",
            "enforcement": "DOCKER_ENFORCE_MODE",
            "allowedHostCommands": "DOCKER_ENFORCE_ALLOWED",
        }
        for key, env_var in env_map.items():
            val = os.getenv(env_var)
            if val:
                data.pop(_snake(key), None)
                data[key] = val
        return data


def _snake(key: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)


def find_project_config(project_path: str | Path | None = None) -> Path | None:
    """Return <project>/.claude/docker-config.json if it exists, else None."""
    base = Path(project_path) if project_path is not None else Path.cwd()
    candidate = base / CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(project_path: str | Path | None = None) -> DockerConfig:
    """Load the project policy, falling back to defaults.

    A missing file is silent. A malformed file (bad JSON, wrong shape, wrong
    field types) logs a warning and yields defaults; it never raises.
    Loaded fields replace defaults one field at a time, so a partial
    ``interceptPatterns`` map replaces the whole default map.
    """
    config_path = find_project_config(project_path)
    if config_path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return DockerConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        config = DockerConfig.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("Could not parse %s: %s. Using defaults.", config_path, e)
        return DockerConfig()

    logger.debug("Loaded policy from %s", config_path)
    return config
