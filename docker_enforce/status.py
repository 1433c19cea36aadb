"""Policy / container health and status table rendering."""

from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from docker_enforce.config import ENFORCEMENT_MODES, find_project_config, load_config
from docker_enforce.runtime import DockerRuntime


@dataclass
class StatusInfo:
    project: str  # basename
    config_path: str | None  # path to .claude/docker-config.json or None
    container_name: str | None
    container: str  # "running" | "not running" | "not configured"
    enforcement: str
    enforcement_known: bool
    allowed_host_commands: list[str]
    intercepted_tools: list[str]


def get_status(project_path: str | Path | None = None, runtime: DockerRuntime | None = None) -> StatusInfo:
    """Gather policy status into a plain dataclass (no display side-effects)."""
    base = Path(project_path) if project_path is not None else Path.cwd()
    config = load_config(base)
    config_path = find_project_config(base)

    if not config.container_name:
        container = "not configured"
    elif (runtime or DockerRuntime()).is_container_running(config.container_name):
        container = "running"
    else:
        container = "not running"

    return StatusInfo(
        project=base.resolve().name,
        config_path=str(config_path) if config_path else None,
        container_name=config.container_name,
        container=container,
        enforcement=config.enforcement,
        enforcement_known=config.enforcement in ENFORCEMENT_MODES,
        allowed_host_commands=list(config.allowed_host_commands),
        intercepted_tools=[tool for tool, enabled in config.intercept_patterns.items() if enabled],
    )


def render_status_table(info: StatusInfo) -> Table:
    """Build a Rich Table from StatusInfo using semantic styles."""
    table = Table(title=f"Docker-first Policy ({escape(info.project)})")
    table.add_column("Component", style="accent")
    table.add_column("Status", style="info")
    table.add_column("Details", style="success")

    table.add_row("Config", "Active" if info.config_path else "Defaults", escape(info.config_path or "—"))
    table.add_row("Container", info.container.title(), escape(info.container_name or "—"))
    mode_status = "Active" if info.enforcement_known else "Unknown (allows all)"
    table.add_row("Enforcement", mode_status, escape(info.enforcement))
    table.add_row(
        "Allow-list",
        f"{len(info.allowed_host_commands)} entries",
        escape(", ".join(info.allowed_host_commands)) or "—",
    )
    table.add_row(
        "Intercepted",
        f"{len(info.intercepted_tools)} tools",
        ", ".join(info.intercepted_tools) or "—",
    )
    return table
