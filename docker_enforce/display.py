"""Themed terminal display — consoles, semantic styles, policy messages."""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from docker_enforce.config import CONFIG_FILE

# -- Theme ------------------------------------------------------------------

_STYLES: dict[str, str] = {
    "error": "red",
    "warning": "yellow",
    "success": "green",
    "info": "blue",
    "accent": "bold blue",
}

# -- Consoles ---------------------------------------------------------------
# soft_wrap keeps long commands on one line; results are meant to be copied
# or parsed by hook scripts.

console = Console(theme=Theme(_STYLES), soft_wrap=True, highlight=False, emoji=False)
err_console = Console(theme=Theme(_STYLES), stderr=True, soft_wrap=True, highlight=False, emoji=False)


def docker_exec_command(container_name: str, command: str) -> str:
    return f"docker exec {container_name} {command}"


# -- Policy messages (stderr) -----------------------------------------------


def show_block_message(command: str, container_name: str | None) -> None:
    err_console.print("[error]ERROR: Docker-first policy violation detected![/error]")
    err_console.print()
    err_console.print(f"Command: [info]{escape(command)}[/info]")
    err_console.print("Reason:  Package manager commands must run inside Docker")
    err_console.print()

    if container_name:
        err_console.print("Suggested command:")
        err_console.print(f"  [success]{escape(docker_exec_command(container_name, command))}[/success]")
    else:
        err_console.print(f"Configure containerName in {CONFIG_FILE.as_posix()} first")

    err_console.print()
    err_console.print(f"To allow this command on host, add to {CONFIG_FILE.as_posix()}:")
    err_console.print(f'  "allowedHostCommands": ["{escape(command)}"]')


def show_warning(command: str, container_name: str | None) -> None:
    err_console.print("[warning]WARNING: Running package manager on host instead of Docker[/warning]")
    if container_name:
        err_console.print(
            f"Recommended: [success]{escape(docker_exec_command(container_name, command))}[/success]"
        )
    err_console.print("Proceeding anyway...")


def show_no_container() -> None:
    err_console.print("[error]ERROR: Cannot transform - no containerName configured[/error]")


def show_container_not_running(container_name: str) -> None:
    err_console.print(f"[error]ERROR: Container '{escape(container_name)}' is not running[/error]")
    err_console.print("Start it with: [success]docker compose up -d[/success]")


def show_transform(transformed_command: str) -> None:
    err_console.print(f"[info]Transforming to:[/info] {escape(transformed_command)}")


def show_unknown_mode(mode: str) -> None:
    err_console.print(f"[warning]Unknown enforcement mode: {escape(mode)}[/warning]")


def display_error(message: str) -> None:
    """Plain error line on stderr."""
    err_console.print(f"[error]{escape(message)}[/error]")


# -- Results (stdout) -------------------------------------------------------


def print_result(line: str) -> None:
    """Unstyled stdout line, safe for scripts to parse."""
    console.print(line, markup=False)
