import logging
import sys

import typer
from rich.logging import RichHandler

from docker_enforce.config import load_config
from docker_enforce.display import console, display_error, docker_exec_command, err_console, print_result
from docker_enforce.patterns import would_block
from docker_enforce.policy import evaluate
from docker_enforce.runtime import DockerRuntime
from docker_enforce.status import get_status, render_status_table

app = typer.Typer(
    help="Docker-first policy enforcement for package manager commands.",
    context_settings={"help_option_names": ["--help", "-h"]},
    add_completion=False,
    no_args_is_help=True,
)

# Everything after the first command word belongs to the command, including
# things that look like options ("npm install --save-dev x").
_COMMAND_CONTEXT = {"ignore_unknown_options": True, "allow_interspersed_args": False}

_SUBCOMMANDS = {"check", "validate", "transform", "enforce", "status"}
_GLOBAL_FLAGS = {"--verbose", "-v"}
_HELP_FLAGS = {"--help", "-h"}

_PROJECT_HELP = "Project directory holding .claude/docker-config.json (default: cwd)"
_COMMAND_HELP = "Command to evaluate, e.g. npm install express"


def _setup_logging(verbose: bool) -> None:
    pkg_logger = logging.getLogger("docker_enforce")
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        pkg_logger.addHandler(
            RichHandler(console=err_console, show_time=False, show_path=False, markup=False)
        )
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _route_args(argv: list[str]) -> list[str]:
    """Insert the implicit ``enforce`` sub-command.

    ``docker-enforce npm install x`` means ``docker-enforce enforce npm install x``.
    Leading global flags stay in front of the inserted sub-command, and
    flags alone route to ``enforce`` so the missing command is a usage error.
    ``status`` followed by a plain word is a command to enforce, not the
    status sub-command.
    """
    if not argv:
        return []
    idx = 0
    while idx < len(argv) and argv[idx] in _GLOBAL_FLAGS:
        idx += 1
    if idx < len(argv) and (argv[idx] in _SUBCOMMANDS or argv[idx] in _HELP_FLAGS):
        rest = argv[idx + 1:]
        if argv[idx] != "status" or not rest or rest[0].startswith("-"):
            return list(argv)
    return [*argv[:idx], "enforce", *argv[idx:]]


def _join_command(words: list[str] | None, usage: str) -> str:
    cmd = " ".join(words or [])
    if not cmd:
        display_error(f"Usage: docker-enforce {usage}")
        raise typer.Exit(1)
    return cmd


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Docker-first policy enforcement for package manager commands."""
    _setup_logging(verbose)


@app.command(context_settings=_COMMAND_CONTEXT)
def check(
    command: list[str] = typer.Argument(None, help=_COMMAND_HELP),
    project: str = typer.Option(None, "--project", "-C", help=_PROJECT_HELP),
):
    """Check whether a command would be blocked (ignores mode and container state)."""
    cmd = _join_command(command, "check <command>")
    config = load_config(project)
    if would_block(cmd, config):
        print_result(f"WOULD_BLOCK: {cmd}")
        raise typer.Exit(1)
    print_result(f"ALLOWED: {cmd}")


@app.command()
def validate(
    project: str = typer.Option(None, "--project", "-C", help=_PROJECT_HELP),
):
    """Validate that the configured container is running."""
    config = load_config(project)
    if not config.container_name:
        print_result("ERROR: No container configured")
        raise typer.Exit(1)
    if DockerRuntime().is_container_running(config.container_name):
        print_result(f"OK: Container '{config.container_name}' is running")
        return
    print_result(f"ERROR: Container '{config.container_name}' is not running")
    raise typer.Exit(1)


@app.command(context_settings=_COMMAND_CONTEXT)
def transform(
    command: list[str] = typer.Argument(None, help=_COMMAND_HELP),
    project: str = typer.Option(None, "--project", "-C", help=_PROJECT_HELP),
):
    """Print the docker exec version of a command."""
    cmd = _join_command(command, "transform <command>")
    config = load_config(project)
    if not config.container_name:
        display_error("ERROR: No container configured")
        raise typer.Exit(1)
    print_result(docker_exec_command(config.container_name, cmd))


@app.command(context_settings=_COMMAND_CONTEXT)
def enforce(
    command: list[str] = typer.Argument(None, help=_COMMAND_HELP),
    project: str = typer.Option(None, "--project", "-C", help=_PROJECT_HELP),
    run: bool = typer.Option(False, "--run", help="Execute transformed commands inside the container"),
):
    """Apply the enforcement policy (default when no sub-command is given)."""
    cmd = _join_command(command, "[enforce] <command>")
    config = load_config(project)
    result = evaluate(cmd, config)

    if result.action == "block":
        raise typer.Exit(1)

    if result.action == "transform" and run:
        try:
            exit_code, output = DockerRuntime().exec_command(config.container_name, cmd)
        except RuntimeError as e:
            display_error(f"ERROR: {e}")
            raise typer.Exit(1)
        if output:
            console.out(output, end="")
        raise typer.Exit(exit_code)


@app.command()
def status(
    project: str = typer.Option(None, "--project", "-C", help=_PROJECT_HELP),
):
    """Show the effective policy and container state."""
    console.print(render_status_table(get_status(project)))


def main() -> None:
    app(args=_route_args(sys.argv[1:]), prog_name="docker-enforce")


if __name__ == "__main__":
    main()
