"""Click entry point — all commands."""

import sys

import click

from shell_runner import __version__, config, log, process
from shell_runner import tasks as tasks_mod


def _parse_env_option(ctx, param, values) -> dict[str, str]:
    env = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'")
        env[key] = value
    return env


@click.group()
@click.version_option(version=__version__, prog_name="shell-runner")
def main():
    """Run shell commands in strict mode, streaming and capturing their output."""


@main.command()
@click.argument("command")
@click.option(
    "--env", "-e", multiple=True, callback=_parse_env_option, help="KEY=VALUE to add to the environment"
)
@click.option("--quiet", "-q", is_flag=True, help="Don't stream output; print it only if the command fails")
def run(command, env, quiet):
    """Run a single shell command."""
    try:
        process.run(command, env=env, output=not quiet)
    except process.CommandFailed as e:
        if quiet:
            log.error(str(e))
        else:
            log.failure(f"command failed: {e.command}")
        sys.exit(1)


@main.command()
@click.argument("names", nargs=-1)
@click.option("--file", "-f", "path", default=None, help="Task file (default: runner.yml)")
@click.option("--dry-run", is_flag=True, help="Show what would run without executing")
def task(names, path, dry_run):
    """Run tasks from the task file (all of them when no NAME is given)."""
    code = tasks_mod.run_tasks(names=list(names) or None, path=path, dry_run=dry_run)
    sys.exit(code)


@main.command(name="list")
@click.option("--file", "-f", "path", default=None, help="Task file (default: runner.yml)")
def list_tasks(path):
    """List tasks in run order."""
    try:
        all_tasks = config.parse_tasks(config.load_config(path))
    except config.ConfigError as e:
        log.error(str(e))
        sys.exit(1)

    if not all_tasks:
        log.info("no tasks defined")
        return

    width = max(len(t.name) for t in all_tasks)
    for t in all_tasks:
        click.echo(f"{t.name.ljust(width)}  {t.command}")


if __name__ == "__main__":
    main()
