"""Run configured tasks in order, with framed output and exit codes."""

import time

from shell_runner import config, log, process


def run_tasks(
    names: list[str] | None = None,
    path: str | None = None,
    dry_run: bool = False,
) -> int:
    """Run tasks from the task file. Returns exit code (0=success, 1=failure)."""
    try:
        all_tasks = config.parse_tasks(config.load_config(path))
    except config.ConfigError as e:
        log.error(str(e))
        return 1

    selected = all_tasks
    if names:
        unknown = config.find_unknown(all_tasks, names)
        if unknown:
            log.error(f"Unknown task(s): {', '.join(unknown)}")
            return 1
        selected = [t for t in all_tasks if t.name in names]

    if not selected:
        log.error("No tasks to run")
        return 1

    if dry_run:
        _dry_run(selected)
        return 0

    log.header("run")
    log.info(f"tasks: {', '.join(t.name for t in selected)}")
    log.info("")

    start_time = time.time()

    for task in selected:
        if _run_task(task) != 0:
            log.info("")
            log.footer(f"FAILED ({task.name})")
            return 1

    log.info("")
    log.footer(f"complete ({log.elapsed(start_time)})")
    return 0


def _run_task(task: config.Task) -> int:
    start_time = time.time()
    with log.task(task.name, task.command):
        try:
            process.run(task.command, env=task.env, output=task.output)
        except process.CommandFailed as e:
            if not task.output:
                log.captured(e.output)
            log.failure(f"{task.name} failed")
            return 1
        log.success(f"{task.name} ({log.elapsed(start_time)})")
    return 0


def _dry_run(tasks: list[config.Task]) -> None:
    log.header("run (dry run)")
    for task in tasks:
        log.info(f"▸ {task.name}")
        log.step(task.command)
        if task.env:
            log.step(f"env: {', '.join(sorted(task.env))}")
        if not task.output:
            log.step("output: captured")
    log.footer("dry run complete")
