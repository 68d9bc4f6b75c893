"""Task file discovery + parsing into Task objects."""

import os
from dataclasses import dataclass, field

import yaml

DEFAULT_FILES = ("runner.yml", "runner.yaml")


class ConfigError(RuntimeError):
    """Raised when the task file is missing or malformed."""


@dataclass
class Task:
    name: str
    command: str
    env: dict[str, str] = field(default_factory=dict)
    output: bool = True
    order: int = 100
    file_order: int = 0


def resolve_file() -> str:
    """Resolve the task file path.

    Order: RUNNER_FILE env → runner.yml → runner.yaml → runner.yml (missing).
    """
    env_file = os.environ.get("RUNNER_FILE")
    if env_file:
        return env_file

    for name in DEFAULT_FILES:
        if os.path.isfile(name):
            return name

    return DEFAULT_FILES[0]


def load_config(path: str | None = None) -> dict:
    """Read and YAML-parse the task file."""
    path = path or resolve_file()
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"task file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid task file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"task file {path} must contain a mapping")
    return data


def _parse_env(env) -> dict[str, str]:
    """Normalize an env block to str → str. Accepts a mapping or ["KEY=VALUE", ...]."""
    if not env:
        return {}
    if isinstance(env, list):
        parsed = {}
        for item in env:
            k, _, v = str(item).partition("=")
            parsed[k] = v
        return parsed
    if isinstance(env, dict):
        return {str(k): "" if v is None else str(v) for k, v in env.items()}
    raise ConfigError(f"env must be a mapping or a list, got {type(env).__name__}")


def _parse_output(name, value) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"task '{name}': output must be true or false")
    return value


def _parse_order(name, value) -> int:
    # bool is an int subclass; `order: yes` is a typo, not 1
    if isinstance(value, bool):
        raise ConfigError(f"task '{name}': order must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"task '{name}': order must be an integer") from None


def parse_tasks(config_dict: dict) -> list[Task]:
    """Parse a task file dict into a sorted Task list.

    Sorted by order (ascending), then file order. Task env overrides the
    x-runner env defaults.
    """
    x_runner = config_dict.get("x-runner") or {}
    if not isinstance(x_runner, dict):
        raise ConfigError("x-runner must be a mapping")
    tasks_dict = config_dict.get("tasks") or {}
    if not isinstance(tasks_dict, dict):
        raise ConfigError("tasks must be a mapping of name to command")

    defaults = _parse_env(x_runner.get("env"))
    tasks = []

    for idx, (name, entry) in enumerate(tasks_dict.items()):
        if isinstance(entry, str):
            entry = {"run": entry}
        if not isinstance(entry, dict) or not entry.get("run"):
            raise ConfigError(f"task '{name}' has no run command")

        tasks.append(
            Task(
                name=str(name),
                command=str(entry["run"]),
                env={**defaults, **_parse_env(entry.get("env"))},
                output=_parse_output(name, entry.get("output", True)),
                order=_parse_order(name, entry.get("order", 100)),
                file_order=idx,
            )
        )

    tasks.sort(key=lambda t: (t.order, t.file_order))
    return tasks


def find_unknown(tasks: list[Task], names: list[str]) -> list[str]:
    """Return requested names with no matching task."""
    known = {t.name for t in tasks}
    return [n for n in names if n not in known]
