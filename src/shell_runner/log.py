"""Console output for task runs: timestamps, task groups, captured-output blocks.

Under GitHub Actions (GITHUB_ACTIONS=true) sections and tasks become
collapsible ::group:: blocks and failures become ::error:: annotations.
"""

import os
import sys
import time
from contextlib import contextmanager
from datetime import datetime

RULE_WIDTH = 45
GUTTER = "│ "


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _is_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def _annotate(command: str, value: str = "") -> None:
    """Emit a workflow command; a no-op outside GitHub Actions."""
    if _is_github_actions():
        print(f"::{command}::{value}", flush=True)


def _rule(title: str) -> str:
    return f"── {title} " + "─" * max(0, RULE_WIDTH - len(title))


def elapsed(start: float) -> str:
    return f"{time.time() - start:.1f}s"


def info(msg: str) -> None:
    print(f"[{_timestamp()}] {msg}", flush=True)


def header(title: str) -> None:
    _annotate("group", title)
    info(_rule(title))


def footer(title: str) -> None:
    info(_rule(title))
    _annotate("endgroup")


@contextmanager
def task(name: str, command: str):
    """Frame one task's output. The group is closed even if the body raises."""
    _annotate("group", name)
    info(f"▸ {name}: {command}")
    try:
        yield
    finally:
        _annotate("endgroup")


def captured(output: str) -> None:
    """Replay output that was collected without being streamed."""
    for line in output.splitlines():
        info(f"  {GUTTER}{line}")


def step(msg: str) -> None:
    info(f"  {msg}")


def success(msg: str) -> None:
    info(f"  ✓ {msg}")


def failure(msg: str) -> None:
    _annotate("error", msg)
    info(f"  ✗ {msg}")


def error(msg: str) -> None:
    _annotate("error", msg)
    print(f"[{_timestamp()}] ERROR: {msg}", file=sys.stderr, flush=True)
