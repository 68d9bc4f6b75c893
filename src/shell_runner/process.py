"""Subprocess wrapper — stream a shell command's output while capturing it."""

import os
import subprocess
import sys
import threading
from collections.abc import Mapping

DEFAULT_SHELL = "/bin/sh"


class CommandFailed(RuntimeError):
    """Raised when a command exits non-zero. Carries the captured output."""

    def __init__(self, command: str, output: str):
        self.command = command
        self.output = output
        super().__init__(f"The command has failed to run: {command}\nOutput:\n{output}")


def resolve_shell() -> str:
    """Shell binary: RUNNER_SHELL env → /bin/sh."""
    return os.environ.get("RUNNER_SHELL") or DEFAULT_SHELL


def _drain(reader, lines: list[str], output: bool) -> None:
    # Iteration stops at EOF, once every holder of the write end has closed it
    echo = output
    for line in reader:
        if echo:
            try:
                print(line, end="", flush=True)
            except OSError:
                # stdout is gone; keep draining or a full pipe blocks the child
                echo = False
        lines.append(line)


def run(command: str, env: Mapping[str, str] | None = None, output: bool = True) -> str:
    """Run a command under `set -eux`, streaming stdout+stderr. Raises on non-zero exit.

    Returns the combined output in the order the child wrote it.
    """
    merged_env = None
    if env:
        merged_env = {**os.environ, **env}

    lines: list[str] = []
    read_fd, write_fd = os.pipe()
    with os.fdopen(read_fd, encoding="utf-8", errors="replace", newline="") as reader:
        try:
            proc = subprocess.Popen(
                [resolve_shell(), "-c", f"set -eux; {command}"],
                stdout=write_fd,
                stderr=write_fd,
                env=merged_env,
            )
            thread = threading.Thread(target=_drain, args=(reader, lines, output), daemon=True)
            thread.start()
            returncode = proc.wait()
        finally:
            os.close(write_fd)
        thread.join()

    captured = "".join(lines)
    if returncode != 0:
        raise CommandFailed(command, captured)
    return captured
