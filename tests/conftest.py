"""Shared test fixtures."""

import pytest


@pytest.fixture
def mock_process(monkeypatch):
    """Mock process.run for tests.

    Queue an exception in `failures` to make the next call raise it.
    """
    from shell_runner import process

    calls = []
    outputs = []
    failures = []

    def fake_run(command, env=None, output=True):
        calls.append((command, env, output))
        if failures:
            raise failures.pop(0)
        if outputs:
            return outputs.pop(0)
        return ""

    monkeypatch.setattr(process, "run", fake_run)

    return type("MockProcess", (), {"calls": calls, "outputs": outputs, "failures": failures})()


@pytest.fixture
def task_file(tmp_path, monkeypatch):
    """Write a runner.yml into a temp cwd and return its path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RUNNER_FILE", raising=False)

    def _write(content, name="runner.yml"):
        path = tmp_path / name
        path.write_text(content)
        return str(path)

    return _write
