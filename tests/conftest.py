"""Pytest configuration for repocli tests.

Ensures the in-repo `src` directory is on `sys.path` so the package can be
imported without an editable install (`pip install -e .`), and exported through
PYTHONPATH so `python -m repocli` subprocesses see the same code.
"""

from __future__ import annotations

import io
import os
import sys
import textwrap
import time
from pathlib import Path

import pytest

_TEST_START_TIMES: dict[str, float] = {}
_TEST_DURATIONS: list[tuple[str, float]] = []

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    # Prepend so that 'python -m repocli' finds local package first
    sys.path.insert(0, str(SRC))

py_path = os.environ.get("PYTHONPATH", "")
parts = [p for p in py_path.split(os.pathsep) if p]
if str(SRC) not in parts:
    parts.insert(0, str(SRC))
    os.environ["PYTHONPATH"] = os.pathsep.join(parts)

_REPOCLI_ENV = (
    "REPOCLI_CONFIG",
    "REPOCLI_CLI_PATH",
    "REPOCLI_INSTANCE",
    "REPOCLI_DEBUG",
    "REPOCLI_STRICT",
    "REPOCLI_LOG_JSON",
    "REPOCLI_JQ_PATH",
)


@pytest.fixture(autouse=True)
def _clean_repocli_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _REPOCLI_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stdin_text(monkeypatch: pytest.MonkeyPatch):
    """Replace ``sys.stdin`` with the given text."""

    def _set(text: str) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    return _set


@pytest.fixture
def fake_cli(tmp_path: Path):
    """Write an executable script standing in for a provider CLI.

    The script appends its argv (one JSON array per line) to ``calls.log`` and
    prints ``stdout`` for every invocation, exiting with ``exit_code``.
    """

    def _make(name: str = "glab", stdout: str = "", exit_code: int = 0) -> Path:
        log = tmp_path / "calls.log"
        script = tmp_path / name
        script.write_text(
            textwrap.dedent(
                f"""\
                #!{sys.executable}
                import json, sys
                with open({str(log)!r}, "a", encoding="utf-8") as fh:
                    fh.write(json.dumps(sys.argv[1:]) + "\\n")
                sys.stdout.write({stdout!r})
                sys.exit({exit_code})
                """
            ),
            encoding="utf-8",
        )
        script.chmod(0o755)
        return script

    return _make


# --- Timing utilities to help identify slow/stalling tests ---


def pytest_runtest_setup(item):  # type: ignore
    _TEST_START_TIMES[item.nodeid] = time.perf_counter()


def pytest_runtest_teardown(item):  # type: ignore
    start = _TEST_START_TIMES.pop(item.nodeid, None)
    if start is not None:
        _TEST_DURATIONS.append((item.nodeid, time.perf_counter() - start))


def pytest_sessionfinish(session, exitstatus):  # type: ignore
    if not _TEST_DURATIONS:
        return
    slow = sorted(_TEST_DURATIONS, key=lambda x: x[1], reverse=True)[:10]
    print("\n=== Slowest Tests (top 10) ===")
    for nodeid, secs in slow:
        print(f"{secs:0.3f}s  {nodeid}")
