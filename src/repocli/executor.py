"""Run translated native plans.

Every step is executed as an argv list (``shell=False``). Streamed steps
inherit stdin/stdout/stderr so interactive and TTY behaviour is preserved;
captured steps pipe stdout only, stderr always reaches the user verbatim.
"""

from __future__ import annotations

import json
import os
import shutil
import subprocess  # nosec B404 - executing the wrapped provider CLI is the point
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any, TextIO

from .errors import MalformedInputError, NativeCliFailure, NativeCliMissing, TranslationError
from .fields import parse_json, select_fields
from .logging import StructuredLogger, get_logger
from .models import NativeInvocation, NativePlan, ProviderContext

JQ_PATH_ENV = "REPOCLI_JQ_PATH"

Runner = Callable[..., subprocess.CompletedProcess[str]]


def resolve_executable(name: str, which: Callable[[str], str | None] = shutil.which) -> str:
    if os.sep in name:
        if Path(name).is_file() and os.access(name, os.X_OK):
            return name
        raise NativeCliMissing(name)
    found = which(name)
    if not found:
        raise NativeCliMissing(name)
    return found


def run_jq(payload: str, query: str, runner: Runner = subprocess.run) -> str:
    """Apply a ``gh -q`` query; strings print raw like ``gh`` does."""
    jq = resolve_executable(os.environ.get(JQ_PATH_ENV) or "jq")
    proc = runner(  # nosec B603 - argv list, no shell
        [jq, "-r", query],
        input=payload,
        capture_output=True,
        text=True,
        check=False,
    )
    if proc.returncode != 0:
        raise TranslationError("--jq", f"query failed: {(proc.stderr or '').strip()}")
    return proc.stdout


def render_json(data: Any, fields: Sequence[str] = (), query: str | None = None) -> str:
    """Shape mapped data the way ``gh --json FIELDS [-q QUERY]`` prints it."""
    if fields:
        data = select_fields(data, fields)
    text = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    if query:
        return run_jq(text, query)
    return text


class CommandExecutor:
    def __init__(
        self,
        context: ProviderContext,
        *,
        runner: Runner = subprocess.run,
        stdout: TextIO | None = None,
        which: Callable[[str], str | None] = shutil.which,
        logger: StructuredLogger | None = None,
    ) -> None:
        self.context = context
        self._runner = runner
        self._stdout = stdout
        self._which = which
        self._logger = logger or get_logger()

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    def run(self, plan: NativePlan) -> int:
        executed: list[NativeInvocation] = []
        try:
            outputs: list[str] = []
            steps = list(plan.steps)
            for index, step in enumerate(steps):
                final = index == len(steps) - 1 and plan.expand is None
                executed.append(step)
                returncode, out = self._execute(step)
                if returncode != 0:
                    if final:
                        if out:
                            self.stdout.write(out)
                        return returncode
                    raise NativeCliFailure(returncode, tuple(step.argv))
                outputs.append(out)
            if plan.expand is not None:
                follow_up = list(plan.expand(outputs))
                for step in follow_up:
                    executed.append(step)
                    returncode, out = self._execute(step)
                    if returncode != 0:
                        return returncode
                    outputs.append(out)
            if plan.postprocess is not None:
                rendered = plan.postprocess(outputs[-1] if outputs else "")
                if rendered:
                    self.stdout.write(rendered)
                    self.stdout.flush()
            return 0
        finally:
            _cleanup([*plan.steps, *executed])

    def _execute(self, step: NativeInvocation) -> tuple[int, str]:
        if step.page_size > 0:
            return self._run_paged(step)
        return self._run_step(step)

    def _run_paged(self, step: NativeInvocation) -> tuple[int, str]:
        """Fetch pages until one comes back short or ``max_items`` is reached.

        The joined items are returned as a single JSON array.
        """
        items: list[Any] = []
        page = 1
        while True:
            args = (*step.args, "--page", str(page), "--per-page", str(step.page_size))
            returncode, out = self._run_step(replace(step, args=args, capture=True, page_size=0))
            if returncode != 0:
                return returncode, out
            batch = parse_json(out) if out.strip() else []
            if not isinstance(batch, list):
                raise MalformedInputError(f"expected a JSON array on page {page}")
            items.extend(batch)
            if len(batch) < step.page_size:
                break
            if step.max_items is not None and len(items) >= step.max_items:
                break
            page += 1
        if step.max_items is not None:
            items = items[: step.max_items]
        return 0, json.dumps(items)

    def _run_step(self, step: NativeInvocation) -> tuple[int, str]:
        executable = resolve_executable(step.executable, self._which)
        env = dict(os.environ)
        env.update(step.env)
        self._logger.log_native_invocation(step.describe(), capture=step.capture)
        argv = [executable, *step.args]
        if step.capture:
            proc = self._runner(  # nosec B603 - argv list, no shell
                argv, env=env, stdout=subprocess.PIPE, text=True, check=False
            )
            return proc.returncode, proc.stdout or ""
        proc = self._runner(argv, env=env, check=False)  # nosec B603
        return proc.returncode, ""


def _cleanup(steps: Iterable[NativeInvocation]) -> None:
    for step in steps:
        for path in step.temp_files:
            try:
                path.unlink()
            except FileNotFoundError:
                pass


__all__ = ["CommandExecutor", "render_json", "resolve_executable", "run_jq"]
