"""Module entrypoint so ``python -m repocli`` invokes the CLI.

``run()`` hands the real command line to :func:`repocli.cli.main` and turns
its return value into the process exit status.
"""

from __future__ import annotations

import sys

from .cli import main


def run() -> None:  # pragma: no cover - thin wrapper
    sys.exit(main(None))


if __name__ == "__main__":  # pragma: no cover
    run()
