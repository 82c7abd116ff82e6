"""repocli command line entry point.

Usage: ``repocli [--repocli-config FILE] <gh command> [args...]``

Only the leading ``--repocli-config`` / ``--help`` options belong to the
wrapper; everything after them is the ``gh``-shaped command and is handed to
the active provider's registry untouched. Exit codes are the wrapped CLI's own,
or the wrapper error's code when translation fails before anything runs.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from . import __version__, providers, ux
from .config import discover_config
from .errors import NativeCliFailure, RepocliError, classify_error
from .executor import CommandExecutor
from .logging import configure_logging
from .models import CommandInvocation, ProviderContext

CONFIG_FLAG = "--repocli-config"
EXIT_INTERRUPTED = 130

HELP = f"""REPOCLI - Universal Git Hosting Provider CLI (version {__version__})

Usage: repocli [{CONFIG_FLAG} <file>] <command> [args...]

Configuration:
  {CONFIG_FLAG} <file>     Use custom configuration file
  --help, -h                  Show this help

Commands (GitHub CLI compatible):
  auth <subcommand>   Authentication operations (status, login)
  issue <subcommand>  Issue management (view, create, edit, comment, close, reopen, list)
  repo <subcommand>   Repository operations (view)
  label <subcommand>  Label management (create, list, edit, delete, clone)
  --version           Version of the wrapped provider CLI

Configuration files (in order of preference):
  1. {CONFIG_FLAG} <file>      (highest priority)
  2. REPOCLI_CONFIG env variable
  3. ./repocli.conf
  4. ~/.repocli.conf
  5. ~/.config/repocli/config     (lowest priority)

Environment Variables:
  REPOCLI_CONFIG     Path to configuration file
  REPOCLI_DEBUG      Echo translated commands to stderr (set to 1)
  REPOCLI_INSTANCE   Override the configured instance URL
  REPOCLI_CLI_PATH   Override the wrapped CLI executable
  REPOCLI_STRICT     Refuse to pass unknown commands through (set to 1)
  REPOCLI_JQ_PATH    Override the jq executable used for -q/--jq

Supported providers: github (gh), gitlab (glab)
"""


def split_global_options(argv: Sequence[str]) -> tuple[str | None, bool, list[str]]:
    """Peel wrapper options off the front of ``argv``.

    Returns ``(config_path, show_help, command_argv)``.
    """
    rest = list(argv)
    config_path: str | None = None
    while rest:
        head = rest[0]
        if head in ("--help", "-h"):
            return config_path, True, rest[1:]
        if head == CONFIG_FLAG:
            if len(rest) < 2:
                raise RepocliError(f"{CONFIG_FLAG} requires a file argument", hint=None)
            config_path = rest[1]
            rest = rest[2:]
            continue
        if head.startswith(CONFIG_FLAG + "="):
            config_path = head.split("=", 1)[1]
            rest = rest[1:]
            continue
        break
    return config_path, False, rest


def run(argv: Sequence[str]) -> int:
    logger = configure_logging()
    try:
        config_path, show_help, command = split_global_options(argv)
        if show_help:
            sys.stdout.write(HELP)
            return 0
        if not command:
            sys.stderr.write(HELP)
            return 64
        config = discover_config(config_path)
        ctx = ProviderContext.resolve(config)
        logger.debug(
            f"repocli {__version__}: provider={ctx.provider_name} cli={ctx.executable}"
            f" config={config.source or '<defaults>'}"
        )
        registry = providers.build_registry(ctx)
        invocation = CommandInvocation.from_argv(command)
        descriptor = registry.dispatch(invocation)
        logger.log_dispatch(descriptor.name, invocation.verb, invocation.subcommand)
        plan = descriptor.translate(invocation, ctx)
        return CommandExecutor(ctx, logger=logger).run(plan)
    except NativeCliFailure as exc:
        # stderr of the failing step already reached the user
        logger.debug(f"native step failed: {exc.message}")
        return exc.exit_code
    except RepocliError as exc:
        info = classify_error(exc)
        logger.debug(f"{info.category}: {info.message}", error_type=info.original_type)
        ux.print_error(exc.message, exc.hint)
        return exc.exit_code
    except KeyboardInterrupt:
        ux.print_warning("interrupted")
        return EXIT_INTERRUPTED


def main(argv: list[str] | None = None) -> int:
    return run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
