"""Command line entry point.

    shellcomplete complete <line> [cursor]   print the candidates, one per line
    shellcomplete validate [directory]       check the definition files
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .ansi import should_colorize, style_candidate
from .config import Configuration
from .config_loader import ConfigLoader
from .definitions import DefinitionStore
from .engine import CompletionEngine
from .logging_setup import get_logger, init_logger
from .models import ConfigError, ExitCode
from .validation import ENGINE_SCHEMA

__all__ = ["main"]

USAGE = """Usage: shellcomplete [--debug <logfile>] [--config <file>] <command>

Commands:
 complete <line> [cursor]   Print the completions of <line>
 validate [directory]       Check the completion definition files
 help                       Show this message
"""


def use_param(txt: str) -> str:
    """Check if parameter `txt` is in sys.argv.

    if found, removes it from sys.argv & returns the argument value
    """
    v = ""
    if txt in sys.argv:
        i = sys.argv.index(txt)
        v = sys.argv[i + 1] if i + 1 < len(sys.argv) else ""
        del sys.argv[i : i + 2]
    return v


def _load_config(config_filename: str) -> tuple[Configuration, int]:
    """Load the configuration, returning it with the number of errors found."""
    log = get_logger("config")
    loader = ConfigLoader(log)
    try:
        return loader.load(config_filename), len(loader.errors)
    except ConfigError:
        return Configuration(logger=log, schema=ENGINE_SCHEMA), 1


def run_complete(engine: CompletionEngine, args: list[str]) -> ExitCode:
    """Print the candidates for a line."""
    if not args:
        print(USAGE, file=sys.stderr)
        return ExitCode.USAGE_ERROR
    line = args[0]
    try:
        cursor = int(args[1]) if len(args) > 1 else None
    except ValueError:
        print(f"Invalid cursor position: {args[1]}", file=sys.stderr)
        return ExitCode.USAGE_ERROR

    use_colors = should_colorize(sys.stdout)
    for candidate in engine.resolve_completions(line, cursor):
        print(style_candidate(candidate) if use_colors else candidate)
    return ExitCode.SUCCESS


def run_validate(config: Configuration, args: list[str], config_errors: int = 0) -> ExitCode:
    """Load a definitions directory and report every problem found."""
    directory = Path(args[0]) if args else config.get_path("definitions_dir")
    if not directory.is_dir():
        print(f"No definitions directory at {directory}")
        return ExitCode.DEFINITION_ERROR if config_errors else ExitCode.SUCCESS

    # problems are printed below, keep the logger quiet
    store = DefinitionStore(log=get_logger("validate", level=logging.CRITICAL + 1))
    report = store.reload_user(directory)

    print(f"Checked {report.loaded + len(report.errors)} definition file(s) in {directory}")
    for path, error in report.errors:
        print(f"  ERROR: {path.name}: {error}")
    for path, warning in report.warnings:
        print(f"  WARNING: {path.name}: {warning}")

    for name in store.commands():
        definition = store.lookup(name)
        assert definition is not None
        print(f"✅ {name} ({len(definition.entries)} entries, depth {definition.depth})")

    if report.errors or config_errors:
        return ExitCode.DEFINITION_ERROR
    return ExitCode.SUCCESS


def main() -> None:
    """Run the command."""
    debug_flag = use_param("--debug")
    if debug_flag:
        init_logger(filename=debug_flag, force_debug=True)
    else:
        init_logger()
    config_filename = use_param("--config")

    if len(sys.argv) < 2 or sys.argv[1] in {"help", "--help", "-h"}:  # noqa: PLR2004
        print(USAGE)
        sys.exit(ExitCode.SUCCESS if len(sys.argv) >= 2 else ExitCode.USAGE_ERROR)  # noqa: PLR2004

    command, args = sys.argv[1], sys.argv[2:]
    config, config_errors = _load_config(config_filename)

    if command == "complete":
        sys.exit(run_complete(CompletionEngine(config), args))
    elif command == "validate":
        sys.exit(run_validate(config, args, config_errors))

    print(f"Unknown command: {command}\n\n{USAGE}", file=sys.stderr)
    sys.exit(ExitCode.USAGE_ERROR)


if __name__ == "__main__":
    main()
