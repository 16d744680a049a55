#!/usr/bin/env python3
"""proplint/main.py — CLI entry-point for proplint.

Usage examples
--------------
    # Check a component whose parsed tree was serialized to JSON
    proplint check Component.json --source Component.vue

    # Run only one rule, JSON-lines output
    proplint check Component.json --rule require-valid-default-prop -f json

    # Suppress a rule globally
    proplint check Component.json --suppress vue/require-prop-types

    # Recognize an aliased props macro
    proplint check Component.json --define-props defineProps --define-props defineTypedProps

    # List available rules
    proplint rules

Exit codes
----------
    0   Success (no diagnostics).
    1   One or more diagnostics were emitted.
    2   Infrastructure failure (missing or malformed input, bad options).

The module doubles as ``python -m proplint`` via the companion
``proplint/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from pathlib import Path
from typing import Optional, Sequence, TextIO

from proplint import __version__
from proplint.checkers import CheckerRunResults, default_registry
from proplint.config import OUTPUT_FORMATS, AnalysisConfig
from proplint.errors import ProplintError
from proplint.estree import load_tree

_log = logging.getLogger("proplint")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the root ``proplint`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("proplint")
    root.setLevel(level)
    if not any(getattr(h, "_proplint_cli", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        handler._proplint_cli = True  # type: ignore[attr-defined]
        root.addHandler(handler)


def _resolve_path(raw: str, label: str = "file") -> Path:
    """Resolve *raw* to an absolute ``Path``, raising on missing files."""
    p = Path(raw).expanduser().resolve()
    if not p.exists():
        _log.error("%s not found: %s", label, p)
        raise SystemExit(EXIT_INFRA)
    return p


def _open_output(dest: Optional[str]) -> TextIO:
    """Return a writable text stream.

    *dest* ``None`` or ``"-"`` → ``sys.stdout``; otherwise open the path
    for writing (creating parent directories as needed).
    """
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


def _emit_results(results: CheckerRunResults, fmt: str, stream: TextIO) -> None:
    """Write *results* to *stream* in the chosen format."""
    if fmt == "json":
        text = results.to_json_lines()
    elif fmt == "gcc":
        text = results.to_gcc_format()
    else:
        lines = [d.to_gcc_format() for d in results.diagnostics]
        lines.append(results.summary())
        text = "\n".join(lines)
    if text:
        stream.write(text + "\n")


def _config_from_args(args: argparse.Namespace) -> AnalysisConfig:
    config = AnalysisConfig(
        rules=list(args.rule) if args.rule else None,
        suppress=list(args.suppress or ()),
        inline_directives=not args.no_inline_directives,
        output_format=args.format,
    )
    if args.define_props:
        config.define_props = list(args.define_props)
    if args.with_defaults:
        config.with_defaults = list(args.with_defaults)
    if args.define_model:
        config.define_model = list(args.define_model)
    return config


# ===========================================================================
# Sub-commands
# ===========================================================================

def cmd_check(args: argparse.Namespace) -> int:
    """Check the prop declarations of one serialized tree.

    Workflow:
        1. Build and validate an ``AnalysisConfig`` from the flags.
        2. Load the JSON tree (and optional source text).
        3. Run the checker suite over every component found.
        4. Emit diagnostics and return an appropriate exit code.
    """
    config = _config_from_args(args)
    try:
        config.check()
    except ProplintError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA

    tree_path = _resolve_path(args.tree, "tree file")
    source_path = _resolve_path(args.source, "source file") if args.source else None

    _log.info("Loading tree: %s", tree_path)
    try:
        program = load_tree(tree_path, source_path=source_path)
    except ProplintError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA
    except OSError as exc:
        _log.error("Failed to read input: %s", exc)
        return EXIT_INFRA

    runner = config.make_runner()
    results = runner.run(program, checkers=config.rules)
    _log.info("%d prop(s) analyzed, %d diagnostic(s)",
              results.stats.get("entries", 0), results.total_count)

    stream = _open_output(args.output)
    try:
        _emit_results(results, config.output_format, stream)
    finally:
        if stream is not sys.stdout:
            stream.close()

    return EXIT_ERROR if results.total_count else EXIT_OK


def cmd_rules(args: argparse.Namespace) -> int:
    """List the available rules."""
    registry = default_registry()
    stream = sys.stdout
    for name in registry.names:
        cls = registry.get_by_name(name)
        if cls is None:
            continue
        stream.write(f"  {name:30s} {cls.description}\n")
        stream.write(f"  {'':30s} IDs: {', '.join(sorted(cls.error_ids))}\n")
        stream.write(f"  {'':30s} severity: {cls.default_severity.value}\n")
    return EXIT_OK


# ===========================================================================
# Parser
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct the full CLI argument parser with subcommands."""

    # --- Top-level parser --------------------------------------------------
    parser = argparse.ArgumentParser(
        prog="proplint",
        description=(
            "proplint — static checks for UI component prop declarations.\n\n"
            "Reads an ESTree syntax tree serialized as JSON and reports props\n"
            "without a type and defaults that contradict their declared type."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              proplint check Component.json --source Component.vue
              proplint check Component.json --rule require-prop-types -f json
              proplint rules
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- check -------------------------------------------------------------
    p_check = subparsers.add_parser(
        "check",
        help="Check the prop declarations of a serialized tree.",
    )
    p_check.add_argument(
        "tree",
        metavar="TREE.json",
        help="Program node serialized as JSON.",
    )
    p_check.add_argument(
        "--source",
        default=None,
        metavar="FILE",
        help="Source text the tree was parsed from (improves messages).",
    )
    p_check.add_argument(
        "--rule",
        action="append",
        default=None,
        metavar="NAME",
        help="Run only this rule (repeatable; default: all).",
    )
    p_check.add_argument(
        "--suppress",
        action="append",
        default=None,
        metavar="ID",
        help="Suppress a rule name or error id (repeatable).",
    )
    p_check.add_argument(
        "--no-inline-directives",
        action="store_true",
        help="Ignore eslint-disable-line / eslint-disable-next-line comments.",
    )
    p_check.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help='Output file ("-" or omit for stdout).',
    )
    p_check.add_argument(
        "-f", "--format",
        choices=list(OUTPUT_FORMATS),
        default="gcc",
        help="Output format (default: gcc).",
    )
    p_check.add_argument(
        "-v", "--verbose",
        action="count",
        default=argparse.SUPPRESS,
        help="Increase verbosity (-v info, -vv debug).",
    )

    g = p_check.add_argument_group("macro names")
    g.add_argument("--define-props", action="append", metavar="NAME",
                   help="Props declaration macro (default: defineProps).")
    g.add_argument("--with-defaults", action="append", metavar="NAME",
                   help="Defaults-merging macro (default: withDefaults).")
    g.add_argument("--define-model", action="append", metavar="NAME",
                   help="Model declaration macro (default: defineModel).")
    p_check.set_defaults(func=cmd_check)

    # --- rules -------------------------------------------------------------
    p_rules = subparsers.add_parser(
        "rules",
        help="List available rules.",
    )
    p_rules.set_defaults(func=cmd_rules)

    return parser


# ===========================================================================
# Main
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the proplint CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Configure logging based on verbosity level.
    _configure_logging(args.verbose)

    # No subcommand given → print help.
    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130  # Standard UNIX convention for SIGINT
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


# ---------------------------------------------------------------------------
# Module execution support
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    raise SystemExit(main())
