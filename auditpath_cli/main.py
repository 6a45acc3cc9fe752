"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    auditpath build <hex>... [--file PATH] [--json] [--nodes]
    auditpath prove <target-hex> <hex>... [--file PATH] [--out PATH]
    auditpath verify <proof.json> [--leaf HEX] [--root HEX] [--trace] [--json]
    auditpath config --init | --show

Leaves are 64-char hex digests; the token 'null' stands for an absent leaf.

Environment Variables:
    AUDITPATH_LOG_LEVEL             Log level (default: INFO)
    AUDITPATH_LOG_FILE              Optional log file
    AUDITPATH_MAX_WORKERS           Threads for level hashing (default: 1)
    AUDITPATH_PARALLEL_THRESHOLD    Minimum level width hashed in parallel
    AUDITPATH_OUTPUT_FORMAT         Default output format: human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from auditpath import __version__
from auditpath.config.runtime import set_default_config
from auditpath.schemas.errors import AuditPathException
from auditpath_cli.commands import build, prove, verify
from auditpath_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_leaf_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "leaves",
        nargs="*",
        help="Leaf digests as 64-char hex, in order ('null' for an absent leaf)",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional leaves from a file, one per line",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="auditpath",
        description="Build Merkle trees, generate audit paths and verify leaf membership.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./auditpath.json or ~/.config/auditpath/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree and print its root",
        description="Build a power-of-two padded Merkle tree over the given leaves.",
    )
    _add_leaf_source_args(build_parser)
    build_parser.add_argument(
        "--nodes",
        action="store_true",
        default=False,
        help="Include every tree slot in the output",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output machine-readable JSON",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate the audit path for a leaf",
        description="Build the tree and emit the proof for TARGET as JSON.",
    )
    prove_parser.add_argument(
        "target",
        type=str,
        help="Leaf digest to prove (64-char hex)",
    )
    _add_leaf_source_args(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof JSON to this path instead of stdout",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a leaf against a saved proof",
        description="Recompute the root from a leaf and a proof file.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a proof JSON file produced by 'prove'",
    )
    verify_parser.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="Leaf digest to verify (default: the leaf recorded in the proof)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root digest the proof must end in",
    )
    verify_parser.add_argument(
        "--trace",
        action="store_true",
        default=False,
        help="Show the accumulator after every hashing step",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Create or show configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=None,
        help="Path for config file (default: ./auditpath.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path) if args.path else Path.cwd() / "auditpath.json"
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (AUDITPATH_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "output_format": config.default_output_format,
            **config.runtime.to_dict(),
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: auditpath config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)
    set_default_config(config.runtime)

    # Attach config to args for commands to use
    args.cli_config = config
    if getattr(args, "json", False) is None:
        args.json = config.default_output_format == "json"

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AuditPathException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
