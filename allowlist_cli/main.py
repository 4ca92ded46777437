"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m allowlist_cli build [IDS ...] [--input FILE] [--out FILE] [--hash NAME] [--trace] [--json]
    python -m allowlist_cli verify ID (--root HEX --proof HEX ... | --commitment FILE) [--json]
    python -m allowlist_cli config [--show | --init] [--path FILE]

Environment Variables:
    ALLOWLIST_HASH_FUNCTION     Digest for leaves and nodes (keccak256, sha256)
    ALLOWLIST_LOG_LEVEL         Log level (default: INFO)
    ALLOWLIST_LOG_FILE          Additional log file
    ALLOWLIST_TRACE             Log every pipeline stage (default: false)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from allowlist_cli import __version__
from allowlist_cli.commands import build, verify
from core.config import RuntimeConfig, get_default_config_template
from core.crypto.hashing import HASHERS


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
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="allowlist-merkle",
        description="Build Merkle roots and inclusion proofs for identifier allow-lists.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./allowlist.yaml if present)",
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
        help="Build root and proofs for a set of identifiers",
        description="Canonicalize identifiers, build the tree and emit root, proofs and max proof length.",
    )
    build_parser.add_argument(
        "identifiers",
        nargs="*",
        help="Identifiers (decimal or 0x-prefixed hex)",
    )
    build_parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="File with identifiers (JSON array or one per line)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the commitment JSON here instead of stdout",
    )
    build_parser.add_argument(
        "--hash",
        type=str,
        choices=sorted(HASHERS),
        default=None,
        help="Hash function (default: from config, keccak256)",
    )
    build_parser.add_argument(
        "--trace",
        action="store_true",
        default=False,
        help="Log every intermediate stage (elements, layers, root, proofs)",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks on errors",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an identifier's inclusion proof against a root",
        description="Recompute the root from an identifier and its proof.",
    )
    verify_parser.add_argument(
        "identifier",
        type=str,
        help="Identifier to check (decimal or 0x-prefixed hex)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected Merkle root (0x-prefixed hex)",
    )
    verify_parser.add_argument(
        "--proof",
        nargs="*",
        default=None,
        help="Sibling hashes, leaf to root (0x-prefixed hex)",
    )
    verify_parser.add_argument(
        "--commitment",
        type=str,
        default=None,
        help="Commitment JSON written by 'build' (supplies root and proof)",
    )
    verify_parser.add_argument(
        "--hash",
        type=str,
        choices=sorted(HASHERS),
        default=None,
        help="Hash function (default: from commitment or config)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks on errors",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show or initialize configuration",
        description="Manage allowlist-merkle configuration.",
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
        default="allowlist.yaml",
        help="Path for config file (default: allowlist.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.
    """
    if config_path is None:
        default_path = Path.cwd() / "allowlist.yaml"
        if default_path.exists():
            config_path = default_path

    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        config = RuntimeConfig()

    return config.with_env_overrides()


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (ALLOWLIST_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: allowlist-merkle config [--init|--show]")
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

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
