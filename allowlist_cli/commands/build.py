"""
CLI Build Command

Build a Merkle commitment (root, proofs, max proof length) for a set of
identifiers given on the command line and/or in a file.

Input file formats:
- JSON array of integers or decimal/0x-hex strings
- Plain text, one identifier per line (blank lines and # comments skipped)

Usage:
    allowlist-merkle build 1 2 3 6
    allowlist-merkle build --input ids.json --out commitment.json [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from core.config import RuntimeConfig
from core.crypto.hashing import get_hasher
from core.merkle.canonical import parse_identifier
from core.schemas.errors import MerkleCommitmentException, PreconditionViolation
from orchestrator.pipeline import build_commitment


logger = logging.getLogger(__name__)

TRACE_LOGGER_NAME = "allowlist.trace"


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a build for CLI output."""
    root: str = ""
    leaf_count: int = 0
    max_proof_length: int = 0
    hash_function: str = ""
    saved_to: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["saved_to"]:
            del d["saved_to"]
        return d


def _coerce_identifier(item: Any) -> int:
    if isinstance(item, bool):
        raise PreconditionViolation(f"Invalid identifier: {item!r}", value=item)
    if isinstance(item, int):
        return item
    if isinstance(item, str):
        return parse_identifier(item)
    raise PreconditionViolation(
        f"Identifier must be an integer or string, got {type(item).__name__}",
        value=item,
    )


def read_identifiers(path: Path) -> list[int]:
    """
    Read identifiers from a JSON array or a one-per-line text file.

    Raises:
        FileNotFoundError: If the file does not exist
        PreconditionViolation: If an entry is not a valid identifier
    """
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")

    text = path.read_text(encoding="utf-8")
    stripped = text.lstrip()

    if stripped.startswith("["):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PreconditionViolation(f"Invalid JSON in {path}: {e}") from e
        return [_coerce_identifier(item) for item in data]

    identifiers = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            identifiers.append(parse_identifier(line))
    return identifiers


def collect_identifiers(args: Namespace) -> list[int]:
    """Gather identifiers from positional arguments and --input."""
    identifiers = [parse_identifier(raw) for raw in args.identifiers or []]
    if args.input:
        identifiers.extend(read_identifiers(Path(args.input)))
    return identifiers


def _trace_logger(enabled: bool) -> logging.Logger | None:
    if not enabled:
        return None
    trace = logging.getLogger(TRACE_LOGGER_NAME)
    trace.setLevel(logging.DEBUG)
    return trace


def print_summary_human(summary: BuildSummary) -> None:
    """Print summary in human-readable format."""
    print(f"root: {summary.root}")
    print(f"leaf_count: {summary.leaf_count}")
    print(f"max_proof_length: {summary.max_proof_length}")
    print(f"hash_function: {summary.hash_function}")
    if summary.saved_to:
        print(f"saved_to: {summary.saved_to}")


def print_summary_json(summary: BuildSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = args.runtime_config
    output_json = args.json

    try:
        identifiers = collect_identifiers(args)
        hasher = get_hasher(args.hash) if args.hash else config.merkle.hasher
        commitment = build_commitment(
            identifiers,
            hasher=hasher,
            trace=_trace_logger(args.trace or config.logging.trace),
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleCommitmentException as e:
        if output_json:
            print(e.to_error_model().model_dump_json(indent=2))
        else:
            print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not args.out:
        print(commitment.to_json())
        return EXIT_SUCCESS

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(commitment.to_json() + "\n", encoding="utf-8")
    logger.info(f"Wrote commitment to {out_path}")

    summary = BuildSummary(
        root=commitment.root,
        leaf_count=commitment.leaf_count,
        max_proof_length=commitment.max_proof_length,
        hash_function=commitment.hash_function,
        saved_to=str(out_path),
    )
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
