"""
CLI Verify Command

Check an identifier's inclusion proof against a Merkle root, offline.
Root and proof come either from flags or from a commitment JSON file
written by the build command.

Usage:
    allowlist-merkle verify 3 --root 0x... --proof 0x... 0x...
    allowlist-merkle verify 3 --commitment commitment.json [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.config import RuntimeConfig
from core.crypto.hashing import from_hex, get_hasher, to_hex
from core.merkle.canonical import encode_identifier, parse_identifier
from core.merkle.proofs import process_proof
from core.schemas.commitment import MerkleCommitment
from core.schemas.errors import MerkleCommitmentException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    identifier: str = ""
    root: str = ""
    computed_root: str = ""
    proof_length: int = 0
    hash_function: str = ""
    ok: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def load_commitment(path: Path) -> MerkleCommitment:
    """Load a commitment JSON file produced by the build command."""
    if not path.is_file():
        raise FileNotFoundError(f"Commitment file not found: {path}")
    return MerkleCommitment.model_validate_json(path.read_text(encoding="utf-8"))


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"identifier: {summary.identifier}")
    print(f"root: {summary.root}")
    print(f"computed_root: {summary.computed_root}")
    print(f"proof_length: {summary.proof_length}")
    print(f"ok: {str(summary.ok).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err}")


def print_summary_json(summary: VerifySummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 valid, 1 error, 2 invalid proof)
    """
    config: RuntimeConfig = args.runtime_config
    output_json = args.json

    try:
        identifier = parse_identifier(args.identifier)
        hash_name = args.hash or config.merkle.hash_function

        if args.commitment:
            commitment = load_commitment(Path(args.commitment))
            root_hex = commitment.root
            if not args.hash:
                hash_name = commitment.hash_function
            proof_hex = commitment.proofs.get(str(identifier))
            if proof_hex is None:
                summary = VerifySummary(
                    identifier=str(identifier),
                    root=root_hex,
                    hash_function=hash_name,
                    errors=["identifier is not part of the commitment"],
                )
                _print(summary, output_json)
                return EXIT_VERIFICATION_FAILED
        else:
            if not args.root:
                print("Error: --root is required without --commitment", file=sys.stderr)
                return EXIT_RUNTIME_ERROR
            root_hex = args.root.lower()
            proof_hex = list(args.proof or [])

        hasher = get_hasher(hash_name)
        root = from_hex(root_hex)
        proof = [from_hex(node) for node in proof_hex]
        computed = process_proof(encode_identifier(identifier), proof, hasher)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleCommitmentException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        identifier=str(identifier),
        root=root_hex,
        computed_root=to_hex(computed),
        proof_length=len(proof),
        hash_function=hash_name,
        ok=computed == root,
    )
    if not summary.ok:
        summary.errors.append("proof does not reproduce the root")

    _print(summary, output_json)

    if summary.ok:
        logger.info("Proof verified")
        return EXIT_SUCCESS
    logger.warning("Proof verification failed")
    return EXIT_VERIFICATION_FAILED


def _print(summary: VerifySummary, output_json: bool) -> None:
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)
