"""
Allow-list Merkle CLI

Command-line interface for building and checking Merkle commitments.

Usage:
    python -m allowlist_cli build 1 2 3 6 --out commitment.json
    python -m allowlist_cli build --input ids.json --trace
    python -m allowlist_cli verify 3 --root 0x... --proof 0x... 0x...
    python -m allowlist_cli config --show
"""

__version__ = "0.1.0"
