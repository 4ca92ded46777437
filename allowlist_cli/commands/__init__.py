"""
CLI command modules.
"""

from allowlist_cli.commands import build, verify

__all__ = ["build", "verify"]
