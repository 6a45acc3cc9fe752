"""
CLI command modules.
"""

from auditpath_cli.commands import build, prove, verify

__all__ = ["build", "prove", "verify"]
