"""
token_lifecycle.admin

Operator tooling:

- main: the `token-lifecycle` console script (issue / validate /
  refresh / logout against the Redis liveness store configured in env).
"""

from __future__ import annotations

from .cli import main

__all__ = ["main"]
