# src/token_lifecycle/admin/cli.py

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Sequence

from ..domain.entities import SessionInput
from ..domain.exceptions import StoreUnavailableError
from ..env import redis_url_from_env, token_settings_from_env
from ..integrations.common.auth_factory import (
    AuthDependencies,
    create_auth_dependencies_from_redis,
)
from ..logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="token-lifecycle",
        description="Issue, inspect and revoke access/refresh token pairs",
    )
    parser.add_argument(
        "--redis-url",
        help="Liveness store URL (default: env REDIS_URL)",
    )
    parser.add_argument(
        "--key-prefix",
        default="token:",
        help="Prefix for liveness record keys.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    issue = sub.add_parser("issue", help="Issue a new token pair for a user.")
    issue.add_argument("--user-id", required=True)

    validate = sub.add_parser("validate", help="Validate a token against the store.")
    validate.add_argument("--token", required=True)
    validate.add_argument(
        "--refresh",
        action="store_true",
        help="Treat the token as a refresh token (default: access token).",
    )

    refresh = sub.add_parser("refresh", help="Rotate a refresh token into a new pair.")
    refresh.add_argument("--token", required=True)

    logout = sub.add_parser("logout", help="Revoke a session's tokens.")
    logout.add_argument("--access-token", "-A")
    logout.add_argument("--refresh-token", "-R")

    sub.add_parser("ping", help="Check that the liveness store answers.")

    return parser.parse_args(args=argv)


def _build_auth(args: argparse.Namespace) -> AuthDependencies:
    return create_auth_dependencies_from_redis(
        settings=token_settings_from_env(),
        redis_url=args.redis_url or redis_url_from_env(),
        key_prefix=args.key_prefix,
    )


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    auth = _build_auth(args)
    tokens = auth.tokens
    try:
        if args.command == "issue":
            pair = await tokens.issue(args.user_id)
            return {
                "access_token": pair.access_token,
                "refresh_token": pair.refresh_token,
            }

        if args.command == "validate":
            if args.refresh:
                detail = await tokens.validate_refresh(args.token)
            else:
                detail = await tokens.validate_access(args.token)
            return {"token_id": detail.token_id, "user_id": detail.user_id}

        if args.command == "refresh":
            pair = await tokens.refresh(args.token)
            return {
                "access_token": pair.access_token,
                "refresh_token": pair.refresh_token,
            }

        if args.command == "ping":
            if not await tokens.ping():
                raise StoreUnavailableError("Liveness store did not answer")
            return {"store": "reachable"}

        detail = await tokens.logout(
            SessionInput(access_token=args.access_token, refresh_token=args.refresh_token)
        )
        return {"logout": True, "user_id": detail.user_id}
    finally:
        await tokens.close()


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    configure_logging(use_stderr=True)

    try:
        summary = asyncio.run(_run(args))
        json.dump({"ok": True, **summary}, sys.stdout, indent=2)
        sys.stdout.write("\n")
    except Exception as exc:  # noqa: BLE001
        json.dump(
            {"ok": False, "error": str(exc), "kind": type(exc).__name__},
            sys.stdout,
            indent=2,
        )
        sys.stdout.write("\n")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
