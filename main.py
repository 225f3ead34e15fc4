#!/usr/bin/env python3
"""
AuthGate -- credential login issuing signed, expiring access tokens.

Usage:
  python main.py
  python main.py serve --port 8080
  python main.py serve --host 0.0.0.0 --reload
  python main.py token user1 password123

Environment variables:
  JWT_SECRET    Signing secret, at least 32 characters. Required unless DEBUG=true.
  PORT          Listening port (default: 3000).
  DEBUG         When true, a random JWT_SECRET is generated if none is set.
"""

import argparse
import logging
import sys

import uvicorn
from pydantic import ValidationError

from auth.errors import InvalidCredentials
from auth.store import InMemoryIdentityStore
from auth.tokens import authenticate_user, create_access_token
from core.config import Settings, get_settings

logger = logging.getLogger("authgate.cli")


def _load_settings() -> Settings:
    """Resolve Settings or exit with the validation message on stderr."""
    try:
        return get_settings()
    except ValidationError as e:
        for err in e.errors():
            print(f"  [!] {err['msg']}", file=sys.stderr)
        sys.exit(2)


def serve(args: argparse.Namespace) -> None:
    settings = _load_settings()
    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Server running on port %d", port)
    uvicorn.run("asgi:app", host=host, port=port, reload=args.reload, log_level=settings.log_level.lower())


def token(args: argparse.Namespace) -> None:
    """Mint a token for a seeded identity without going through HTTP."""
    settings = _load_settings()
    store = InMemoryIdentityStore.seeded()
    try:
        identity = authenticate_user(store, args.username, args.password)
    except InvalidCredentials:
        print("  [!] Invalid credentials", file=sys.stderr)
        sys.exit(1)
    print(create_access_token(identity, settings.jwt_secret, expire_seconds=settings.token_expire_seconds))


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    parser = argparse.ArgumentParser(
        prog="authgate",
        description="Credential login issuing signed, expiring access tokens.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  JWT_SECRET=$(openssl rand -hex 32) python main.py
  DEBUG=true python main.py serve --port 8080 --reload
  DEBUG=true python main.py token user1 password123
        """,
    )
    sub = parser.add_subparsers(dest="command")

    serve_p = sub.add_parser("serve", help="Run the HTTP server (default)")
    serve_p.add_argument("--host", default=None, help="Bind address (default: HOST or 127.0.0.1)")
    serve_p.add_argument("--port", type=int, default=None, help="Listening port (default: PORT or 3000)")
    serve_p.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    serve_p.set_defaults(func=serve)

    token_p = sub.add_parser("token", help="Print an access token for a seeded identity")
    token_p.add_argument("username")
    token_p.add_argument("password")
    token_p.set_defaults(func=token)

    args = parser.parse_args()
    if args.command is None:
        args = parser.parse_args(["serve"])
    args.func(args)


if __name__ == "__main__":
    main()
