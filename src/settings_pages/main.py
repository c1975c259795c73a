"""Command line entry point.

Subcommands:
    serve   Run the development server (default).
    token   Print a bearer token for calling the API.
"""

import argparse
from datetime import timedelta
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv

from .api.auth import create_access_token
from .config import PROJECT_ROOT, Settings, get_settings


def _serve(settings: Settings, args: argparse.Namespace) -> int:
    """Run the server."""
    host = args.host or settings.host
    port = args.port or settings.port

    print(f"Starting settings-pages API on {host}:{port}")
    reload_dirs = [str(PROJECT_ROOT / "src")] if settings.debug else None
    uvicorn.run(
        "settings_pages.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=settings.debug,
        reload_dirs=reload_dirs,
    )
    return 0


def _token(settings: Settings, args: argparse.Namespace) -> int:
    """Print a signed token granting the requested capabilities."""
    minutes = args.minutes or settings.access_token_expire_minutes
    token = create_access_token(
        args.subject,
        args.capability or ["manage_options"],
        settings.secret_key,
        name=args.name or args.subject,
        expires_delta=timedelta(minutes=minutes),
    )
    print(token)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="settings-pages",
        description="Settings pages API server",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=None, help="Bind address (default from config)")
    serve.add_argument("--port", type=int, default=None, help="Port (default from config)")

    token = subparsers.add_parser("token", help="Print a bearer token")
    token.add_argument("subject", help="Token subject, e.g. a user name")
    token.add_argument(
        "--capability",
        "-c",
        action="append",
        help="Capability to grant; repeatable (default: manage_options)",
    )
    token.add_argument("--name", default=None, help="Display name (default: subject)")
    token.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Lifetime in minutes (default from config)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the selected command."""
    load_dotenv(PROJECT_ROOT / ".env", override=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    if args.command == "token":
        return _token(settings, args)
    if args.command is None:
        args = parser.parse_args(["serve"])
    return _serve(settings, args)


if __name__ == "__main__":
    raise SystemExit(main())
