#!/usr/bin/env python3
"""
MarginBook management CLI.

Usage:
    python manage.py start                  Apply migrations and run the API server
    python manage.py migrate                Apply pending database migrations
    python manage.py status                 Show migration status and schema checks
    python manage.py create-user --email E  Create a user
    python manage.py token --email E        Print a bearer token for a user
"""

import argparse
import asyncio
import socket
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


def _is_port_free(port: int) -> bool:
    """Check if a port is available for binding."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))
        return True
    except OSError:
        return False


def cmd_start(args: argparse.Namespace) -> None:
    """Run the API server in the foreground."""
    from marginbook.config import get_settings

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port

    if not _is_port_free(port):
        print(f"Port {port} is already in use.")
        sys.exit(1)

    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "marginbook.api.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if args.reload:
        uvicorn_cmd.append("--reload")

    print(f"Starting server on {host}:{port}...")
    try:
        subprocess.run(uvicorn_cmd, cwd=str(ROOT_DIR), check=False)
    except KeyboardInterrupt:
        print("\nServer stopped.")


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    from marginbook.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(initialize_database(args.db_path))
    if not results:
        print("Database is up to date.")
    for result in results:
        status = "SUCCESS" if result.success else "FAILED"
        print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")
    if any(not r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    """Show migration status and integrity checks."""
    from marginbook.infrastructure.storage.sqlite.migrations import (
        get_migration_status,
        verify_schema_integrity,
    )

    status = asyncio.run(get_migration_status(args.db_path))
    print(f"Database exists: {status['exists']}")
    print(f"Current version: {status.get('current_version') or 'N/A'}")
    print(f"Applied migrations: {status.get('applied_migrations', [])}")
    print(f"Pending migrations: {status.get('pending_migrations', [])}")

    if status["exists"]:
        for check in asyncio.run(verify_schema_integrity(args.db_path)):
            print(f"[{check['status']}] {check['check']}")


async def _with_pool(coro_factory):
    from marginbook.infrastructure.storage.sqlite import close_pool

    try:
        return await coro_factory()
    finally:
        await close_pool()


def cmd_create_user(args: argparse.Namespace) -> None:
    """Create a user and print its id."""
    from marginbook.core.entities import User
    from marginbook.core.exceptions import DuplicateUserError
    from marginbook.infrastructure.storage.sqlite import get_user_store
    from marginbook.infrastructure.storage.sqlite.migrations import initialize_database

    async def run() -> User:
        await initialize_database()
        store = await get_user_store()
        return await store.create_user(User(email=args.email))

    try:
        user = asyncio.run(_with_pool(run))
    except DuplicateUserError as e:
        print(e.message)
        sys.exit(1)
    print(f"Created user {user.email} ({user.id})")


def cmd_token(args: argparse.Namespace) -> None:
    """Print a bearer token for an existing user."""
    from marginbook.api.security import create_access_token
    from marginbook.infrastructure.storage.sqlite import get_user_store

    async def run():
        store = await get_user_store()
        return await store.get_user_by_email(args.email)

    user = asyncio.run(_with_pool(run))
    if user is None:
        print(f"No user with email {args.email}. Use 'create-user' first.")
        sys.exit(1)
    print(create_access_token(user.id, user.email, expires_minutes=args.expires_minutes))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="MarginBook management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # start
    p_start = sub.add_parser("start", help="Run the API server")
    p_start.add_argument("--host", default=None, help="Bind host (default from settings)")
    p_start.add_argument("--port", type=int, default=None, help="Bind port (default from settings)")
    p_start.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_start.set_defaults(func=cmd_start)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db-path", type=Path, default=None, help="Database path")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.add_argument("--db-path", type=Path, default=None, help="Database path")
    p_status.set_defaults(func=cmd_status)

    # create-user
    p_user = sub.add_parser("create-user", help="Create a user")
    p_user.add_argument("--email", required=True, help="User email")
    p_user.set_defaults(func=cmd_create_user)

    # token
    p_token = sub.add_parser("token", help="Print a bearer token for a user")
    p_token.add_argument("--email", required=True, help="User email")
    p_token.add_argument("--expires-minutes", type=int, default=None, help="Token lifetime")
    p_token.set_defaults(func=cmd_token)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
