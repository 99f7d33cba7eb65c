#!/usr/bin/env python3
"""
ShuttleStock management CLI.

Usage:
    python manage.py serve         Apply migrations and start the API server
    python manage.py migrate       Apply pending migrations
    python manage.py status        Show schema version and integrity checks
    python manage.py add-group     Create a group
    python manage.py add-member    Attach a user to a group
    python manage.py seed-type     Add a system-owned shuttlecock type
"""

import argparse
import asyncio
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn; the app lifespan applies migrations."""
    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "shuttlestock.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if args.reload:
        uvicorn_cmd.append("--reload")

    print(f"Starting server on {args.host}:{args.port}...")
    try:
        sys.exit(subprocess.call(uvicorn_cmd, cwd=str(ROOT_DIR)))
    except KeyboardInterrupt:
        print("\nServer stopped.")


async def _migrate() -> bool:
    from shuttlestock.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    results = await run_migrations()
    if not results:
        print("Database is up to date.")
    for r in results:
        state = "ok" if r.success else f"FAILED ({r.error})"
        print(f"  v{r.version} {r.name}: {state} [{r.execution_time_ms}ms]")
    return all(r.success for r in results)


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    if not asyncio.run(_migrate()):
        sys.exit(1)


async def _status() -> bool:
    from shuttlestock.infrastructure.storage.sqlite.migrations.migrator import (
        get_migration_status,
        verify_schema_integrity,
    )

    status = await get_migration_status()
    if not status["exists"]:
        print("Database does not exist yet. Run 'migrate' or 'serve'.")
        return False

    print(f"Schema version: {status['current_version']}")
    print(f"Applied:        {', '.join(status['applied_migrations']) or '-'}")
    print(f"Pending:        {', '.join(status['pending_migrations']) or '-'}")

    healthy = True
    for check in await verify_schema_integrity():
        print(f"  {check['check']}: {check['status']}")
        healthy = healthy and check["status"] == "PASS"
    return healthy


def cmd_status(args: argparse.Namespace) -> None:
    """Show schema status."""
    if not asyncio.run(_status()):
        sys.exit(1)


async def _with_store(action):
    from shuttlestock.infrastructure.storage.sqlite import close_database, get_identity_store
    from shuttlestock.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    await run_migrations(create_backup_before=False)
    try:
        return await action(await get_identity_store())
    finally:
        await close_database()


def cmd_add_group(args: argparse.Namespace) -> None:
    """Create a group."""

    async def action(store):
        return await store.create_group(args.name, group_id=args.id)

    group_id = asyncio.run(_with_store(action))
    print(f"Group created: {group_id}")


def cmd_add_member(args: argparse.Namespace) -> None:
    """Attach a user to a group."""

    async def action(store):
        await store.assign_user(args.user_id, args.group_id)

    asyncio.run(_with_store(action))
    print(f"User {args.user_id} now belongs to group {args.group_id}.")


def cmd_seed_type(args: argparse.Namespace) -> None:
    """Add a type any member may claim by editing it."""
    from shuttlestock.core.entities.inventory import ShuttlecockType
    from shuttlestock.infrastructure.storage.sqlite import get_type_store

    async def action(_store):
        type_store = await get_type_store()
        return await type_store.create_type(
            ShuttlecockType(group_id=args.group_id, brand=args.brand, name=args.name)
        )

    shuttle_type = asyncio.run(_with_store(action))
    print(f"Type created: {shuttle_type.id} ({shuttle_type.label})")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="ShuttleStock management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show schema status")
    p_status.set_defaults(func=cmd_status)

    # add-group
    p_group = sub.add_parser("add-group", help="Create a group")
    p_group.add_argument("name", help="Group name")
    p_group.add_argument("--id", default=None, help="Explicit group ID (default: random UUID)")
    p_group.set_defaults(func=cmd_add_group)

    # add-member
    p_member = sub.add_parser("add-member", help="Attach a user to a group")
    p_member.add_argument("user_id", help="User ID issued by the identity provider")
    p_member.add_argument("group_id", help="Group ID")
    p_member.set_defaults(func=cmd_add_member)

    # seed-type
    p_type = sub.add_parser("seed-type", help="Add a system-owned shuttlecock type")
    p_type.add_argument("group_id", help="Group ID")
    p_type.add_argument("brand", help="Brand")
    p_type.add_argument("name", help="Model name")
    p_type.set_defaults(func=cmd_seed_type)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
