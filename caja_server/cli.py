"""Command-line entry point for operating the Caja API."""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from .models import Role


async def _create_user(email: str, password: str, role: str) -> str:
    from .database import AsyncSessionLocal, create_tables
    from .services import users as users_service

    await create_tables()
    async with AsyncSessionLocal() as session:
        user = await users_service.create_user(session, email, password, role)
        return user.id


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments and dispatch to the requested command."""

    parser = argparse.ArgumentParser(
        prog="caja-server",
        description="Run the Proyecto Caja API or one of its maintenance helpers.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")

    sub.add_parser("init-db", help="Create the database tables and exit.")

    create = sub.add_parser("create-user", help="Create a user (e.g. the first ADMIN).")
    create.add_argument("email")
    create.add_argument("password")
    create.add_argument("--role", choices=[r.value for r in Role], default=Role.USER.value)

    args = parser.parse_args(None if argv is None else list(argv))

    if args.command == "serve":
        import uvicorn

        from .config import get_settings

        uvicorn.run(
            "caja_server.main:app",
            host=args.host,
            port=args.port or get_settings().port,
            reload=args.reload,
        )
        return 0

    if args.command == "init-db":
        from .database import create_tables

        asyncio.run(create_tables())
        print("Database tables created.")
        return 0

    from .errors import AppError

    try:
        user_id = asyncio.run(_create_user(args.email, args.password, args.role))
    except AppError as exc:
        parser.exit(1, f"caja-server: {exc.message}\n")
    print(f"Created {args.role} user {args.email.strip().lower()} ({user_id})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
