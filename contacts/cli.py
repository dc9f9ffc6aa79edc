"""Command line entry for the contacts service."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

import uvicorn

from contacts.bootstrap import ensure_admin, seed_demo_data
from contacts.core.config import settings
from contacts.core.database import database_manager
from contacts.services.container import build_container

logger = logging.getLogger(__name__)


def run_server(host: str, port: int) -> None:
    from contacts.api.main import app, configure_logging

    configure_logging()
    uvicorn.run(app, host=host, port=port)


async def _create_admin(username: str, password: str) -> None:
    container = await build_container(database_manager, settings)
    try:
        user = await ensure_admin(container, username, password)
        logger.info("Admin account ready: %s", user.username)
    finally:
        await database_manager.close()


async def _seed() -> None:
    container = await build_container(database_manager, settings)
    try:
        await seed_demo_data(container)
    finally:
        await database_manager.close()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Contacts directory service")
    subcommands = parser.add_subparsers(dest="command")

    serve = subcommands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8080)

    admin = subcommands.add_parser("create-admin", help="Create an administrator if it does not exist")
    admin.add_argument("--username", default=settings.ADMIN_USERNAME)
    admin.add_argument("--password", default=settings.ADMIN_PASSWORD)

    subcommands.add_parser("seed", help="Create the demo user and contact")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    if args.command == "create-admin":
        if settings.STORAGE_BACKEND == "memory":
            logger.warning("In-memory backend selected; the account will not outlive this command")
        asyncio.run(_create_admin(args.username, args.password))
    elif args.command == "seed":
        asyncio.run(_seed())
    elif args.command == "serve":
        run_server(args.host, args.port)
    else:
        run_server("0.0.0.0", 8080)


if __name__ == "__main__":
    main()
