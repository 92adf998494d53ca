"""Operator commands.

Usage:
    python -m restaurant_api.cli create-admin --username owner --email owner@example.com
    python -m restaurant_api.cli send-report --period monthly --date 2024-03
"""

import argparse
import asyncio
import getpass
import sys

from restaurant_api.database import async_session_maker
from restaurant_api.logger import configure_logging, get_logger
from restaurant_api.schemas.auth import AdminCreate
from restaurant_api.services.admins import create_admin
from restaurant_api.services.errors import ServiceError
from restaurant_api.services.report_dispatcher import auto_send

logger = get_logger(__name__)


async def _create_admin(username: str, password: str, email: str | None) -> int:
    async with async_session_maker() as session:
        admin = await create_admin(session, AdminCreate(username=username, password=password, email=email))
        await session.commit()
        return admin.id


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="restaurant_api.cli")
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create-admin", help="Bootstrap an admin account")
    create.add_argument("--username", required=True)
    create.add_argument("--email")
    create.add_argument("--password", help="Prompted for when omitted")

    send = commands.add_parser("send-report", help="Run one automatic report send now")
    send.add_argument("--period", required=True, choices=["daily", "monthly", "yearly"])
    send.add_argument("--date", required=True, help="YYYY-MM-DD, YYYY-MM or YYYY")

    args = parser.parse_args(argv)
    configure_logging()

    try:
        if args.command == "create-admin":
            password = args.password or getpass.getpass("Password: ")
            admin_id = asyncio.run(_create_admin(args.username, password, args.email))
            print(f"Admin '{args.username}' created with id {admin_id}")
        else:
            sent = asyncio.run(auto_send(async_session_maker, args.period, args.date))
            print("Report sent" if sent else "No receivers opted in; nothing sent")
    except (ServiceError, ValueError) as exc:
        # pydantic's ValidationError subclasses ValueError
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
