from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from guildtrack.adapters.sqlalchemy.unit_of_work import shutdown
from guildtrack.app import get_guild_user_record, list_guild_users, record_observation
from guildtrack.config import ConfigurationError, configure_logging, require_int_env_var
from guildtrack.domain.model import MAX_DISCRIMINATOR

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from guildtrack.domain.model import GuildUser

log = logging.getLogger(__name__)

DEFAULT_GUILD_ENV_VAR = "GUILDTRACK_GUILD_ID"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track Discord guild users")
    subparsers = parser.add_subparsers(dest="command", required=True)

    observe = subparsers.add_parser("observe", help="Record an observation of a guild user")
    _add_guild_argument(observe)
    observe.add_argument("--user-id", type=int, required=True, help="Discord user id")
    observe.add_argument("--username", type=str, help="Username, if known")
    observe.add_argument(
        "--discriminator",
        type=int,
        default=0,
        help="Numeric discriminator, 0 if unknown (default: %(default)s)",
    )
    observe.add_argument("--nickname", type=str, help="Guild nickname")

    users = subparsers.add_parser("users", help="Inspect tracked users")
    users_sub = users.add_subparsers(dest="users_command", required=True)
    users_list = users_sub.add_parser("list", help="List tracked users of a guild")
    _add_guild_argument(users_list)
    users_show = users_sub.add_parser("show", help="Show one tracked user")
    _add_guild_argument(users_show)
    users_show.add_argument("--user-id", type=int, required=True, help="Discord user id")

    args = parser.parse_args(list(argv))
    if args.guild_id is None:
        args.guild_id = require_int_env_var(DEFAULT_GUILD_ENV_VAR, hint="or pass --guild-id")
    if args.command == "observe" and not 0 <= args.discriminator <= MAX_DISCRIMINATOR:
        raise ValueError(f"Discriminator must be between 0 and {MAX_DISCRIMINATOR}")
    return args


def _add_guild_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--guild-id",
        type=int,
        help=f"Discord guild id (defaults to ${DEFAULT_GUILD_ENV_VAR})",
    )


def _format_user(user: GuildUser) -> str:
    nickname = f" ({user.nickname})" if user.nickname else ""
    return (
        f"{user.user_id} {user.username}#{user.discriminator}{nickname} "
        f"first_seen={user.first_seen.isoformat()} last_seen={user.last_seen.isoformat()}"
    )


async def _run(args: argparse.Namespace) -> int:
    try:
        if args.command == "observe":
            record = await record_observation(
                guild_id=args.guild_id,
                user_id=args.user_id,
                username=args.username,
                discriminator=args.discriminator,
                nickname=args.nickname,
            )
            if record is not None:
                log.info("Tracked %s", _format_user(record))
            return 0

        if args.command == "users" and args.users_command == "list":
            users = await list_guild_users(guild_id=args.guild_id)
            log.info("%s tracked users in guild %s", len(users), args.guild_id)
            for user in users:
                log.info("%s", _format_user(user))
            return 0

        if args.command == "users" and args.users_command == "show":
            record = await get_guild_user_record(guild_id=args.guild_id, user_id=args.user_id)
            if record is None:
                log.error("User %s is not tracked in guild %s", args.user_id, args.guild_id)
                return 1
            log.info("%s", _format_user(record))
            return 0

        raise ValueError(f"Unsupported command: {args.command}")
    finally:
        await shutdown()


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        exit_code = asyncio.run(_run(parsed_args))
    except Exception:
        log.exception("Fatal error while tracking users")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
