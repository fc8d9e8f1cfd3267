"""Shared logging helpers for guildtrack."""

from __future__ import annotations

import logging

from .env import env_flag

SQL_ECHO_ENV_VAR = "GUILDTRACK_SQL_ECHO"
SQL_LOGGER_NAME = "sqlalchemy.engine"


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    sql_echo: bool | None = None,
) -> None:
    """Initialise the root logger once with sensible defaults.

    Emitted SQL goes through the ``sqlalchemy.engine`` logger rather than the
    engine's own ``echo`` handler, so it shares the format below. It is shown when
    ``sql_echo`` is true, or when ``GUILDTRACK_SQL_ECHO`` is set and ``sql_echo``
    is left as ``None``.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if sql_echo is None:
        sql_echo = env_flag(SQL_ECHO_ENV_VAR)
    logging.getLogger(SQL_LOGGER_NAME).setLevel(logging.INFO if sql_echo else logging.WARNING)
