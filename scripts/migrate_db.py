from __future__ import annotations

import argparse

from todo_api.config.settings import get_settings
from todo_api.storage.postgres import PostgresTaskStorage


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create the tasks table and indexes in a PostgreSQL database."
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="PostgreSQL connection URL (default: TODO_API_DATABASE_URL).",
    )
    return parser.parse_args()


def migrate(*, database_url: str) -> None:
    PostgresTaskStorage(database_url=database_url).migrate()


def main() -> None:
    args = _parse_args()
    database_url = args.database_url or get_settings().database_url
    if not database_url:
        raise SystemExit(
            "A database URL is required: pass --database-url or set TODO_API_DATABASE_URL."
        )
    migrate(database_url=database_url)
    print("Tasks schema is up to date.")


if __name__ == "__main__":
    main()
