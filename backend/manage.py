#!/usr/bin/env python
import os
import sys
import time

import dj_database_url
import psycopg
from psycopg import sql

from dotenv import load_dotenv


def _ensure_postgres_database() -> None:
    """
    Ensure the PostgreSQL database defined in DATABASE_URL exists.
    Skips when SQLite is explicitly requested via USE_SQLITE.
    """
    db_url = os.environ.get("DATABASE_URL")
    use_sqlite = os.environ.get("USE_SQLITE", "")
    if not db_url or use_sqlite.strip().lower() in {"1", "true", "yes", "on"}:
        return

    try:
        config = dj_database_url.parse(db_url)
    except ValueError as exc:
        print(f"Warning: unable to parse DATABASE_URL ({exc}); skipping auto-create.", file=sys.stderr)
        return

    engine = (config.get("ENGINE") or "").lower()
    if "postgresql" not in engine:
        return

    target_db = config.get("NAME")
    if not target_db:
        return

    maintenance_db = os.environ.get("PG_MAINTENANCE_DB", "postgres")
    conn_kwargs = {
        "host": config.get("HOST") or None,
        "port": config.get("PORT") or None,
        "user": config.get("USER") or None,
        "password": config.get("PASSWORD") or None,
        "dbname": maintenance_db,
    }
    conn_kwargs = {k: v for k, v in conn_kwargs.items() if v is not None}

    attempts = 0
    last_error = None
    while attempts < 5:
        try:
            with psycopg.connect(**conn_kwargs) as conn:
                conn.autocommit = True
                with conn.cursor() as cur:
                    cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
                    if cur.fetchone():
                        return
                    cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
                    print(f"Created missing database '{target_db}'.")
            return
        except psycopg.errors.DuplicateDatabase:
            return
        except psycopg.OperationalError as exc:
            last_error = exc
            attempts += 1
            time.sleep(min(1 + attempts, 5))
    if last_error:
        print(
            f"Warning: unable to ensure database '{target_db}' exists ({last_error}).",
            file=sys.stderr,
        )


def main() -> None:
    """Run administrative tasks."""
    load_dotenv()
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core.settings")

    if len(sys.argv) >= 2 and sys.argv[1] in {"migrate", "runserver"}:
        _ensure_postgres_database()

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
