from __future__ import annotations

import importlib

from dotenv import load_dotenv

from classroom_attendance.database.bootstrap import apply_schema, list_tables
from classroom_attendance.database.connection import DBConfig, DatabaseConnection
from classroom_attendance.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_url(str(settings.DATABASE_URL)))

    apply_schema(conn)
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {conn.config.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
