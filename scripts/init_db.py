from __future__ import annotations

import importlib

from dotenv import load_dotenv

from attendance_hub.config import get_settings_module
from attendance_hub.database.bootstrap import apply_schema, ensure_default_admin, list_tables
from attendance_hub.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_dict(dict(settings.DB_CONFIG)))

    apply_schema(conn)
    created = ensure_default_admin(conn)
    cfg = conn.config
    print(
        "OK: Applied schema.sql -> "
        f"{cfg.user}@{cfg.host}:{cfg.port}/{cfg.database} "
        f"(tables={len(list_tables(conn))}, admin_created={created})"
    )


if __name__ == "__main__":
    main()
