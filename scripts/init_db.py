from __future__ import annotations

import argparse
import importlib

from dotenv import load_dotenv

from shift_attendance.config import get_settings_module
from shift_attendance.core.logging import configure_logging, get_logger
from shift_attendance.database.bootstrap import apply_schema, apply_seed, list_tables

logger = get_logger("shift_attendance.scripts.init_db")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the database schema (and optionally demo data).")
    parser.add_argument("--seed", action="store_true", help="also insert default shifts and the admin account")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    if args.seed:
        apply_seed(db_config)

    tables = list_tables(db_config)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%s)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()
