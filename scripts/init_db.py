"""Apply database/schema.sql and optionally create a staff login.

    python scripts/init_db.py
    python scripts/init_db.py --staff GV01 --email gv01@teacher.edu.vn --name "Cô Lan" --password secret
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.classroom_records.classroom_records.database.bootstrap import (
    apply_schema,
    ensure_staff_account,
    list_tables,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Initialize the classroom_records MySQL schema")
    parser.add_argument("--staff", help="staff account id to create/reset")
    parser.add_argument("--email")
    parser.add_argument("--name", default="")
    parser.add_argument("--password")
    args = parser.parse_args()

    load_dotenv(override=False)
    db_config = dict(load_settings().DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )

    if args.staff:
        if not args.email or not args.password:
            raise SystemExit("--staff cần kèm --email và --password")
        ensure_staff_account(
            db_config,
            account=args.staff,
            email=args.email,
            display_name=args.name or args.staff,
            password=args.password,
        )
        print(f"OK: staff account {args.staff} <{args.email}> ready")


if __name__ == "__main__":
    main()
