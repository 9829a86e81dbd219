"""Bootstrap teacher / group-leader permissions.

    python scripts/setup_permissions.py --teacher GV01 --leaders 22520001 22520002
    python scripts/setup_permissions.py --revoke 22520002
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

from src.classroom_records.classroom_records.container import build_container
from src.classroom_records.classroom_records.core.enums import Role
from src.classroom_records.classroom_records.permissions.model import PermissionGrant


def _report(label: str, result) -> bool:
    if result.ok:
        print(f"OK: {label}")
    else:
        print(f"FAIL: {label}: {result.error}")
    return result.ok


def main() -> None:
    parser = argparse.ArgumentParser(description="Set up class permissions")
    parser.add_argument("--teacher", action="append", default=[], help="teacher account (repeatable)")
    parser.add_argument("--leaders", nargs="*", default=[], help="group leader MSSVs")
    parser.add_argument("--revoke", nargs="*", default=[], help="reset accounts to default student permissions")
    args = parser.parse_args()

    load_dotenv(override=False)
    permissions = build_container(load_settings()).permission_service

    failed = 0
    for account in args.teacher:
        failed += not _report(f"teacher {account}", permissions.set_teacher(account, created_by="setup"))

    grants = [
        PermissionGrant(account, can_mark_attendance=True, can_edit_grades=False, is_group_leader=True, role=Role.GROUP_LEADER)
        for account in args.leaders
    ]
    for outcome in permissions.bulk_set(grants, created_by="setup"):
        failed += not _report(f"group leader {outcome.key}", outcome.result)

    for account in args.revoke:
        failed += not _report(f"revoke {account}", permissions.revoke(account, created_by="setup"))

    print(f"Done: {failed} failed")
    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
