#!/usr/bin/env python3
"""
Create all tables using DATABASE_URL from config.
From backend/: python scripts/create_tables.py [--admin-email you@example.com]
"""
from __future__ import annotations

import argparse
import os
import sys

_script_dir = os.path.dirname(os.path.abspath(__file__))
_backend = os.path.dirname(_script_dir)
if _backend not in sys.path:
    sys.path.insert(0, _backend)

from sqlalchemy import select

import bizdesk.models  # noqa: F401  (registers tables on Base.metadata)
from bizdesk.db.session import Base, get_db, get_engine
from bizdesk.models import Profile
from bizdesk.repositories.user_repo import upsert_user_role
from bizdesk.schemas.user import AppRole


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--admin-email", help="create (or promote) an admin profile")
    args = parser.parse_args(argv)

    engine = get_engine()
    Base.metadata.create_all(engine)
    for name in sorted(Base.metadata.tables):
        print(f"OK: {name}")

    if args.admin_email:
        with get_db() as db:
            profile = db.execute(select(Profile).where(Profile.email == args.admin_email)).scalar_one_or_none()
            if profile is None:
                profile = Profile(email=args.admin_email, name="Administrator", status="active")
                db.add(profile)
                db.flush()
            upsert_user_role(db, profile.id, AppRole.ADMIN)
        print(f"OK: admin {args.admin_email}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print(f"FAIL: {e}", file=sys.stderr)
        sys.exit(1)
