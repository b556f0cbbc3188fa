"""
Bring the database schema up to date without dropping data.

Creates the tables declared in the models that are missing from the
database; existing tables and rows are left alone.

Run:
  python scripts/ensure_schema.py
"""

from __future__ import annotations

import sys
from pathlib import Path

from sqlalchemy import inspect

# project root on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

print("[ensure] loading app...")
from fuelbunk import create_app  # type: ignore
from fuelbunk.extensions import db  # type: ignore


def _tables() -> set[str]:
    return set(inspect(db.engine).get_table_names())


def main() -> int:
    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
        print(f"[ensure] SQLALCHEMY_DATABASE_URI = {uri}")

        before = _tables()
        print(f"[ensure] tables before: {len(before)}")

        # register every model in the metadata
        print("[ensure] importing models...")
        from fuelbunk import models  # noqa: F401

        print("[ensure] creating missing tables...")
        db.create_all()

        after = _tables()
        created = sorted(after - before)
        if created:
            print(f"[ensure] created: {', '.join(created)}")
        else:
            print("[ensure] nothing to create.")

        core = ["station", "user", "duty", "attendance", "daily_sales"]
        missing = [t for t in core if t not in after]
        if missing:
            print(f"[ensure] WARNING: still missing {', '.join(missing)}")
            return 1
        print("[ensure] done.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
