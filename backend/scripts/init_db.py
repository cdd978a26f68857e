"""Create the CMS tables (users, menus, contents, file_uploads) and the upload folders."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse

from app.config import settings
from app.database import engine, Base
import app.models  # noqa: F401
from app.services.upload_service import FILE_CATEGORIES


def init_db(reset: bool = False):
    if reset:
        print(f"Dropping tables on {settings.DATABASE_URL} ...")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    print(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")

    for category in sorted(FILE_CATEGORIES):
        os.makedirs(os.path.join(settings.UPLOAD_DIR, category), exist_ok=True)
    print(f"Upload folders ready under {settings.UPLOAD_DIR}/")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    args = parser.parse_args()
    init_db(reset=args.reset)
