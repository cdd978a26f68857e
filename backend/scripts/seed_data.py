"""Seed the database: initial admin, default menu hierarchy, sample contents."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse

from app.database import SessionLocal, engine, Base
import app.models  # noqa: F401

from app.config import settings
from app.models.menu import Menu
from app.services import auth_service, menu_service, sample_content_service
from app.services.menu_tree import iter_tree


def seed(with_samples: bool = True):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if auth_service.ensure_initial_admin(db):
            print(f"Initial admin created: {settings.INITIAL_ADMIN_USERNAME}")
        else:
            print("Admin user already exists. Skipping.")

        if menu_service.seed_default_menus(db):
            print(f"Default menus created: {db.query(Menu).count()}")
        else:
            print("Menus already exist. Skipping.")

        if with_samples:
            created = sample_content_service.seed_sample_content(db)
            print(f"Sample contents created: {created}")

        print()
        print("Menu tree:")
        for depth, node in iter_tree(menu_service.get_menu_tree(db)):
            print(f"{'  ' * (depth + 1)}[{node.id}] {node.url}  {node.name}")

    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--no-samples", action="store_true", help="skip sample content creation")
    args = parser.parse_args()
    seed(with_samples=not args.no_samples)
