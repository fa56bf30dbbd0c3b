"""Initialize the database - creates all tables, seeds the super admin and imports legacy content."""
import argparse
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from studio_cms.config import settings
from studio_cms.database import engine, Base, SessionLocal
import studio_cms.models  # noqa: F401 - registers all models
from studio_cms.services import bootstrap_service


def init_db(content_path: str = ""):
    print("Creating all database tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if bootstrap_service.seed_super_admin(db):
            print(f"Default super admin created: {settings.DEFAULT_ADMIN_EMAIL}")
            print("Change this password after first login!")
        else:
            print("Super admin already exists. Skipping.")

        migrated = bootstrap_service.import_content_file(db, content_path)
        if migrated:
            print(f"Migrated content keys: {', '.join(migrated)}")
        else:
            print("No content to migrate.")
    finally:
        db.close()
    print("Database initialized successfully.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--content", default=settings.CONTENT_SEED_PATH, help="legacy content.json path")
    args = parser.parse_args()
    init_db(args.content)
