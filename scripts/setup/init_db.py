# scripts/setup/init_db.py
"""
Initialize database — creates all tables and optionally seeds the first admin.
Run once before first launch, or after adding new models.
Usage:
  python scripts/setup/init_db.py
  python scripts/setup/init_db.py --admin-id <auth-user-id> --admin-name "Fleet Manager"
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from datetime import datetime
from sqlalchemy import inspect, text
from app.database import create_tables, engine, SessionLocal
from app.config import settings
from app.models.profile import Profile


def seed_admin(admin_id: str, full_name: str, email: str = None):
    """The first admin cannot be created through the API (creating profiles needs an admin)."""
    db = SessionLocal()
    try:
        profile = db.get(Profile, admin_id)
        if profile is None:
            db.add(Profile(id=admin_id, role="admin", full_name=full_name, email=email,
                           created_at=datetime.utcnow()))
            print(f"✅ Admin profile {admin_id} created")
        elif profile.role != "admin":
            profile.role = "admin"
            profile.updated_at = datetime.utcnow()
            print(f"✅ Existing profile {admin_id} promoted to admin")
        else:
            print(f"ℹ️  {admin_id} is already an admin")
        db.commit()
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create tables and seed the first admin")
    parser.add_argument("--admin-id", help="Auth provider user id of the first admin")
    parser.add_argument("--admin-name", default="Administrator")
    parser.add_argument("--admin-email")
    args = parser.parse_args()

    print("🗄️  Fleet DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.admin_id:
        seed_admin(args.admin_id, args.admin_name, args.admin_email)

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
