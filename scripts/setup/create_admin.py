# scripts/setup/create_admin.py
"""
Create a back-office user from the command line.
Usage: python scripts/setup/create_admin.py --username admin --password secret [--role admin]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.config import settings
from app.database import Database
from app.models.user import User
from app.services.auth_service import hash_password


def main():
    parser = argparse.ArgumentParser(description="Create a back-office user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--role", default="admin")
    args = parser.parse_args()

    db = Database(settings.DATABASE_URL)
    db.create_tables()
    session = db.SessionLocal()
    try:
        if session.query(User).filter(User.username == args.username).first():
            print(f"❌ User '{args.username}' already exists")
            sys.exit(1)
        session.add(User(username=args.username, hashed_password=hash_password(args.password), role=args.role))
        session.commit()
        print(f"✅ Created user '{args.username}' (role={args.role})")
    finally:
        session.close()


if __name__ == "__main__":
    main()
