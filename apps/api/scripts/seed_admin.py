"""
Seed Admin Account

Creates an admin account for the admissions back-office.
Without arguments the account from ADMIN_EMAIL / ADMIN_PASSWORD /
ADMIN_FULL_NAME is created (the same one the API seeds on startup).

Usage:
    cd apps/api
    python scripts/seed_admin.py
    python scripts/seed_admin.py --email head@school.org --name "Head Teacher"
"""

import argparse
import asyncio
import getpass

from admissions_api.core.config import settings
from admissions_api.core.database import async_session_maker, close_db, init_db
from admissions_api.core.security import hash_password
from admissions_api.modules.auth.service import MIN_PASSWORD_LENGTH, ensure_default_admin
from admissions_api.modules.users.repository import UserRepository


async def seed_admin(email: str | None, name: str | None) -> None:
    """Create the admin account if it doesn't exist."""
    await init_db()

    try:
        async with async_session_maker() as db:
            if email is None:
                account = await ensure_default_admin(db)
                print(f"Default admin ready: {account.email} (ID: {account.id})")
                return

            existing = await UserRepository.get_by_email(db, email)
            if existing:
                print(f"Admin already exists: {existing.email}")
                print(f"  ID: {existing.id}")
                return

            password = getpass.getpass("Password: ")
            if len(password) < MIN_PASSWORD_LENGTH:
                print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
                return

            account = await UserRepository.create(
                db,
                full_name=name or email,
                email=email,
                password_hash=hash_password(password),
            )

            print("Admin created successfully!")
            print(f"  Email: {account.email}")
            print(f"  Name: {account.full_name}")
            print(f"  ID: {account.id}")
    finally:
        await close_db()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--email", help="Admin email (default: ADMIN_EMAIL)")
    parser.add_argument("--name", help="Admin full name")
    args = parser.parse_args()

    print(f"Database: {settings.database_url}")
    asyncio.run(seed_admin(args.email, args.name))


if __name__ == "__main__":
    main()
