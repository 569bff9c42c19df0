#!/usr/bin/env python3
"""
CMS User Creator
Creates a login user (or resets the password of an existing one) in the
configured database. Passwords are stored as bcrypt hashes.

Usage:
    python create_user.py                # interactive
    python create_user.py --hash-only    # print a hash without touching the database
"""
import asyncio
import getpass
import sys

from sqlalchemy import select

from portfolio_api.config import settings
from portfolio_api.database import AsyncSessionLocal, close_db
from portfolio_api.models import User
from portfolio_api.utils.auth import MAX_PASSWORD_BYTES, hash_password, password_too_long


def prompt_password() -> str:
    """Read a password twice without echoing it. Returns "" on mismatch."""
    password = getpass.getpass("Enter password: ")
    if not password:
        print("\n❌ Error: Password cannot be empty")
        return ""
    if password_too_long(password):
        print(f"\n❌ Error: Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return ""

    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("\n❌ Error: Passwords do not match")
        return ""

    return password


async def save_user(username: str, email: str, password_hash: str) -> User:
    """Insert the user, or overwrite email and hash when the username exists."""
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()

        if user is None:
            user = User(username=username, email=email, password_hash=password_hash)
            session.add(user)
        else:
            user.email = email or user.email
            user.password_hash = password_hash

        await session.commit()
        await session.refresh(user)
        return user


def main():
    print("=" * 60)
    print("CMS User Creator")
    print("=" * 60)
    print()

    if "--hash-only" in sys.argv:
        password = prompt_password()
        if password:
            print(f"\n✅ bcrypt hash:\n{hash_password(password)}")
        return

    if not settings.database_url:
        print("❌ Error: no database configured (set DATABASE_URL or DB_HOST/DB_NAME/...)")
        return

    username = input("Username: ").strip()
    if not username:
        print("\n❌ Error: Username cannot be empty")
        return
    email = input("Email: ").strip()

    password = prompt_password()
    if not password:
        return

    print("\n⏳ Hashing password and saving user...")

    async def run():
        try:
            return await save_user(username, email, hash_password(password))
        finally:
            await close_db()

    user = asyncio.run(run())
    print(f"\n✅ Saved user '{user.username}' (id {user.id})")


if __name__ == "__main__":
    main()
