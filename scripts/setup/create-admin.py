#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Create the first admin account, or promote an existing user to admin

Usage: python scripts/setup/create-admin.py [email] [password]
(defaults to BOOTSTRAP_ADMIN_EMAIL / BOOTSTRAP_ADMIN_PASSWORD)
"""
import asyncio
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

from faris.core.config import settings
from faris.core.security import hash_password
from faris.crud import user as user_crud
from faris.models.base import get_async_session_maker, get_engine
from faris.models.user import ROLE_ADMIN, STATUS_ACTIVE


async def create_admin(email: str, password: str):
    try:
        await _create_or_promote(email, password)
    finally:
        await get_engine().dispose()


async def _create_or_promote(email: str, password: str):
    async with get_async_session_maker()() as session:
        user = await user_crud.get_user_by_email(session, email)
        if user:
            user.role = ROLE_ADMIN
            user.status = STATUS_ACTIVE
            await session.commit()
            print(f"[OK] Promoted existing user to admin: id={user.id}, email={user.email}")
            return

        user = await user_crud.create_user(
            session,
            username="admin",
            email=email,
            password_hash=hash_password(password),
            role=ROLE_ADMIN,
            status=STATUS_ACTIVE,
        )
        print(f"[OK] Admin created: id={user.id}, email={user.email}")


if __name__ == "__main__":
    email = sys.argv[1] if len(sys.argv) > 1 else settings.bootstrap_admin_email
    password = sys.argv[2] if len(sys.argv) > 2 else settings.bootstrap_admin_password
    if not email or not password:
        print("[ERROR] email/password missing (arguments or BOOTSTRAP_ADMIN_* in .env)")
        exit(1)
    if len(password) < 6:
        print("[ERROR] password must be at least 6 characters")
        exit(1)
    try:
        asyncio.run(create_admin(email, password))
    except Exception as e:
        print(f"\n[ERROR] {e.__class__.__name__}: {str(e)}")
        exit(1)
