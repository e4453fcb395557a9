#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Write a local .env template for the Faris backend"""
import os
from pathlib import Path

project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# secrets are placeholders: fill them in by hand
env_content = """# Database
DATABASE_URL=postgresql+asyncpg://<DB_USER>:<DB_PASSWORD>@localhost:5432/faris_db

# Security
SECRET_KEY=<SECRET_KEY>
ALGORITHM=HS256
ACCESS_TOKEN_EXPIRE_MINUTES=1440

# CORS
ALLOWED_ORIGINS=http://localhost:3000,http://localhost:9002

# Environment (development shows detailed error messages)
ENVIRONMENT=development

# AI tutor
GEMINI_API_KEY=<GEMINI_API_KEY>
GEMINI_MODEL=gemini-2.5-flash

# Uploaded files
STORAGE_DIR=./storage
STORAGE_BASE_URL=/files

# Live exam/practice sessions
SESSION_IDLE_MINUTES=120

# First admin account (scripts/setup/create-admin.py)
BOOTSTRAP_ADMIN_EMAIL=<ADMIN_EMAIL>
BOOTSTRAP_ADMIN_PASSWORD=<ADMIN_PASSWORD>
"""


def create_env_file():
    """Create .env (UTF-8 without BOM, LF line endings), backing up an existing one"""
    print(f"[INFO] Creating .env: {env_file}")

    if env_file.exists():
        backup_file = project_root / ".env.backup"
        print(f"[INFO] Backing up existing .env: {backup_file}")
        with open(env_file, 'r', encoding='utf-8') as f:
            backup_content = f.read()
        with open(backup_file, 'w', encoding='utf-8', newline='\n') as f:
            f.write(backup_content)

    with open(env_file, 'w', encoding='utf-8', newline='\n') as f:
        f.write(env_content)

    print(f"[OK] .env created ({env_file.stat().st_size} bytes)")

    if os.name != 'nt':
        os.chmod(env_file, 0o600)
        print("[INFO] File mode set to 600")


if __name__ == "__main__":
    try:
        create_env_file()
    except Exception as e:
        print(f"\n[ERROR] {e.__class__.__name__}: {str(e)}")
        import traceback
        traceback.print_exc()
        exit(1)
