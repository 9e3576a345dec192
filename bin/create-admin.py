"""Create an admin account for the clubhouse dashboard.

Usage: python bin/create-admin.py <username>

The password is read interactively and never echoed.
"""

import asyncio
import getpass
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from clubhouse.server.settings import ClubhouseSettings
from shared.auth.password import get_hasher
from shared.auth.service import AuthService
from shared.auth.settings import AuthSettings
from shared.db import Database, SqliteAdminRepository
from shared.errors import ClubhouseError


async def main() -> None:
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} <username>")
        sys.exit(1)

    username = sys.argv[1]
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        print("Error: passwords do not match")
        sys.exit(1)

    settings = ClubhouseSettings()
    auth_settings = AuthSettings()

    db = Database(settings.database_path)
    db.connect()

    try:
        auth_service = AuthService(
            SqliteAdminRepository(db),
            password_hasher=get_hasher(auth_settings.password_hasher),
        )

        try:
            admin = await auth_service.create_admin(username, password)
        except ClubhouseError as e:
            print(f"Error: {e}")
            sys.exit(1)

        print(f"Admin created: {admin.username} (id: {admin.user_id})")
    finally:
        db.close()


if __name__ == "__main__":
    asyncio.run(main())
