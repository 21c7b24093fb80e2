# tools/create_user.py
# Uso: python tools/create_user.py <username> <password>
import asyncio
import sys
from pathlib import Path

from sentinelmind.core.config import settings
from sentinelmind.core.errors import DuplicateIdentity
from sentinelmind.core.passwords import PasswordHasher
from sentinelmind.db.models import Base
from sentinelmind.db.session import make_engine, make_sessionmaker
from sentinelmind.services.credentials import CredentialStore


async def main(username: str, password: str) -> int:
    engine = make_engine(settings.db_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        store = CredentialStore(make_sessionmaker(engine))
        hasher = PasswordHasher(settings.bcrypt_rounds)
        try:
            user = await store.create_user(username, hasher.hash(password))
        except DuplicateIdentity as e:
            print(f"error: {e.reason}", file=sys.stderr)
            return 1
        print(f"created user id={user.id} username={user.username}")
        return 0
    finally:
        await engine.dispose()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(f"usage: {Path(sys.argv[0]).name} <username> <password>", file=sys.stderr)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1], sys.argv[2])))
