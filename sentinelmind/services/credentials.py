# sentinelmind/services/credentials.py
import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from sentinelmind.core.errors import DuplicateIdentity, StorageUnavailable
from sentinelmind.core.passwords import PasswordHasher
from sentinelmind.db.models import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Usuarios (username + hash). Solo alta y consulta; no hay update/delete."""

    def __init__(self, session_factory: async_sessionmaker):
        self._sessions = session_factory

    async def find_by_username(self, username: str) -> User | None:
        try:
            async with self._sessions() as s:
                res = await s.execute(select(User).where(User.username == username))
                return res.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"users lookup failed: {e.__class__.__name__}") from e

    async def count(self) -> int:
        try:
            async with self._sessions() as s:
                return (await s.execute(select(func.count(User.id)))).scalar_one()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"users count failed: {e.__class__.__name__}") from e

    async def create_user(self, username: str, password_hash: str) -> User:
        if await self.find_by_username(username) is not None:
            raise DuplicateIdentity(f"username {username!r} already exists")

        user = User(username=username, password_hash=password_hash)
        try:
            async with self._sessions() as s:
                s.add(user)
                await s.commit()
        except IntegrityError as e:
            # carrera con otra alta del mismo username
            raise DuplicateIdentity(f"username {username!r} already exists") from e
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"users insert failed: {e.__class__.__name__}") from e

        logger.info("user created: id=%s username=%s", user.id, user.username)
        return user

    async def seed_default_user(self, username: str, password: str, hasher: PasswordHasher) -> bool:
        """
        Crea la cuenta por defecto si no existe ningún usuario.
        Idempotente: devuelve False (sin error) si ya hay usuarios.
        """
        if await self.count() > 0:
            logger.debug("seed skipped: users table not empty")
            return False
        await self.create_user(username, hasher.hash(password))
        logger.info("seed account provisioned: %s", username)
        return True
