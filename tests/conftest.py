# tests/conftest.py
from contextlib import asynccontextmanager
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# --- Asegurar que podemos importar 'sentinelmind' desde la raíz del repo ---
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# --- Generación de claves efímeras (RSA 2048) ---
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from sentinelmind.core.config import Settings
from sentinelmind.core.passwords import PasswordHasher
from sentinelmind.db.models import Base
from sentinelmind.db.session import make_engine, make_sessionmaker
from sentinelmind.main import create_app
from sentinelmind.services.credentials import CredentialStore
from sentinelmind.services.threats import ThreatStore

TEST_SECRET = "test-secret-for-sentinelmind-unit-tests-0123456789"


def _generate_ephemeral_keys(keys_dir: Path) -> tuple[Path, Path]:
    keys_dir.mkdir(parents=True, exist_ok=True)

    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem_priv = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    (keys_dir / "jwt_private.pem").write_bytes(pem_priv)

    pem_pub = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    (keys_dir / "jwt_public.pem").write_bytes(pem_pub)

    return (keys_dir / "jwt_private.pem"), (keys_dir / "jwt_public.pem")


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings aislados: BD sqlite temporal, secreto de test, bcrypt barato."""
    return Settings(
        db_url=f"sqlite+aiosqlite:///{(tmp_path / 'test.sqlite3').as_posix()}",
        jwt_alg="HS256",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        default_username="admin",
        default_password="admin123",
        log_level="DEBUG",
    )


@pytest.fixture
def rsa_settings(settings, tmp_path) -> Settings:
    priv_path, pub_path = _generate_ephemeral_keys(tmp_path / "keys")
    return settings.model_copy(
        update={"jwt_alg": "RS256", "priv_key_path": priv_path.as_posix(), "pub_key_path": pub_path.as_posix()}
    )


@pytest.fixture
def client(settings):
    """
    Cliente de pruebas sobre una app aislada.
    Con 'with' forzamos lifespan: crea tablas, siembra admin y cierra engine al salir.
    """
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    r = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def stores(tmp_path):
    """
    Factoría de almacenes sobre un engine propio. Se usa dentro de asyncio.run:
        async with stores() as (credentials, threats): ...
    """
    @asynccontextmanager
    async def _open(create_tables: bool = True):
        engine = make_engine(f"sqlite+aiosqlite:///{(tmp_path / 'stores.sqlite3').as_posix()}")
        try:
            if create_tables:
                async with engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            factory = make_sessionmaker(engine)
            yield CredentialStore(factory), ThreatStore(factory)
        finally:
            await engine.dispose()

    return _open
