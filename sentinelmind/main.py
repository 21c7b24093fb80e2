# sentinelmind/main.py
import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from sentinelmind.api.issuer import router as issuer_router
from sentinelmind.api.verifier import router as verifier_router
from sentinelmind.api.threats import router as threats_router

from sentinelmind.core.config import Settings, settings as default_settings
from sentinelmind.core.crypto import TokenSigner
from sentinelmind.core.errors import register_exception_handlers
from sentinelmind.core.passwords import PasswordHasher
from sentinelmind.db.session import make_engine, make_sessionmaker
from sentinelmind.db.models import Base
from sentinelmind.services.credentials import CredentialStore
from sentinelmind.services.sessions import SessionIssuer, SessionVerifier
from sentinelmind.services.threats import ThreatStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None, analysis_provider=None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    engine = make_engine(settings.db_url)
    sessions = make_sessionmaker(engine)
    hasher = PasswordHasher(settings.bcrypt_rounds)
    signer = TokenSigner.from_settings(settings)
    credentials = CredentialStore(sessions)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # === STARTUP ===
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await credentials.seed_default_user(settings.default_username, settings.default_password, hasher)
        logger.info("SentinelMind API ready (db=%s, alg=%s)", engine.url.render_as_string(), signer.algorithm)
        yield
        # === SHUTDOWN ===
        await engine.dispose()

    app = FastAPI(title="SentinelMind Shield API", lifespan=lifespan)

    app.state.settings = settings
    app.state.credentials = credentials
    app.state.threats = ThreatStore(sessions)
    app.state.issuer = SessionIssuer(
        credentials, hasher, signer, ttl=timedelta(minutes=settings.token_ttl_minutes)
    )
    app.state.verifier = SessionVerifier(signer)
    app.state.analysis_provider = analysis_provider

    register_exception_handlers(app)

    app.include_router(issuer_router, prefix="/api/auth", tags=["auth"])
    app.include_router(verifier_router, prefix="/api/auth", tags=["auth"])
    app.include_router(threats_router, prefix="/api", tags=["threats"])

    @app.get("/")
    def root():
        return {"ok": True}

    return app


app = create_app()
