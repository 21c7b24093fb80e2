# sentinelmind/services/sessions.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jwt import ExpiredSignatureError, InvalidTokenError

from sentinelmind.core.crypto import TokenSigner
from sentinelmind.core.errors import ExpiredToken, InvalidCredentials, InvalidToken, MissingToken
from sentinelmind.core.passwords import PasswordHasher
from sentinelmind.services.credentials import CredentialStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: int
    username: str


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime
    identity: Identity


class SessionIssuer:
    def __init__(
        self,
        credentials: CredentialStore,
        hasher: PasswordHasher,
        signer: TokenSigner,
        ttl: timedelta = timedelta(hours=1),
    ):
        self._credentials = credentials
        self._hasher = hasher
        self._signer = signer
        self._ttl = ttl

    async def login(self, username: str, password: str, now: datetime | None = None) -> IssuedToken:
        user = await self._credentials.find_by_username(username)
        if user is None:
            self._hasher.dummy_verify(password)
            logger.info("login failed for %r", username)
            raise InvalidCredentials()
        if not self._hasher.verify(password, user.password_hash):
            logger.info("login failed for %r", username)
            raise InvalidCredentials()

        identity = Identity(user_id=user.id, username=user.username)
        issued = self.issue(identity, now=now)
        logger.info("login ok: %s (exp %s)", identity.username, issued.expires_at.isoformat())
        return issued

    def issue(self, identity: Identity, now: datetime | None = None) -> IssuedToken:
        now = now or datetime.now(timezone.utc)
        exp = now + self._ttl
        payload = {
            "sub": identity.username,
            "uid": identity.user_id,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return IssuedToken(token=self._signer.sign(payload), expires_at=exp, identity=identity)


class SessionVerifier:
    """
    Valida firma y expiración. No consulta la tabla users: un token emitido
    sigue siendo válido hasta su exp aunque el usuario cambie (sin revocación).
    """

    def __init__(self, signer: TokenSigner):
        self._signer = signer

    def verify(self, token: str | None) -> Identity:
        return self.inspect(token)[0]

    def inspect(self, token: str | None) -> tuple[Identity, datetime]:
        if not token or not token.strip():
            raise MissingToken()
        try:
            claims = self._signer.decode(token.strip())
        except ExpiredSignatureError as e:
            raise ExpiredToken() from e
        except InvalidTokenError as e:
            logger.debug("token decode failed: %s", e)
            raise InvalidToken() from e

        uid = claims.get("uid")
        sub = claims.get("sub")
        # bool es subclase de int en Python
        if not isinstance(uid, int) or isinstance(uid, bool) or not isinstance(sub, str) or not sub:
            logger.debug("token payload malformed: %r", claims)
            raise InvalidToken()
        expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
        return Identity(user_id=uid, username=sub), expires_at
