# sentinelmind/core/crypto.py
from __future__ import annotations

from pathlib import Path

import jwt
from cryptography.hazmat.primitives import serialization

from sentinelmind.core.config import Settings

_SYMMETRIC_PREFIX = "HS"


def _load_private_key(path: str):
    return serialization.load_pem_private_key(Path(path).read_bytes(), password=None)


def _load_public_key_pem(path: str):
    return serialization.load_pem_public_key(Path(path).read_bytes())


class TokenSigner:
    """
    Material de firma del proceso. Se construye una vez al arrancar y se pasa
    explícitamente al emisor y al verificador.
    - HS256/HS384/HS512: secreto compartido (JWT_SECRET)
    - RS*/PS*/ES*: par de claves PEM (JWT_PRIVATE_KEY_PATH / JWT_PUBLIC_KEY_PATH)
    """

    def __init__(self, algorithm: str, signing_key, verifying_key):
        self.algorithm = algorithm
        self._signing_key = signing_key
        self._verifying_key = verifying_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSigner":
        alg = settings.jwt_alg
        if alg.startswith(_SYMMETRIC_PREFIX):
            return cls(alg, settings.jwt_secret, settings.jwt_secret)
        return cls(
            alg,
            _load_private_key(settings.priv_key_path),
            _load_public_key_pem(settings.pub_key_path),
        )

    def sign(self, payload: dict) -> str:
        return jwt.encode(payload, self._signing_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        """Verifica firma + exp. Lanza las excepciones de PyJWT tal cual."""
        return jwt.decode(
            token,
            self._verifying_key,
            algorithms=[self.algorithm],
            options={"require": ["exp", "iat", "sub"]},
        )
