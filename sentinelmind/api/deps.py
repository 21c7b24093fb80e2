# sentinelmind/api/deps.py
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sentinelmind.services.credentials import CredentialStore
from sentinelmind.services.sessions import Identity, SessionIssuer, SessionVerifier
from sentinelmind.services.threats import ThreatStore

# auto_error=False: la ausencia de token la resuelve el verificador (MissingToken -> 401)
bearer = HTTPBearer(auto_error=False)


def get_credentials(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_threats(request: Request) -> ThreatStore:
    return request.app.state.threats


def get_issuer(request: Request) -> SessionIssuer:
    return request.app.state.issuer


def get_verifier(request: Request) -> SessionVerifier:
    return request.app.state.verifier


def current_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    verifier: SessionVerifier = Depends(get_verifier),
) -> Identity:
    """Se resuelve antes de tocar ningún almacén."""
    return verifier.verify(creds.credentials if creds else None)
