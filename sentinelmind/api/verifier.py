# sentinelmind/api/verifier.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from sentinelmind.api.deps import current_identity, get_verifier
from sentinelmind.core.errors import AuthError
from sentinelmind.services.sessions import Identity, SessionVerifier

router = APIRouter()


class VerifyInput(BaseModel):
    token: str | None = None


@router.post("/verify")
async def verify_token(body: VerifyInput, verifier: SessionVerifier = Depends(get_verifier)):
    # Diagnóstico: aquí sí se expone el motivo (missing / invalid / expired)
    try:
        identity, expires_at = verifier.inspect(body.token)
    except AuthError as e:
        return {"valid": False, "reason": e.reason}

    return {
        "valid": True,
        "identity": {"id": identity.user_id, "username": identity.username},
        "expires_at": expires_at.isoformat(),
    }


@router.get("/me")
async def me(identity: Identity = Depends(current_identity)):
    return {"id": identity.user_id, "username": identity.username}
