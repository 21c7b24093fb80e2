# sentinelmind/api/issuer.py
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from sentinelmind.api.deps import get_issuer
from sentinelmind.services.sessions import SessionIssuer

router = APIRouter()


class LoginInput(BaseModel):
    username: str
    password: str


class LoginOutput(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime


@router.post("/login", response_model=LoginOutput)
async def login(body: LoginInput, issuer: SessionIssuer = Depends(get_issuer)):
    issued = await issuer.login(body.username, body.password)
    return LoginOutput(token=issued.token, expires_at=issued.expires_at)
