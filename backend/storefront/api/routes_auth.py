from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.exceptions import Unauthorized
from storefront.schemas.auth_schema import CredentialsIn, MessageOut, TokenOut, WhoAmIOut
from storefront.services.identity_service import IdentityService

router = APIRouter(prefix="/api/auth", tags=["auth"])

bearer = HTTPBearer(auto_error=False)


@router.post("/register", response_model=MessageOut, summary="Register a user")
def register(payload: CredentialsIn, db: Session = Depends(get_db)):
    IdentityService(db).register(payload.username, payload.password)
    return {"message": "User registered"}


@router.post("/login", response_model=TokenOut, summary="Exchange credentials for a token")
def login(payload: CredentialsIn, db: Session = Depends(get_db)):
    session = IdentityService(db).authenticate(payload.username, payload.password)
    return {"token": session.token}


def current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> dict:
    if credentials is None:
        raise Unauthorized("Missing bearer token")
    return IdentityService.decode_token(credentials.credentials)


@router.get("/me", response_model=WhoAmIOut, summary="Describe the bearer of a token")
def me(claims: dict = Depends(current_claims)):
    return WhoAmIOut(
        username=claims["sub"],
        user_id=claims["user_id"],
        expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
    )
