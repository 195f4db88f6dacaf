from datetime import datetime

from pydantic import BaseModel

from storefront.schemas.base import CamelModel


class CredentialsIn(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    token: str


class MessageOut(BaseModel):
    message: str


class WhoAmIOut(CamelModel):
    username: str
    user_id: int
    expires_at: datetime
