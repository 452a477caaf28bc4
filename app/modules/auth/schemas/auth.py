from typing import Optional
from pydantic import BaseModel

from app.core.schemas import APIModel

class TokenPayload(BaseModel):
    sub: str
    name: Optional[str] = None
    email: Optional[str] = None
    picture: Optional[str] = None

class Principal(BaseModel):
    """The caller identity handed to the services: one canonical string id"""
    id: str
    name: str

class TokenValidation(APIModel):
    valid: bool
    user_id: str
    name: str
