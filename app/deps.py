from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core import security
from app.core.config import settings
from app.core.errors import UnauthenticatedError
from app.db.session import get_db
from app.modules.auth.schemas.auth import Principal, TokenPayload
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_or_create_user

# Tokens are issued by the identity provider; tokenUrl only feeds the OpenAPI docs
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/token", auto_error=False)

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    """
    Dependency for getting current authenticated user
    """
    if not token:
        raise UnauthenticatedError("Authentication required")

    payload = security.verify_access_token(token)
    if payload is None:
        raise UnauthenticatedError("Invalid token or token expired")

    try:
        token_data = TokenPayload(**payload)
    except ValidationError:
        raise UnauthenticatedError("Could not validate credentials")

    user = get_or_create_user(db, token_data)
    if not user:
        raise UnauthenticatedError("User not found")

    return user

def get_current_principal(current_user: User = Depends(get_current_user)) -> Principal:
    """
    Dependency for the caller identity passed to the services.
    The id is always the string primary key of the users table.
    """
    return Principal(id=str(current_user.id), name=current_user.name)
