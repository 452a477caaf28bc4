"""Authentication router. Tokens are issued by the identity provider; this only checks them."""
from typing import Any

from fastapi import APIRouter, Depends

from app.deps import get_current_principal
from app.modules.auth.schemas.auth import Principal, TokenValidation

router = APIRouter()

@router.get("/validate-token", response_model=TokenValidation)
def validate_token(principal: Principal = Depends(get_current_principal)) -> Any:
    """Validate the current user's token and return who it belongs to"""
    return TokenValidation(valid=True, user_id=principal.id, name=principal.name)
