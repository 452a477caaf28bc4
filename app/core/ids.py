import uuid

from app.core.errors import BadIdError


def new_id() -> str:
    return str(uuid.uuid4())


def ensure_valid_id(value: str, resource: str = "post") -> str:
    """Return the canonical form of ``value`` or raise BadIdError"""
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError):
        raise BadIdError(resource)
