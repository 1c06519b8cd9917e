"""
User profile API endpoints.
"""

from fastapi import APIRouter, Depends

from .deps import get_user_storage, success
from ..core.errors import AppError, ErrorKind, not_found
from ..models import UserUpdate, public_user
from ..storage import DuplicateKeyError, UserStorage

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}")
async def get_user(user_id: str, users: UserStorage = Depends(get_user_storage)):
    user = await users.get_user(user_id)
    if not user:
        raise not_found("User")
    return success(public_user(user))


@router.put("/{user_id}")
async def update_user(user_id: str, updates: UserUpdate,
                      users: UserStorage = Depends(get_user_storage)):
    """Update the fields present in the request; others are left untouched."""
    changes = updates.model_dump(mode="json", by_alias=True, exclude_unset=True)
    try:
        user = await users.update_user(user_id, changes)
    except DuplicateKeyError:
        raise AppError(ErrorKind.CONFLICT, "Email is already in use")
    if not user:
        raise not_found("User")
    return success(public_user(user))
