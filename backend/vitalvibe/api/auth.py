"""
Authentication API endpoints.

Credentials are checked against bcrypt hashes; responses carry the user
document with every secret removed.
"""

import logging

from fastapi import APIRouter, Depends, status

from .deps import get_user_storage, success
from ..core.errors import AppError, ErrorKind
from ..models import LoginRequest, UserCreate, default_profile, public_user
from ..storage import DuplicateKeyError, UserStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, users: UserStorage = Depends(get_user_storage)):
    """
    Register a new user.

    Raises:
        AppError: conflict, if the email is already registered
    """
    try:
        user = await users.create_user(
            email=user_data.email,
            password=user_data.password,
            name=user_data.name,
            **default_profile(),
        )
    except DuplicateKeyError:
        raise AppError(ErrorKind.CONFLICT, "User already exists")

    logger.info("User registered", extra={"extra_fields": {"user_id": user["id"]}})
    return success(public_user(user), message="User registered successfully")


@router.post("/login")
async def login(credentials: LoginRequest, users: UserStorage = Depends(get_user_storage)):
    user = await users.authenticate(credentials.email, credentials.password)
    if not user:
        logger.warning("Failed login attempt", extra={"extra_fields": {"email": credentials.email}})
        raise AppError(ErrorKind.UNAUTHORIZED, "Invalid credentials")
    if not user.get("isActive", True):
        raise AppError(ErrorKind.UNAUTHORIZED, "Account is disabled")
    return success(public_user(user), message="Login successful")
