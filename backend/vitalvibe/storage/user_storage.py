"""
User Storage - Persistent user accounts on top of the document store.
Passwords are hashed whenever they are written.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .interface import DocumentStore, DuplicateKeyError
from ..utils.auth import get_password_hash, verify_password

USERS = "users"

# Email uniqueness is checked and written under one lock per process
_create_lock = asyncio.Lock()


class UserStorage:
    """
    Manages persistent storage of user documents.
    Emails are stored lowercased and are unique.
    """

    def __init__(self, store: DocumentStore):
        """
        Args:
            store: Connected document store
        """
        self.store = store

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self.store.get(USERS, user_id)

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.store.find_one(USERS, {"email": email.strip().lower()})

    async def create_user(self, email: str, password: str, name: str,
                          **profile: Any) -> Dict[str, Any]:
        """
        Create a new user.

        Args:
            email: Login email, normalized to lowercase
            password: Plain text password, hashed before it is stored
            name: Display name
            **profile: Optional profile fields (camelCase keys)

        Returns:
            The stored user document (still containing the hash)

        Raises:
            DuplicateKeyError: if the email is already registered
        """
        email = email.strip().lower()
        async with _create_lock:
            if await self.get_user_by_email(email):
                raise DuplicateKeyError(USERS, "email", email)
            user_data = {
                **profile,
                "email": email,
                "password": get_password_hash(password),
                "name": name.strip(),
                "isActive": True,
                "lastLogin": None,
                "loginCount": 0,
            }
            return await self.store.insert(USERS, user_data)

    async def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update user fields. A new ``password`` is hashed; ``email`` changes
        keep the uniqueness guarantee.

        Returns:
            Updated user document or None if the user does not exist
        """
        updates = dict(updates)
        if updates.get("password"):
            updates["password"] = get_password_hash(updates["password"])
        if updates.get("email"):
            updates["email"] = updates["email"].strip().lower()
            async with _create_lock:
                existing = await self.get_user_by_email(updates["email"])
                if existing and existing["id"] != user_id:
                    raise DuplicateKeyError(USERS, "email", updates["email"])
                return await self.store.update(USERS, user_id, updates)
        return await self.store.update(USERS, user_id, updates)

    async def authenticate(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """
        Check credentials and record the login.

        Returns:
            Updated user document, or None if the email or password is wrong
        """
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.get("password", "")):
            return None
        return await self.store.update(USERS, user["id"], {
            "lastLogin": datetime.now(timezone.utc).isoformat(),
            "loginCount": user.get("loginCount", 0) + 1,
        })

    async def delete_user(self, user_id: str) -> bool:
        return await self.store.delete(USERS, user_id)
