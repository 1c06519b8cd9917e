"""
Conversation Manager - chat sessions stored in the ``chatlogs`` collection.

A session document is addressed by its ``sessionId``. Messages are only
ever appended, through the store's atomic ``push``.
"""

import logging
from typing import Any, Dict, List, Optional

from ..models.session import ChatTurn
from ..storage.interface import DocumentStore

logger = logging.getLogger(__name__)

CHAT_LOGS = "chatlogs"


class ConversationManager:
    """Loads and extends chat sessions."""

    def __init__(self, store: DocumentStore, demo_user_id: str = "demo-user"):
        """
        Args:
            store: Connected document store
            demo_user_id: Owner recorded for sessions created without a user
        """
        self.store = store
        self.demo_user_id = demo_user_id

    async def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        return await self.store.get(CHAT_LOGS, session_id)

    async def load_history(self, session_id: Optional[str]) -> List[Dict[str, Any]]:
        """
        Prior turns of a session, oldest first.

        A missing session id, unknown session or empty session all give [].
        """
        if not session_id:
            return []
        session = await self.get_session(session_id)
        if not session:
            return []
        return list(session.get("messages") or [])

    def _defaults(self, session_id: str, user_id: Optional[str],
                  title: Optional[str] = None) -> Dict[str, Any]:
        return {
            "sessionId": session_id,
            "userId": user_id or self.demo_user_id,
            "title": title or "Health consultation",
            "messages": [],
            "isActive": True,
        }

    async def create_session(self, session_id: str, user_id: Optional[str] = None,
                             title: Optional[str] = None) -> Dict[str, Any]:
        """Create an empty session. Raises DuplicateKeyError if it exists."""
        return await self.store.insert(
            CHAT_LOGS, self._defaults(session_id, user_id, title), doc_id=session_id
        )

    async def append_turns(self, session_id: str, turns: List[ChatTurn],
                           user_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Append turns to a session in one store operation.

        The session is created when it does not exist yet.

        Returns:
            The session document after the append
        """
        session = await self.store.push(
            CHAT_LOGS,
            session_id,
            "messages",
            [turn.to_document() for turn in turns],
            defaults=self._defaults(session_id, user_id),
        )
        logger.debug(
            f"Appended {len(turns)} turn(s) to session {session_id}",
            extra={"extra_fields": {"session_id": session_id, "revision": session.get("revision")}}
        )
        return session

    async def list_sessions(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self.store.find(
            CHAT_LOGS, {"userId": user_id}, sort_by="updatedAt", limit=limit
        )

    async def delete_session(self, session_id: str) -> bool:
        return await self.store.delete(CHAT_LOGS, session_id)
