"""
Chat API endpoints - chat sessions and their message logs.
"""

from fastapi import APIRouter, Depends, status

from .deps import get_conversations, success
from .symptoms import new_session_id
from ..core.conversation import ConversationManager
from ..core.errors import not_found, validation_failed
from ..models import ChatLogRequest, ChatTurn, SessionCreate

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.get("/sessions/{user_id}")
async def list_sessions(
    user_id: str,
    conversations: ConversationManager = Depends(get_conversations),
):
    """Sessions of a user, most recently active first."""
    sessions = await conversations.list_sessions(user_id, limit=100)
    return success(sessions, count=len(sessions))


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def create_session(
    request: SessionCreate,
    conversations: ConversationManager = Depends(get_conversations),
):
    session = await conversations.create_session(
        new_session_id(), user_id=request.user_id, title=request.title or "New Chat"
    )
    return success(session)


@router.get("/session/{session_id}")
async def get_session(
    session_id: str,
    conversations: ConversationManager = Depends(get_conversations),
):
    session = await conversations.get_session(session_id)
    if not session:
        raise not_found("Session")
    return success(session)


@router.post("/log")
async def log_messages(
    request: ChatLogRequest,
    conversations: ConversationManager = Depends(get_conversations),
):
    """
    Append the user message and/or the assistant reply to a session,
    creating the session on first use.
    """
    turns = []
    if request.user_message:
        turns.append(ChatTurn(role="user", content=request.user_message))
    if request.ai_response:
        turns.append(ChatTurn(role="assistant", content=request.ai_response))
    if not turns:
        raise validation_failed(
            [{"field": "userMessage", "message": "userMessage or aiResponse is required"}]
        )

    session = await conversations.append_turns(request.session_id, turns, user_id=request.user_id)
    return success(session)


@router.delete("/session/{session_id}")
async def delete_session(
    session_id: str,
    conversations: ConversationManager = Depends(get_conversations),
):
    if not await conversations.delete_session(session_id):
        raise not_found("Session")
    return success(message="Deleted")
