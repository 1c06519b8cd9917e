"""
Symptom API endpoints - symptom records and conversational triage.
"""

import logging
import time

from fastapi import APIRouter, Depends, status

from .deps import get_conversations, get_store, get_symptom_agent, success
from ..agents import SymptomTriageAgent
from ..core.conversation import ConversationManager
from ..core.errors import not_found
from ..models import ChatTurn, DiagnoseRequest, SymptomCreate, utc_now
from ..storage import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/symptoms", tags=["symptoms"])

SYMPTOMS = "symptoms"


def new_session_id() -> str:
    return f"session-{int(time.time() * 1000)}"


@router.post("/diagnose")
async def diagnose(
    request: DiagnoseRequest,
    agent: SymptomTriageAgent = Depends(get_symptom_agent),
    conversations: ConversationManager = Depends(get_conversations),
):
    """
    One patient turn of the triage conversation.

    Prior turns of the session feed the prompt; the patient message and the
    reply are then appended to the session in a single store operation.
    Model failures never surface here: the reply degrades to a canned
    clarifying question and ``mode`` becomes ``FALLBACK``.
    """
    session_id = request.session_id or new_session_id()
    message = request.message
    history = await conversations.load_history(session_id)

    result = await agent.diagnose(message, history)

    await conversations.append_turns(
        session_id,
        [
            ChatTurn(role="user", content=message),
            ChatTurn(role="assistant", content=result["message"]),
        ],
        user_id=request.user_id,
    )

    logger.info(
        f"Triage turn answered in {result['mode']} mode",
        extra={"extra_fields": {
            "session_id": session_id,
            "mode": result["mode"],
            "history_turns": len(history),
        }}
    )
    return {
        "success": True,
        "response": {"message": result["message"], "type": "conversation"},
        "mode": result["mode"],
        "sessionId": session_id,
        "timestamp": utc_now().isoformat(),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_symptom(entry: SymptomCreate, store: DocumentStore = Depends(get_store)):
    saved = await store.insert(SYMPTOMS, entry.to_document())
    return success(saved)


@router.get("/{user_id}")
async def list_symptoms(user_id: str, store: DocumentStore = Depends(get_store)):
    symptoms = await store.find(SYMPTOMS, {"userId": user_id}, sort_by="date")
    return success(symptoms, count=len(symptoms))


@router.delete("/{symptom_id}")
async def delete_symptom(symptom_id: str, store: DocumentStore = Depends(get_store)):
    if not await store.delete(SYMPTOMS, symptom_id):
        raise not_found("Symptom record")
    return success(message="Symptom record deleted")
