"""
Notification API endpoints - in-app notifications, push and email records.

Push and email delivery are recorded as notifications only; no external
messaging service is contacted.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from .deps import get_store, success
from ..core.errors import not_found
from ..models import EmailRequest, NotificationCreate, PushRequest, utc_now
from ..storage import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

NOTIFICATIONS = "notifications"


def _notification(user_id: str, title: str, message: str, type_: str,
                  data: dict, read: bool = False, priority: str = "medium") -> dict:
    return {
        "userId": user_id,
        "title": title,
        "message": message,
        "type": type_,
        "data": data,
        "priority": priority,
        "read": read,
        "readAt": utc_now().isoformat() if read else None,
    }


@router.get("")
async def list_all(limit: int = Query(100, ge=1, le=1000),
                   store: DocumentStore = Depends(get_store)):
    notifications = await store.find(NOTIFICATIONS, limit=limit)
    unread = await store.count(NOTIFICATIONS, {"read": False})
    return success(notifications, count=len(notifications), unread=unread)


@router.get("/{user_id}")
async def list_for_user(
    user_id: str,
    limit: int = Query(50, ge=1, le=1000),
    skip: int = Query(0, ge=0),
    unread_only: bool = Query(False, alias="unreadOnly"),
    store: DocumentStore = Depends(get_store),
):
    filters = {"userId": user_id}
    if unread_only:
        filters["read"] = False
    notifications = await store.find(NOTIFICATIONS, filters, limit=limit, skip=skip)
    total = await store.count(NOTIFICATIONS, filters)
    unread = await store.count(NOTIFICATIONS, {"userId": user_id, "read": False})
    return success(notifications, count=len(notifications), total=total, unread=unread)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_notification(entry: NotificationCreate,
                              store: DocumentStore = Depends(get_store)):
    saved = await store.insert(NOTIFICATIONS, _notification(
        entry.user_id, entry.title, entry.message, entry.type, entry.data,
        priority=entry.priority,
    ))
    return success(saved, message="Notification created")


@router.post("/request-permission")
async def request_permission():
    return success(message="Notification permission granted", status="enabled")


@router.post("/send")
async def send_push(request: PushRequest, store: DocumentStore = Depends(get_store)):
    saved = await store.insert(NOTIFICATIONS, _notification(
        request.user_id, request.title, request.body, "push", request.data,
    ))
    logger.info(
        f"Push notification recorded for {request.user_id}",
        extra={"extra_fields": {"notification_id": saved["id"]}}
    )
    return success(saved, message="Notification sent")


@router.post("/email")
async def send_email(request: EmailRequest, store: DocumentStore = Depends(get_store)):
    if request.user_id:
        await store.insert(NOTIFICATIONS, _notification(
            request.user_id, request.subject, request.message, "email",
            {"email": request.email}, read=True,
        ))
    return success(message="Email sent", email={"to": request.email, "subject": request.subject})


@router.put("/{notification_id}/read")
async def mark_read(notification_id: str, store: DocumentStore = Depends(get_store)):
    notification = await store.update(
        NOTIFICATIONS, notification_id, {"read": True, "readAt": utc_now().isoformat()}
    )
    if notification is None:
        raise not_found("Notification")
    return success(notification)


@router.put("/{user_id}/read-all")
async def mark_all_read(user_id: str, store: DocumentStore = Depends(get_store)):
    updated = await store.update_many(
        NOTIFICATIONS, {"userId": user_id, "read": False},
        {"read": True, "readAt": utc_now().isoformat()},
    )
    return success(message="All marked as read", updated=updated)


@router.delete("/{user_id}/clear-all")
async def clear_all(user_id: str, store: DocumentStore = Depends(get_store)):
    deleted = await store.delete_many(NOTIFICATIONS, {"userId": user_id})
    return success(message="All cleared", deleted=deleted)


@router.delete("/{notification_id}")
async def delete_notification(notification_id: str, store: DocumentStore = Depends(get_store)):
    if not await store.delete(NOTIFICATIONS, notification_id):
        raise not_found("Notification")
    return success(message="Notification deleted")
