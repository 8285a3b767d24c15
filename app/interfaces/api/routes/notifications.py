"""Endpoints and websocket handler for recipient notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    DispatchResult,
    NotificationNotFoundError,
    count_unread_notifications,
    create_system_announcement,
    get_preferences as get_preferences_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
    notify_admins,
    update_preferences as update_preferences_uc,
)
from app.domain.entities import NOTIFICATION_CATEGORIES
from app.infrastructure.database import get_db
from app.infrastructure.notifications import notification_manager
from app.interfaces.api.dependencies import (
    Caller,
    get_caller,
    get_identified_caller,
    parse_caller,
    require_admin,
)
from app.interfaces.api.schemas import (
    AdminAlertCreate,
    AnnouncementCreate,
    DispatchSummary,
    MarkAllReadResponse,
    NotificationPage,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    NotificationRead,
    NotificationReadStateUpdate,
    UnreadCountResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _summary(result: DispatchResult) -> DispatchSummary:
    return DispatchSummary(
        count=result.created,
        created=result.created,
        suppressed=result.suppressed,
    )


@router.get("/", response_model=NotificationPage)
def list_notifications(
    unread_only: bool = Query(False),
    category: str | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller),
) -> NotificationPage:
    """Return the caller's notifications plus the public ones, newest first."""

    if category is not None and category not in NOTIFICATION_CATEGORIES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown category '{category}'",
        )
    notifications, total = list_notifications_uc(
        db,
        recipient_id=caller.recipient_id,
        role=caller.role,
        unread_only=unread_only,
        category=category,
        limit=limit,
        offset=offset,
    )
    unread = 0
    if not caller.is_anonymous:
        unread = count_unread_notifications(
            db, recipient_id=caller.recipient_id, role=caller.role
        )
    return NotificationPage(
        items=[NotificationRead.from_entity(notification) for notification in notifications],
        total=total,
        unread_count=unread,
        limit=limit,
        offset=offset,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_identified_caller),
) -> UnreadCountResponse:
    return UnreadCountResponse(
        unread_count=count_unread_notifications(
            db, recipient_id=caller.recipient_id, role=caller.role
        )
    )


@router.post("/mark-all-read", response_model=MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_identified_caller),
) -> MarkAllReadResponse:
    updated = mark_all_notifications_read(
        db, recipient_id=caller.recipient_id, role=caller.role
    )
    return MarkAllReadResponse(updated=updated)


@router.get("/preferences", response_model=NotificationPreferencesRead)
def read_preferences(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_identified_caller),
) -> NotificationPreferencesRead:
    try:
        preferences = get_preferences_uc(db, recipient_id=caller.recipient_id, role=caller.role)
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return NotificationPreferencesRead.from_entity(preferences)


@router.put("/preferences", response_model=NotificationPreferencesRead)
def write_preferences(
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_identified_caller),
) -> NotificationPreferencesRead:
    """Merge the provided flags into the caller's stored preferences."""

    try:
        preferences = update_preferences_uc(
            db,
            recipient_id=caller.recipient_id,
            role=caller.role,
            changes=payload.model_dump(exclude_none=True),
        )
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return NotificationPreferencesRead.from_entity(preferences)


@router.post(
    "/announcements",
    response_model=DispatchSummary,
    status_code=status.HTTP_201_CREATED,
)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    _: Caller = Depends(require_admin),
) -> DispatchSummary:
    """Broadcast a system announcement to the selected audience."""

    try:
        result = create_system_announcement(
            db,
            title=payload.title,
            message=payload.message,
            target_type=payload.target_type,
            target_role=payload.target_role,
            target_user_ids=payload.target_user_ids,
            action_url=payload.action_url,
            priority=payload.priority,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _summary(result)


@router.post(
    "/admin-alerts",
    response_model=DispatchSummary,
    status_code=status.HTTP_201_CREATED,
)
def create_admin_alert(
    payload: AdminAlertCreate,
    db: Session = Depends(get_db),
    _: Caller = Depends(require_admin),
) -> DispatchSummary:
    result = notify_admins(
        db,
        title=payload.title,
        message=payload.message,
        action_url=payload.action_url,
        metadata=payload.metadata,
    )
    return _summary(result)


@router.patch("/{notification_id}", response_model=NotificationRead)
def update_read_state(
    notification_id: int,
    payload: NotificationReadStateUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_identified_caller),
) -> NotificationRead:
    """Change the read flag of a notification owned by the caller."""

    try:
        notification = mark_notification_read(
            db,
            notification_id=notification_id,
            recipient_id=caller.recipient_id,
            role=caller.role,
            is_read=payload.is_read,
        )
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return NotificationRead.from_entity(notification)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream freshly created notifications for the caller and public ones.

    The caller is identified by the same ``X-Recipient-*`` headers as the
    HTTP endpoints.
    """

    try:
        caller = parse_caller(
            websocket.headers.get("x-recipient-id"),
            websocket.headers.get("x-recipient-role"),
        )
    except ValueError:
        caller = None
    if caller is None or caller.is_anonymous:
        await websocket.close(code=1008)
        return

    await notification_manager.connect(caller.key, websocket)
    try:
        while True:
            message = await websocket.receive_json()
            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        notification_manager.disconnect(caller.key, websocket)
    except Exception:
        notification_manager.disconnect(caller.key, websocket)
        raise
