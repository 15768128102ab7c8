import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from ..dependencies import get_notification_service
from .schemas import WebhookEvent, WebhookOutcome
from .service import AttendanceNotificationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhooks"])

# Plain text bodies for the terminal states that do not send anything
OUTCOME_RESPONSES = {
    WebhookOutcome.IGNORED: (status.HTTP_200_OK, "Ignored"),
    WebhookOutcome.STUDENT_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Student not found"),
    WebhookOutcome.NO_PARENT: (status.HTTP_200_OK, "No parent assigned"),
    WebhookOutcome.NO_TOKEN: (status.HTTP_200_OK, "No FCM token"),
}


@router.post('/webhook/attendance')
async def attendance_webhook(
    request: Request,
    service: Annotated[AttendanceNotificationService, Depends(get_notification_service)]
):
    """
    Receive a Supabase database webhook and notify the student's parent
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Request body must be valid JSON")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    event = WebhookEvent.model_validate(payload)
    outcome = await service.handle_event(event)

    if outcome == WebhookOutcome.SENT:
        return {"success": True}

    status_code, text = OUTCOME_RESPONSES[outcome]
    return PlainTextResponse(text, status_code=status_code)
