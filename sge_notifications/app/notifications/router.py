import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from ..dependencies import get_push_dispatcher
from .fcm import FcmClient
from .schemas import DirectPushRequest, DirectPushResponse, PushNotification

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notifications"])


@router.post('/notifications/send', response_model=DirectPushResponse)
async def send_direct_notification(
    request: DirectPushRequest,
    dispatcher: Annotated[FcmClient, Depends(get_push_dispatcher)]
):
    """
    Send a push notification to a device token supplied by the caller
    """
    notification = PushNotification(
        token=request.token,
        title=request.title,
        body=request.body,
        data=request.data or {}
    )
    result = await dispatcher.send(notification)
    logger.info(f"Direct notification sent: {result.get('name')}")
    return DirectPushResponse(success=True, name=result.get("name"))
