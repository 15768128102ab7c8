from typing import Dict, Optional

from pydantic import BaseModel, Field


class PushNotification(BaseModel):
    """A single push notification addressed to one device token"""
    token: str
    title: str
    body: str
    data: Dict[str, str] = {}


class DirectPushRequest(BaseModel):
    """Request body for sending a push straight to a known device token"""
    token: str = Field(..., min_length=1)
    title: str
    body: str
    data: Optional[Dict[str, str]] = None


class DirectPushResponse(BaseModel):
    success: bool = True
    name: Optional[str] = None  # FCM message name, e.g. projects/<id>/messages/<id>
