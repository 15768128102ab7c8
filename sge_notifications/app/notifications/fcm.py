import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from ..errors import PushDeliveryError
from ..firebase import FirebaseCredentialProvider
from .schemas import PushNotification

logger = logging.getLogger(__name__)


def build_fcm_message(notification: PushNotification,
                      channel_id: str = "high_importance_channel") -> Dict[str, Any]:
    """
    Build the FCM HTTP v1 request body for a notification.

    Android delivery is requested with high priority, the default sound and
    the given notification channel.
    """
    return {
        "message": {
            "token": notification.token,
            "notification": {
                "title": notification.title,
                "body": notification.body,
            },
            "data": notification.data or {},
            "android": {
                "priority": "high",
                "notification": {
                    "sound": "default",
                    "channel_id": channel_id,
                },
            },
        }
    }


class FcmClient:
    """Sends push notifications through the FCM HTTP v1 REST API."""

    def __init__(self,
                 project_id: str,
                 credential_provider: FirebaseCredentialProvider,
                 base_url: str = "https://fcm.googleapis.com",
                 channel_id: str = "high_importance_channel",
                 timeout_seconds: Optional[float] = None):
        self.project_id = project_id
        self.credential_provider = credential_provider
        self.base_url = base_url.rstrip("/")
        self.channel_id = channel_id
        self.timeout_seconds = timeout_seconds

    @property
    def send_url(self) -> str:
        return f"{self.base_url}/v1/projects/{self.project_id}/messages:send"

    async def send(self, notification: PushNotification) -> Dict[str, Any]:
        """
        Send one notification.

        Args:
            notification: The notification to deliver

        Returns:
            The provider's JSON response (contains the message ``name``)

        Raises:
            CredentialError: If no bearer token could be obtained
            PushDeliveryError: If FCM answers with a non-2xx status
        """
        access_token = await self.credential_provider.get_access_token()

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        payload = build_fcm_message(notification, self.channel_id)

        session_kwargs = {}
        if self.timeout_seconds is not None:
            session_kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout_seconds)

        async with aiohttp.ClientSession(**session_kwargs) as session:
            async with session.post(self.send_url, headers=headers, json=payload) as response:
                body = await response.text()
                if not 200 <= response.status < 300:
                    logger.error(f"FCM rejected message ({response.status}): {body}")
                    raise PushDeliveryError(body, status=response.status)

        return json.loads(body) if body else {}
