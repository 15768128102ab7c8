from .fcm import FcmClient, build_fcm_message
from .schemas import PushNotification

__all__ = ["FcmClient", "build_fcm_message", "PushNotification"]
