from .credentials import FCM_SCOPE, FirebaseCredentialProvider

__all__ = ["FCM_SCOPE", "FirebaseCredentialProvider"]
