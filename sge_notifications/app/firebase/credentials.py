import asyncio
import base64
import binascii
import json
import logging
from typing import Optional

import google.auth.exceptions
import google.auth.transport.requests
from firebase_admin import credentials

from ..errors import CredentialError

logger = logging.getLogger(__name__)

FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"


class FirebaseCredentialProvider:
    """Exchanges the service-account credential for FCM bearer tokens."""

    def __init__(self, credentials_base64: Optional[str]):
        """
        Initialize the provider. Credentials are decoded lazily on first use.

        Args:
            credentials_base64: Base64-encoded service-account JSON document
        """
        self.credentials_base64 = credentials_base64
        self._credential = None

    def _load_credential(self):
        if not self.credentials_base64:
            raise CredentialError("Missing env var: FIREBASE_CREDENTIALS_BASE64")

        try:
            cert_json = base64.b64decode(self.credentials_base64).decode("utf-8")
            cert_dict = json.loads(cert_json)
            if isinstance(cert_dict, str):
                cert_dict = json.loads(cert_dict)
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CredentialError(f"Invalid FIREBASE_CREDENTIALS_BASE64: {str(e)}") from e

        if not isinstance(cert_dict, dict):
            raise CredentialError("Invalid FIREBASE_CREDENTIALS_BASE64: expected a JSON object")

        try:
            cert = credentials.Certificate(cert_dict)
        except ValueError as e:
            raise CredentialError(f"Invalid service account credential: {str(e)}") from e

        logger.info(f"Loaded service account for project {cert.project_id}")
        return cert.get_credential().with_scopes([FCM_SCOPE])

    async def get_access_token(self) -> str:
        """
        Return a bearer token scoped to the FCM API.

        The scoped credential is cached and only refreshed once it is no
        longer valid.

        Raises:
            CredentialError: If the credential is missing, malformed or rejected
        """
        if self._credential is None:
            self._credential = self._load_credential()

        credential = self._credential
        if not credential.valid:
            try:
                await asyncio.to_thread(credential.refresh, google.auth.transport.requests.Request())
            except google.auth.exceptions.GoogleAuthError as e:
                logger.error(f"Failed to obtain FCM access token: {str(e)}")
                raise CredentialError(str(e)) from e

        return credential.token
