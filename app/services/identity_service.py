"""
HomeChef Identity Service.

Handles Firebase ID token verification and caller identity extraction.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from google.auth.transport import requests
from google.oauth2 import id_token
from starlette.concurrency import run_in_threadpool

from app.utils.errors import AuthenticationError
from settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """Verified caller, as asserted by the identity provider."""

    uid: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


class IdentityService:
    """Firebase ID token verification service."""

    def __init__(self, project_id: Optional[str] = None):
        """Initialize with the Firebase project id (token audience)."""
        self.project_id = project_id or settings.FIREBASE_PROJECT_ID
        self._request = requests.Request()

    async def verify_token(self, token: str) -> CallerIdentity:
        """
        Verify a Firebase ID token and extract the caller identity.

        The verification call fetches Google's public certificates and is
        blocking, so it runs in the threadpool.

        Args:
            token: Raw bearer token from the Authorization header.

        Returns:
            CallerIdentity for the verified token.

        Raises:
            AuthenticationError: If the provider rejects the token or the
                token carries no email claim.
        """
        try:
            claims = await run_in_threadpool(
                id_token.verify_firebase_token,
                token,
                self._request,
                self.project_id or None,
            )
        except Exception as e:
            logger.warning(f"Firebase token verification failed: {e}")
            raise AuthenticationError(message=f"unauthorized access: {e}")

        if not claims:
            raise AuthenticationError()

        email = claims.get("email")
        if not email:
            logger.warning("Verified token carries no email claim")
            raise AuthenticationError(message="unauthorized access: token has no email")

        return CallerIdentity(
            uid=claims.get("user_id") or claims.get("sub", ""),
            email=email.lower(),
            name=claims.get("name"),
            picture=claims.get("picture"),
        )


# Singleton instance
identity_service = IdentityService()


def get_identity_service() -> IdentityService:
    """Dependency returning the identity verifier."""
    return identity_service
