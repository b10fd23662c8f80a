"""
HomeChef API - Authentication Middleware.

Bearer token verification for protected routes.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.services.identity_service import (
    CallerIdentity,
    IdentityService,
    get_identity_service,
)
from app.utils.errors import AuthenticationError


class FirebaseBearer(HTTPBearer):
    """
    Firebase ID token authentication.

    Custom HTTPBearer that verifies the token with the identity provider
    and hands the verified caller to downstream dependencies.
    """

    def __init__(self):
        # Missing credentials are reported as 401 by us, not 403 by HTTPBearer
        super().__init__(auto_error=False)

    async def __call__(
        self,
        request: Request,
        verifier: IdentityService = Depends(get_identity_service),
    ) -> CallerIdentity:
        """
        Verify the bearer token from the Authorization header.

        Args:
            request: FastAPI request object.
            verifier: Identity provider client.

        Returns:
            CallerIdentity: The verified caller.

        Raises:
            AuthenticationError: 401 if the token is missing or invalid.
        """
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        if not credentials or not credentials.credentials:
            raise AuthenticationError()

        if credentials.scheme.lower() != "bearer":
            raise AuthenticationError()

        identity = await verifier.verify_token(credentials.credentials)
        request.state.caller_email = identity.email
        return identity


# Global bearer instance for dependency injection
firebase_bearer = FirebaseBearer()


async def get_current_identity(
    identity: CallerIdentity = Depends(firebase_bearer)
) -> CallerIdentity:
    """
    Dependency to get the verified caller identity.

    Usage:
        @router.post("/users")
        async def create(identity: CallerIdentity = Depends(get_current_identity)):
            return {"email": identity.email}
    """
    return identity
