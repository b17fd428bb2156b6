"""Bearer token authentication."""
import logging
import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings
from core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def token_matches(provided: str, expected: str) -> bool:
    """Constant-time comparison; an unset expected token never matches."""
    if not expected:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())


async def require_api_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Reject requests that do not carry the configured API token.

    In DEV_MODE the check is skipped entirely.

    Raises:
        UnauthorizedError: If the Authorization header is absent, is not a
            Bearer credential, or carries the wrong token.
    """
    if settings.dev_mode:
        return

    if credentials is None or not token_matches(credentials.credentials, settings.api_token):
        logger.warning("Unauthorized request to path: %s", request.url.path)
        raise UnauthorizedError()
