"""FastAPI dependency utilities.

The service has no login endpoint. Bearer tokens are issued by the host, or
with ``scripts/issue_token.py``, and carry the host user id in ``sub``.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notification_center.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user_id(token: str) -> str:
    """Resolve the authenticated user identifier for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise _credentials_error()
    return user_id


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Return the identifier of the user calling the API."""

    if credentials is None or not credentials.credentials:
        raise _credentials_error()
    return resolve_current_user_id(credentials.credentials)
