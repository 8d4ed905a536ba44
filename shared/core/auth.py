from datetime import datetime, timedelta, timezone
from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from shared.utils.app_status_code import AppStatusCode
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken

security = HTTPBearer()

STOCK_WRITE_ROLES = {"storekeeper", "admin"}


def create_access_token(data: dict, expires_minutes: int = 60 * 24) -> str:
    payload = data.copy()
    payload["exp"] = datetime.now(timezone.utc) + \
        timedelta(minutes=expires_minutes)
    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return error_response(
            message="Invalid or expired token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not payload.get("user_id"):
        return error_response(
            message="Invalid token structure",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return UserToken(**payload)


def validate_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
):
    return verify_token(credentials.credentials)


def allow_storekeeper(current_user: UserToken = Depends(validate_current_token)):
    roles = {r.lower() for r in current_user.roles}
    if not roles & STOCK_WRITE_ROLES:
        return error_response(
            message="Access forbidden: storekeepers only",
            status_code=AppStatusCode.UNAUTHORIZED_ACTION,
            http_status=403
        )
    return current_user
