from datetime import datetime, timedelta, timezone
import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_db
from shared.core.exceptions import AuthenticationError, AuthorizationError
from shared.core.schemas import UserToken
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole, UserStatus

logger = logging.getLogger(__name__)

# missing header is reported by validate_current_token as a 401
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    payload = data.copy()
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES
    payload['exp'] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        return UserToken(**payload)
    except ExpiredSignatureError:
        raise AuthenticationError(
            "Token has expired",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED)
    except (JWTError, PydanticValidationError):
        raise AuthenticationError(
            "Invalid token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID)


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Unauthorized")

    user_data = verify_token(credentials.credentials)

    user = db.query(Users).filter(Users.id == user_data.user_id).first()
    if not user:
        raise AuthenticationError(
            "User not found",
            status_code=AppStatusCode.AUTHENTICATION_USER_INVALID)

    if user.status.lower() != UserStatus.ACTIVE.value:
        logger.info("Rejected token for blocked user %s", user.id)
        raise AuthorizationError(
            "User is not active. Access denied",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE)

    user_data.status = user.status
    user_data.role = user.role
    return user_data


def allow_admin(current_user: UserToken = Depends(validate_current_token)) -> UserToken:
    if current_user.role != UserRole.ADMIN.value:
        raise AuthorizationError("Access denied. Admin only.")
    return current_user
