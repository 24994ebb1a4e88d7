import logging
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.exceptions import (
    AuthenticationError, AuthorizationError, NotFoundError, StorageError, ValidationError)
from shared.core.schemas import UserToken
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole, UserStatus
from ..schemas.userschema import (
    ChangePasswordRequest, SigninResponse, SignupResponse, UserBase, UserListResponse,
    UserRead, UserSignin, UserSignup, UserStatusResponse)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _commit(db: Session, action: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to {action}", details=str(e))


def _get_user(db: Session, user_id: int) -> Users:
    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def _find_by_email(db: Session, email: str):
    return db.query(Users).filter(func.lower(Users.email) == email.lower()).first()


def sign_up(db: Session, user: UserSignup) -> SignupResponse:
    if not user.name or not user.email or not user.password:
        raise ValidationError("Name, email and password are required")

    # checked before hashing, a duplicate never costs a bcrypt round
    if _find_by_email(db, user.email):
        raise ValidationError(
            "User already exists with this email",
            status_code=AppStatusCode.USER_USERNAME_IS_UNIQUE)

    role = UserRole.ADMIN.value if user.role == UserRole.ADMIN.value else UserRole.USER.value

    user_instance = Users(
        name=user.name,
        email=user.email,
        role=role,
        status=UserStatus.ACTIVE.value
    )
    user_instance.set_password(user.password)
    db.add(user_instance)
    _commit(db, "register user")
    db.refresh(user_instance)

    logger.info("Registered user %s with role %s", user_instance.id, role)
    return SignupResponse(id=user_instance.id, role=role)


def sign_in(db: Session, credentials: UserSignin) -> SigninResponse:
    if not credentials.email or not credentials.password:
        raise ValidationError("Email and password are required")

    user = _find_by_email(db, credentials.email)
    if not user or not user.verify_password(credentials.password):
        raise AuthenticationError(
            "Invalid email or password",
            status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID)

    if user.status == UserStatus.BLOCKED.value:
        raise AuthorizationError(
            "Your account has been blocked. Please contact administrator.",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE)

    token = auth.create_access_token({
        "user_id": user.id,
        "email": user.email,
        "role": user.role,
    })

    return SigninResponse(token=token, data=UserBase.model_validate(user))


def get_current_user(db: Session, current_user: UserToken) -> UserBase:
    return UserBase.model_validate(_get_user(db, current_user.user_id))


def get_all_users(db: Session) -> UserListResponse:
    users = (
        db.query(Users)
        .order_by(Users.created_at.desc(), Users.id.desc())
        .all()
    )
    return UserListResponse(users=[UserRead.model_validate(u) for u in users])


def change_user_password(db: Session, request: ChangePasswordRequest):
    if not request.userId or not request.newPassword:
        raise ValidationError("User ID and new password are required")

    if len(request.newPassword) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            status_code=AppStatusCode.INVALID_INPUT)

    user = _get_user(db, request.userId)
    user.set_password(request.newPassword)
    _commit(db, "update password")

    logger.info("Password changed for user %s", user.id)
    return {"id": user.id}


def toggle_user_status(db: Session, user_id: int) -> UserStatusResponse:
    user = _get_user(db, user_id)

    current_status = user.status or UserStatus.ACTIVE.value
    user.status = (UserStatus.BLOCKED.value
                   if current_status == UserStatus.ACTIVE.value
                   else UserStatus.ACTIVE.value)
    _commit(db, "update user status")

    logger.info("User %s is now %s", user.id, user.status)
    return UserStatusResponse(id=user.id, status=user.status)
