from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas import userschema
from ..services import userservices

router = APIRouter(prefix="/api/user", tags=["User"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
        new_user: userschema.UserSignup,
        db: Session = Depends(get_db)):
    return success_response(
        data=userservices.sign_up(db, new_user),
        message="User registered successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.post("/signin")
def signin(
        credentials: userschema.UserSignin,
        db: Session = Depends(get_db)):
    return success_response(
        data=userservices.sign_in(db, credentials),
        message="Login successful")


@router.get("/me")
def get_current_user(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return success_response(data=userservices.get_current_user(db, current_user))


# ADMIN ROUTES
@router.get("/all")
def get_all_users(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    return success_response(
        data=userservices.get_all_users(db),
        message="Users fetched successfully")


@router.put("/change-password")
def change_user_password(
        request: userschema.ChangePasswordRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    return success_response(
        data=userservices.change_user_password(db, request),
        message="Password updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.patch("/toggle-status/{userId}")
def toggle_user_status(
        userId: int,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    result = userservices.toggle_user_status(db, userId)
    action = "blocked" if result.status == "blocked" else "unblocked"
    return success_response(
        data=result,
        message=f"User {action} successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)
