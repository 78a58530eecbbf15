"""
User Routes

POST /users/register - Register new account (returns JWT)
POST /users/login - Login and get JWT + profile snapshot
GET /users/profile - Get own profile (auth)
PUT /users/update - Upsert own profile (auth)
DELETE /users/details - Clear own profile fields (auth)
GET /users/{email} - Get a profile by email
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from jobportal.db.database import get_db_session
from jobportal.core.auth import hash_password, verify_password, create_access_token, get_current_user
from jobportal.core.config import get_settings
from jobportal.services import profile_service
from jobportal.schemas.schemas import (
    RegisterRequest, LoginRequest, AuthResponse, ProfileDetails, ProfileUpdate,
    ProfileResponse, MessageResponse
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)
settings = get_settings()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new account.

    Creates the login row and both (empty) profile rows in one transaction,
    then issues a token so the client can go straight to the details form.
    """
    with get_db_session() as db:
        if profile_service.find_account_id(db, request.user_email) is not None:
            raise HTTPException(status_code=400, detail="User already exists")

        try:
            user_id = profile_service.create_account(db, request.user_email, hash_password(request.password))
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            raise HTTPException(status_code=400, detail="User already exists")
        details = profile_service.load_profile(db, user_id)

    logger.info("Registered user %s", user_id)
    token = create_access_token(user_id, request.user_email)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user_email=request.user_email,
        user_details=details,
        is_new_user=True,
        role=None,
    )


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token plus the stored profile.

    Include token in requests: Authorization: Bearer <token>
    """
    with get_db_session() as db:
        result = db.execute(
            text("SELECT id, password FROM user_login WHERE user_email = :email"),
            {"email": request.user_email}
        )
        user = result.fetchone()

        if not user:
            logger.warning("Login for unknown email")
            if settings.uniform_login_errors:
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=404, detail="User not registered")

        user_id, password_hash = user

        if not verify_password(request.password, password_hash):
            logger.warning("Wrong password for user %s", user_id)
            if settings.uniform_login_errors:
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=401, detail="Incorrect password")

        details = profile_service.load_profile(db, user_id)

    token = create_access_token(user_id, request.user_email)
    return AuthResponse(
        message="Login successful",
        token=token,
        user_email=request.user_email,
        user_details=details,
        is_new_user=not details.details_completed,
        role=details.role,
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_own_profile(user: dict = Depends(get_current_user)):
    """Get the authenticated account's profile."""
    with get_db_session() as db:
        details = profile_service.load_profile(db, user["user_id"])

    return ProfileResponse(user_email=user["email"], user_details=details)


@router.put("/update", response_model=ProfileResponse)
async def update_profile(data: ProfileUpdate, user: dict = Depends(get_current_user)):
    """
    Save the details form.

    Inserts or updates the profile, writes the role-specific projection
    and sets detailsCompleted. Fields left out keep their stored value.
    """
    with get_db_session() as db:
        details = profile_service.update_profile(db, user["user_id"], data)

    return ProfileResponse(message="User details updated", user_email=user["email"], user_details=details)


@router.delete("/details", response_model=MessageResponse)
async def delete_details(user: dict = Depends(get_current_user)):
    """Clear all profile fields of the authenticated account."""
    with get_db_session() as db:
        profile_service.clear_profile(db, user["user_id"])

    return MessageResponse(message="User details deleted")


@router.get("/{email}", response_model=ProfileDetails)
async def get_user_by_email(email: str):
    """Get a profile by account email."""
    with get_db_session() as db:
        user_id = profile_service.require_account_id(db, profile_service.normalize_email(email))
        return profile_service.load_profile(db, user_id)
