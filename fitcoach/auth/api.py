# -*- coding: utf-8 -*-
"""Auth — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from ..config import settings
from .models import AuthResponse, LoginRequest, ProfileUpdateRequest, RegisterRequest, UpgradeRequest, UserPublic
from .security import (
    TOKEN_COOKIE_NAME,
    create_access_token,
    get_current_user,
    hash_password,
    is_admin_email,
    verify_password,
)
from .storage import create_user, get_user_by_email, set_subscription_tier, update_profile

router = APIRouter(prefix="/api/auth", tags=["Auth"])

SECONDS_PER_DAY = 86400
PUBLIC_USER_FIELDS = (
    "id",
    "email",
    "subscription_tier",
    "first_name",
    "birth_date",
    "height_cm",
    "weight_kg",
    "sex",
    "created_at",
)


def user_public(row: dict) -> UserPublic:
    public = {key: row.get(key) for key in PUBLIC_USER_FIELDS}
    return UserPublic(**public, is_admin=is_admin_email(row["email"]))


def _issue_session(user: dict, response: Response) -> AuthResponse:
    """Mint a token for `user` and mirror it into an http-only cookie."""
    token = create_access_token(user_id=user["id"])
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        max_age=int(settings.token_ttl_days) * SECONDS_PER_DAY,
        path="/",
        samesite="lax",
        httponly=True,
        secure=bool(settings.cookie_secure),
    )
    return AuthResponse(user=user_public(user), token=token)


@router.post("/register", response_model=AuthResponse, summary="Create an account and sign in")
def register(request: RegisterRequest, response: Response):
    if get_user_by_email(request.email) is not None:
        raise HTTPException(status_code=400, detail="Email already registered")
    created = create_user(
        email=request.email,
        password_hash=hash_password(request.password),
        first_name=request.first_name,
    )
    return _issue_session(created, response)


@router.post("/login", response_model=AuthResponse, summary="Sign in with email and password")
def login(request: LoginRequest, response: Response):
    found = get_user_by_email(request.email)
    if found is None or not verify_password(request.password, found["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return _issue_session(found, response)


@router.post("/logout", summary="Clear the session cookie")
def logout(response: Response):
    response.delete_cookie(key=TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok"}


@router.get("/me", response_model=UserPublic, summary="Current account")
def me(user: dict = Depends(get_current_user)):
    return user_public(user)


@router.post("/upgrade", response_model=UserPublic, summary="Change own subscription tier")
def upgrade(request: UpgradeRequest, user: dict = Depends(get_current_user)):
    return user_public(set_subscription_tier(user["id"], request.tier))


@router.put("/profile", response_model=UserPublic, summary="Update own profile details")
def profile(request: ProfileUpdateRequest, user: dict = Depends(get_current_user)):
    updated = update_profile(user["id"], **request.model_dump())
    return user_public(updated)
