# -*- coding: utf-8 -*-
"""Auth — Pydantic models."""

from __future__ import annotations

from datetime import date
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

SubscriptionTier = Literal["free", "pro", "elite"]


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    first_name: Optional[str] = Field(None, max_length=80)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class UpgradeRequest(BaseModel):
    tier: SubscriptionTier


class UserPublic(BaseModel):
    id: str
    email: str
    subscription_tier: SubscriptionTier
    first_name: Optional[str] = None
    birth_date: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    sex: Optional[str] = None
    is_admin: bool = False
    created_at: str


class AuthResponse(BaseModel):
    user: UserPublic
    token: str


class ProfileUpdateRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=80)
    birth_date: str = Field(..., description="YYYY-MM-DD")
    height_cm: Optional[float] = Field(None, gt=0, le=300)
    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    sex: Optional[Literal["male", "female"]] = Field(None, description="Omitted keeps the stored value")

    @field_validator("first_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("first_name must not be blank")
        return value

    @field_validator("birth_date")
    @classmethod
    def _iso_date(cls, value: str) -> str:
        return date.fromisoformat(value.strip()).isoformat()

    @field_validator("sex", mode="before")
    @classmethod
    def _lower_sex(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value
