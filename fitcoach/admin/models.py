# -*- coding: utf-8 -*-
"""Admin console — Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..auth.models import SubscriptionTier

BulkAction = Literal["setTier", "resetTools", "notify"]


class AdminUser(BaseModel):
    id: str
    email: str
    subscription_tier: SubscriptionTier
    first_name: Optional[str] = None
    created_at: str
    analysis_count: int = 0
    plan_count: int = 0
    goals_completed: int = 0
    is_admin: bool = False


class AdminUserListResponse(BaseModel):
    users: List[AdminUser]


class BulkRequest(BaseModel):
    user_ids: List[str]
    action: BulkAction
    tier: Optional[str] = None
    message: Optional[str] = Field(None, max_length=2000)

    @field_validator("user_ids", mode="before")
    @classmethod
    def _clean_ids(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [str(v).strip() for v in value if v is not None and str(v).strip()]


class BulkResponse(BaseModel):
    message: str
    affected: int = 0


class SubscriptionUpdateRequest(BaseModel):
    tier: SubscriptionTier


class UserDetails(BaseModel):
    analyses: List[Dict[str, Any]]
    plans: List[Dict[str, Any]]
    goals: List[Dict[str, Any]]


class TopUser(BaseModel):
    email: str
    analyses: int


class AdminStats(BaseModel):
    total_users: int
    total_analyses: int
    total_plans: int
    total_goals_completed: int
    avg_xp: int
    top_users: List[TopUser]


class MetricsPoint(BaseModel):
    day: str
    count: int


class AdminMetrics(BaseModel):
    range: int
    analysis_series: List[MetricsPoint]
    signup_series: List[MetricsPoint]


class AdminLogEntry(BaseModel):
    id: str
    admin_email: str
    action: str
    payload: Dict[str, Any] = {}
    created_at: str


class AdminLogListResponse(BaseModel):
    logs: List[AdminLogEntry]
