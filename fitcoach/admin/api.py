# -*- coding: utf-8 -*-
"""Admin console — API endpoints (admin allow-list only)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.api import user_public
from ..auth.models import UserPublic
from ..auth.security import require_admin
from ..auth.storage import SUBSCRIPTION_TIERS, get_user_by_id, set_subscription_tier, set_subscription_tier_bulk
from ..tools.storage import reset_tool_states
from .models import (
    AdminLogEntry,
    AdminLogListResponse,
    AdminMetrics,
    AdminStats,
    AdminUser,
    AdminUserListResponse,
    BulkRequest,
    BulkResponse,
    SubscriptionUpdateRequest,
    UserDetails,
)
from .storage import (
    clamp_metrics_range,
    compute_admin_stats,
    compute_metrics,
    get_user_details,
    list_admin_logs,
    list_users_with_counts,
    record_admin_log,
)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/users", response_model=AdminUserListResponse, summary="All users with activity counts")
def users(admin: dict = Depends(require_admin)):
    return AdminUserListResponse(users=[AdminUser(**u) for u in list_users_with_counts()])


@router.post("/users/bulk", response_model=BulkResponse, summary="Bulk tier change, tool reset or notification")
def bulk(request: BulkRequest, admin: dict = Depends(require_admin)):
    if not request.user_ids:
        raise HTTPException(status_code=400, detail="No valid user ids")

    if request.action == "setTier":
        if request.tier not in SUBSCRIPTION_TIERS:
            raise HTTPException(status_code=400, detail="Invalid tier for bulk update")
        affected = set_subscription_tier_bulk(request.user_ids, request.tier)
        message = "Subscriptions updated."
    elif request.action == "resetTools":
        affected = reset_tool_states(request.user_ids)
        message = "Tool states reset."
    else:
        affected = len(request.user_ids)
        message = "Notification logged."

    payload = {"user_ids": request.user_ids}
    if request.tier is not None:
        payload["tier"] = request.tier
    if request.message:
        payload["message"] = request.message
    record_admin_log(admin["email"], f"bulk_{request.action}", payload)
    return BulkResponse(message=message, affected=affected)


@router.put("/users/{user_id}/subscription", response_model=UserPublic, summary="Change one user's tier")
def update_subscription(user_id: str, request: SubscriptionUpdateRequest, admin: dict = Depends(require_admin)):
    row = set_subscription_tier(user_id, request.tier)
    record_admin_log(admin["email"], "update_tier", {"target_user_id": user_id, "tier": request.tier})
    return user_public(row)


@router.get("/users/{user_id}/details", response_model=UserDetails, summary="Latest activity of one user")
def user_details(user_id: str, admin: dict = Depends(require_admin)):
    if not get_user_by_id(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return UserDetails(**get_user_details(user_id))


@router.get("/stats", response_model=AdminStats, summary="Platform totals and average XP")
def stats(admin: dict = Depends(require_admin)):
    return AdminStats(**compute_admin_stats())


@router.get("/metrics", response_model=AdminMetrics, summary="Daily analyses and signups")
def metrics(range: Optional[int] = Query(default=None, description="days, clamped to 7..90"), admin: dict = Depends(require_admin)):
    return AdminMetrics(**compute_metrics(clamp_metrics_range(range)))


@router.get("/logs", response_model=AdminLogListResponse, summary="Latest admin actions")
def logs(admin: dict = Depends(require_admin)):
    return AdminLogListResponse(logs=[AdminLogEntry(**entry) for entry in list_admin_logs()])
