# -*- coding: utf-8 -*-
"""Goals — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .models import Goal, GoalCreateRequest, GoalListResponse, GoalUpdateRequest
from .storage import create_goal, delete_goal, list_goals, update_goal

router = APIRouter(prefix="/api/goals", tags=["Goals"])


@router.get("", response_model=GoalListResponse, summary="List goals")
def list_goals_api(user: dict = Depends(get_current_user)):
    return GoalListResponse(items=[Goal(**g) for g in list_goals(user["id"])])


@router.post("", response_model=Goal, status_code=201, summary="Create a goal")
def create_goal_api(request: GoalCreateRequest, user: dict = Depends(get_current_user)):
    return Goal(**create_goal(user_id=user["id"], text=request.text))


@router.put("/{goal_id}", response_model=Goal, summary="Edit or complete a goal")
def update_goal_api(goal_id: str, request: GoalUpdateRequest, user: dict = Depends(get_current_user)):
    return Goal(**update_goal(user_id=user["id"], goal_id=goal_id, text=request.text, completed=request.completed))


@router.delete("/{goal_id}", summary="Delete a goal")
def delete_goal_api(goal_id: str, user: dict = Depends(get_current_user)):
    delete_goal(user_id=user["id"], goal_id=goal_id)
    return {"status": "ok"}
