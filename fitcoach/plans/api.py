# -*- coding: utf-8 -*-
"""Workout plan endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .models import PlanCreateRequest, PlanItem, PlanListResponse
from .storage import create_plan, delete_plan, get_plan, list_plans

router = APIRouter(prefix="/api/plans", tags=["Plans"])


@router.post("", response_model=PlanItem, status_code=201, summary="Save a workout plan")
def create_plan_api(request: PlanCreateRequest, user: dict = Depends(get_current_user)):
    return PlanItem(**create_plan(user_id=user["id"], plan_name=request.plan_name, plan=request.plan))


@router.get("", response_model=PlanListResponse, summary="List saved workout plans")
def list_plans_api(user: dict = Depends(get_current_user)):
    return PlanListResponse(items=[PlanItem(**p) for p in list_plans(user["id"])])


@router.get("/{plan_id}", response_model=PlanItem, summary="Get one workout plan")
def get_plan_api(plan_id: str, user: dict = Depends(get_current_user)):
    return PlanItem(**get_plan(user_id=user["id"], plan_id=plan_id))


@router.delete("/{plan_id}", summary="Delete a workout plan")
def delete_plan_api(plan_id: str, user: dict = Depends(get_current_user)):
    delete_plan(user_id=user["id"], plan_id=plan_id)
    return {"status": "ok"}
