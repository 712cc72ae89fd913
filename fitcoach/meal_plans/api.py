# -*- coding: utf-8 -*-
"""Meal plan endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .models import MealPlanCreateRequest, MealPlanItem, MealPlanListResponse
from .storage import create_meal_plan, delete_meal_plan, list_meal_plans

router = APIRouter(prefix="/api/meal-plans", tags=["Meal plans"])


@router.post("", response_model=MealPlanItem, status_code=201, summary="Save a meal plan")
def create_meal_plan_api(request: MealPlanCreateRequest, user: dict = Depends(get_current_user)):
    return MealPlanItem(**create_meal_plan(user_id=user["id"], plan_name=request.plan_name, plan=request.plan))


@router.get("", response_model=MealPlanListResponse, summary="List saved meal plans, newest first")
def list_meal_plans_api(user: dict = Depends(get_current_user)):
    return MealPlanListResponse(items=[MealPlanItem(**p) for p in list_meal_plans(user["id"])])


@router.delete("/{meal_plan_id}", summary="Delete a meal plan")
def delete_meal_plan_api(meal_plan_id: str, user: dict = Depends(get_current_user)):
    delete_meal_plan(user_id=user["id"], meal_plan_id=meal_plan_id)
    return {"status": "ok"}
