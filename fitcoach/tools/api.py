# -*- coding: utf-8 -*-
"""Tools — API endpoints (hydration, stopwatch, boxing timer)."""

from __future__ import annotations

import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from ..auth.security import get_current_user
from .models import ToolStateSaveResponse
from .storage import read_tool_state, write_tool_state

router = APIRouter(prefix="/api/tools", tags=["Tools"])


@router.get("/state", summary="Get tool state with running timers fast-forwarded")
def get_state(user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    return read_tool_state(user["id"]).to_wire()


@router.put("/state", response_model=ToolStateSaveResponse, summary="Replace tool state")
async def put_state(request: Request, user: dict = Depends(get_current_user)):
    # Any body is accepted; unreadable JSON counts as an empty document.
    raw = await request.body()
    try:
        payload: Any = json.loads(raw) if raw else None
    except ValueError:
        payload = None
    state = await run_in_threadpool(write_tool_state, user["id"], payload)
    return ToolStateSaveResponse(message="Tool state saved.", state=state.to_wire())
