from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from quizcircle.core.errors import StoreError
from quizcircle.models.schemas import DemoTimeIn
from quizcircle.repositories import groups_repo
from quizcircle.services.demo_time import format_time_offset, skip_to_ms

router = APIRouter(prefix="/api/demo-time", tags=["Demo time"])


@router.get("")
def get_offset(groupId: Optional[str] = Query(None)):
    if not groupId:
        raise HTTPException(status_code=400, detail="groupId query parameter required")
    try:
        offset = groups_repo.get_group_time_offset(groupId)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"offset": offset, "label": format_time_offset(offset)}


@router.post("")
def skip_time(payload: DemoTimeIn):
    if not payload.groupId:
        raise HTTPException(status_code=400, detail="groupId is required")

    try:
        if payload.reset:
            groups_repo.reset_group_time_offset(payload.groupId)
            return {"offset": 0, "message": "Time reset to real time"}

        skip_ms = skip_to_ms(payload.skipHours, payload.skipDays)
        if skip_ms == 0:
            raise HTTPException(status_code=400, detail="Specify skipHours, skipDays, or reset")

        group = groups_repo.skip_group_time(payload.groupId, skip_ms)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))

    hours, days = payload.skipHours or 0, payload.skipDays or 0
    return {
        "offset": group["demo_time_offset"],
        "message": f"Time skipped forward by {hours:g} hours and {days:g} days",
    }
