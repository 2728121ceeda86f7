from fastapi import APIRouter, HTTPException, status

from quizcircle.core.errors import StoreError
from quizcircle.models.schemas import RotationIn
from quizcircle.repositories import rotations_repo

router = APIRouter(prefix="/api/rotations", tags=["Rotations"])


@router.post("", status_code=status.HTTP_201_CREATED)
def save_rotation(payload: RotationIn):
    try:
        return rotations_repo.save_rotation(payload.group_id, payload.rotation_number, payload.assignments)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
