from fastapi import APIRouter, HTTPException, status

from quizcircle.core.errors import StoreError
from quizcircle.models.schemas import TopicIn
from quizcircle.repositories import topics_repo

router = APIRouter(prefix="/api/topics", tags=["Topics"])


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_topic(payload: TopicIn):
    try:
        return topics_repo.submit_topic(payload.group_id, payload.member_id, payload.topic_text, payload.rotation_cycle)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
