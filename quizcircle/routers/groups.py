import logging

from fastapi import APIRouter, HTTPException, Response, status
from fastapi.responses import RedirectResponse

from quizcircle.core.errors import StoreError
from quizcircle.core.session import set_membership_cookies
from quizcircle.models.results import Found, StoreFailure
from quizcircle.models.schemas import GroupSettings, JoinGroupIn
from quizcircle.repositories import groups_repo, topics_repo

logger = logging.getLogger("quizcircle.groups")

router = APIRouter(prefix="/api/groups", tags=["Groups"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_group(payload: GroupSettings):
    try:
        return groups_repo.create_group(payload.model_dump())
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/goto/{invite_code}")
def goto_group(invite_code: str):
    invite_code = invite_code.strip()
    if not invite_code:
        raise HTTPException(status_code=400, detail="Missing invite code")

    found = groups_repo.get_group_by_invite(invite_code)
    if isinstance(found, StoreFailure):
        logger.warning("invite lookup failed for %s: %s", invite_code, found.error)
    if not isinstance(found, Found):
        raise HTTPException(status_code=404, detail="Group not found")

    redirect = RedirectResponse(url="/join-page", status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    set_membership_cookies(redirect, found.record["id"])
    return redirect


@router.get("/{group_id}")
def get_group(group_id: str):
    try:
        return groups_repo.get_landing_page_data(group_id)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{group_id}/join", status_code=status.HTTP_201_CREATED)
def join_group(group_id: str, payload: JoinGroupIn, response: Response):
    # the invite code, not the path id, decides which group is joined
    try:
        result = groups_repo.join_group(payload.invite_code, payload.name)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))

    set_membership_cookies(response, result["group"]["id"], result["member"]["id"])

    if payload.topic:
        try:
            topics_repo.submit_topic(result["group"]["id"], result["member"]["id"], payload.topic, 1)
        except StoreError as e:
            logger.error("Failed to create topic on join: %s", e)

    return result
