import logging
from typing import Optional

from fastapi import APIRouter, Request, Response
from fastapi.responses import RedirectResponse

from quizcircle.core.errors import StoreError
from quizcircle.core.session import read_membership, set_membership_cookies
from quizcircle.models.schemas import GroupSettings
from quizcircle.services import pages

logger = logging.getLogger("quizcircle.pages")

router = APIRouter(tags=["Pages"])


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=307)


@router.get("/group")
def group_page(request: Request):
    group_id, member_id = read_membership(request)
    if not group_id or not member_id:
        return _redirect("/")
    try:
        return pages.group_page(group_id, member_id)
    except StoreError as e:
        logger.error("Error loading group data: %s", e)
        return _redirect("/")


@router.get("/submit")
def submit_page(request: Request):
    group_id, member_id = read_membership(request)
    if not group_id or not member_id:
        return _redirect("/")
    try:
        return pages.submit_page(group_id, member_id)
    except StoreError as e:
        logger.error("Error loading submit page data: %s", e)
        return _redirect("/group")


@router.get("/join-page")
def join_page(request: Request, response: Response):
    group_id, _ = read_membership(request)
    landing, new_group_id = pages.join_page(group_id)
    if new_group_id:
        set_membership_cookies(response, new_group_id)
    return {"landing": landing}


@router.get("/article")
def article_page(request: Request, id: Optional[str] = None):
    _, member_id = read_membership(request)
    return {"articleId": id, "memberId": member_id}


@router.get("/settings")
def settings_page():
    defaults = GroupSettings()
    return {"settings": {
        "rotationTime": defaults.rotation_period,
        "quizzes": defaults.quizzes_enabled,
        "maxWC": defaults.max_word_count,
        "anonymous": defaults.anonymous,
    }}
