from typing import Optional, Tuple

from fastapi import Request, Response

from quizcircle.core.config import settings

MEMBER_COOKIE = "member_id"
GROUP_COOKIE = "group_id"


def set_membership_cookies(response: Response, group_id: str, member_id: Optional[str] = None) -> None:
    response.set_cookie(GROUP_COOKIE, group_id, path="/", max_age=settings.COOKIE_MAX_AGE)
    if member_id:
        response.set_cookie(MEMBER_COOKIE, member_id, path="/", max_age=settings.COOKIE_MAX_AGE)


def read_membership(request: Request) -> Tuple[Optional[str], Optional[str]]:
    """(group_id, member_id) from the cookies; either may be None."""
    return request.cookies.get(GROUP_COOKIE), request.cookies.get(MEMBER_COOKIE)
