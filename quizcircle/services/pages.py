import logging
from typing import Any, Dict, Optional, Tuple

from quizcircle.core.errors import StoreError
from quizcircle.models.results import Found
from quizcircle.repositories import articles_repo, groups_repo, quizzes_repo
from quizcircle.services.demo_time import compute_due_date

logger = logging.getLogger("quizcircle.pages")

DEFAULT_TOPIC = "Write about something that interests you"
DEFAULT_ROTATION_PERIOD = 7
DEFAULT_MAX_WORD_COUNT = 1000


def group_page(group_id: str, member_id: str) -> Dict[str, Any]:
    landing = groups_repo.get_landing_page_data(group_id)
    articles = articles_repo.get_articles(group_id)
    attempts = quizzes_repo.get_quiz_attempts_for_member(member_id)

    completed = [a["quiz"]["article_id"] for a in attempts if a.get("quiz") and a["quiz"].get("article_id")]
    return {
        **landing,
        "articles": articles,
        "currentMemberId": member_id,
        "completedQuizArticleIds": completed,
    }


def submit_page(group_id: str, member_id: str) -> Dict[str, Any]:
    landing = groups_repo.get_landing_page_data(group_id)
    group = landing["group"]
    members = landing["members"]
    topics = landing["topics"]
    offset = int(group.get("demo_time_offset") or 0)

    current = next((m for m in members if m["id"] == member_id), None)
    latest_cycle = max([t.get("rotation_cycle") or 1 for t in topics] + [1])
    topic = next(
        (t for t in topics if t.get("member_id") == member_id and t.get("rotation_cycle") == latest_cycle),
        None,
    )
    index = next((i for i, m in enumerate(members) if m["id"] == member_id), 0)
    due = compute_due_date(group.get("rotation_period") or DEFAULT_ROTATION_PERIOD, index, offset)

    return {
        "group": group,
        "currentMember": current,
        "topic": topic["topic_text"] if topic else DEFAULT_TOPIC,
        "dueDate": due.isoformat(),
        "maxWordCount": group.get("max_word_count") or DEFAULT_MAX_WORD_COUNT,
        "memberId": member_id,
        "groupId": group_id,
        "demoTimeOffset": offset,
    }


def join_page(cookie_group_id: Optional[str]) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Landing data for the join page, plus a group id to store in the cookie if it changed."""
    if cookie_group_id:
        try:
            return groups_repo.get_landing_page_data(cookie_group_id), None
        except StoreError as e:
            # cookie points at a deleted or invalid group; fall through to the newest
            logger.info("join page: cookie group %s unusable (%s)", cookie_group_id, e)

    newest = groups_repo.get_latest_group()
    if not isinstance(newest, Found):
        return None, None
    group_id = newest.record["id"]
    try:
        return groups_repo.get_landing_page_data(group_id), group_id
    except StoreError as e:
        logger.error("join page: could not load group %s: %s", group_id, e)
        return None, group_id
