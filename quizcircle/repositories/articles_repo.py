from typing import Any, Dict, List

from quizcircle.core.errors import NotFoundError
from quizcircle.db.firestore import get_db
from quizcircle.repositories import members_repo
from quizcircle.repositories.base import ARTICLES, insert, newest_first, store_call, to_record, where_eq


def count_words(content: str) -> int:
    return len(content.split())


def _with_author(article: Dict[str, Any]) -> Dict[str, Any]:
    member = members_repo.get_member(article.get("member_id"))
    article["author"] = {"id": member["id"], "name": member.get("name")} if member else None
    return article


def submit_article(group_id: str, member_id: str, rotation_number: int, content: str) -> Dict[str, Any]:
    with store_call("submit article"):
        return insert(get_db(), ARTICLES, {
            "group_id": group_id,
            "member_id": member_id,
            "rotation_number": rotation_number,
            "content": content,
            "word_count": count_words(content),
            "article_read": False,
        })


def get_articles(group_id: str) -> List[Dict[str, Any]]:
    with store_call("list articles"):
        rows = where_eq(get_db(), ARTICLES, "group_id", group_id)
    return newest_first(rows)


def get_article(article_id: str) -> Dict[str, Any]:
    with store_call("get article"):
        snap = get_db().collection(ARTICLES).document(article_id).get()
    if not snap.exists:
        raise NotFoundError("Article not found")
    return _with_author(to_record(snap))


def get_article_by_member(member_id: str) -> Dict[str, Any]:
    """Latest article written by member_id, with its author."""
    with store_call("get article by member"):
        rows = where_eq(get_db(), ARTICLES, "member_id", member_id)
    if not rows:
        raise NotFoundError("Article not found")
    return _with_author(newest_first(rows)[0])


def mark_article_read(article_id: str) -> Dict[str, Any]:
    with store_call("mark article read"):
        ref = get_db().collection(ARTICLES).document(article_id)
        ref.update({"article_read": True})
        return to_record(ref.get())
