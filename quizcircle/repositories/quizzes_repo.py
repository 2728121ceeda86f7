from typing import Any, Dict, List, Optional

from quizcircle.core.errors import NotFoundError
from quizcircle.db.firestore import get_db
from quizcircle.repositories import members_repo
from quizcircle.repositories.base import (
    QUIZ_ATTEMPTS, QUIZZES, newest_first, now_utc, store_call, to_record, where_eq,
)

UNATTEMPTED = -1


def save_quiz(article_id: str, questions: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Store the quiz under the article's id; create() fails if one already exists."""
    quiz = {
        "article_id": article_id,
        "questions": questions,
        "quiz_score": UNATTEMPTED,
        "created_at": now_utc(),
    }
    with store_call("save quiz"):
        ref = get_db().collection(QUIZZES).document(article_id)
        ref.create(quiz)
    return {"id": ref.id, **quiz}


def get_quiz(article_id: str) -> Optional[Dict[str, Any]]:
    with store_call("get quiz"):
        rows = where_eq(get_db(), QUIZZES, "article_id", article_id)
    return rows[0] if rows else None


def get_quiz_by_id(quiz_id: str) -> Dict[str, Any]:
    with store_call("get quiz by id"):
        snap = get_db().collection(QUIZZES).document(quiz_id).get()
    if not snap.exists:
        raise NotFoundError("Quiz not found")
    return to_record(snap)


def save_quiz_attempt(quiz_id: str, member_id: str, answers: List[Optional[int]], score: int) -> Dict[str, Any]:
    """Insert the attempt and refresh the quiz's cached score in one batch.

    The batch commits both writes or neither, so the cached score cannot lag
    behind the attempt that produced it. Concurrent attempts on one quiz still
    race for the cached value: last commit wins.
    """
    now = now_utc()
    attempt = {
        "quiz_id": quiz_id,
        "member_id": member_id,
        "answers": answers,
        "score": score,
        "attempted_at": now,
        "created_at": now,
    }
    with store_call("save quiz attempt"):
        db = get_db()
        attempt_ref = db.collection(QUIZ_ATTEMPTS).document()
        batch = db.batch()
        batch.set(attempt_ref, attempt)
        batch.update(db.collection(QUIZZES).document(quiz_id), {"quiz_score": score})
        batch.commit()
    return {"id": attempt_ref.id, **attempt}


def has_completed_quiz_for_article(member_id: str, article_id: str) -> bool:
    quiz = get_quiz(article_id)
    if not quiz:
        return False
    with store_call("completion check"):
        q = (
            get_db().collection(QUIZ_ATTEMPTS)
            .where("quiz_id", "==", quiz["id"])
            .where("member_id", "==", member_id)
            .limit(1)
        )
        return bool(list(q.stream()))


def get_quiz_attempts_for_member(member_id: str) -> List[Dict[str, Any]]:
    with store_call("attempts for member"):
        db = get_db()
        attempts = where_eq(db, QUIZ_ATTEMPTS, "member_id", member_id)
        quizzes: Dict[str, Optional[Dict[str, Any]]] = {}
        for a in attempts:
            qid = a.get("quiz_id")
            if qid not in quizzes:
                snap = db.collection(QUIZZES).document(qid).get()
                quizzes[qid] = {"id": snap.id, "article_id": (snap.to_dict() or {}).get("article_id")} if snap.exists else None
            a["quiz"] = quizzes[qid]
    return attempts


def get_quiz_attempts_for_article(article_id: str) -> List[Dict[str, Any]]:
    """All attempts on the article's quiz, newest first, with member names."""
    quiz = get_quiz(article_id)
    if not quiz:
        return []
    with store_call("attempts for article"):
        attempts = where_eq(get_db(), QUIZ_ATTEMPTS, "quiz_id", quiz["id"])
    members: Dict[str, Optional[Dict[str, Any]]] = {}
    for a in attempts:
        mid = a.get("member_id")
        if mid not in members:
            m = members_repo.get_member(mid)
            members[mid] = {"id": m["id"], "name": m.get("name")} if m else None
        a["member"] = members[mid]
    return newest_first(attempts, "attempted_at")
