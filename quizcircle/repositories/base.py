import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError

from quizcircle.core.errors import StoreError

logger = logging.getLogger("quizcircle.store")

# Collections
GROUPS = "groups"
MEMBERS = "group_members"
TOPICS = "topics"
ROTATIONS = "rotations"
ARTICLES = "articles"
QUIZZES = "quizzes"
QUIZ_ATTEMPTS = "quiz_attempts"


@contextmanager
def store_call(action: str):
    """Translate client failures into StoreError, keeping the store's message."""
    try:
        yield
    except StoreError:
        raise
    except (GoogleAPIError, GoogleAuthError) as e:
        logger.error("%s failed: %s", action, e)
        raise StoreError(str(e)) from e


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_record(snap) -> Dict[str, Any]:
    data = snap.to_dict() or {}
    data["id"] = snap.id
    return data


def insert(db, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = db.collection(collection).document()
    row = {**data, "created_at": now_utc()}
    ref.set(row)
    return {"id": ref.id, **row}


def where_eq(db, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
    return [to_record(d) for d in db.collection(collection).where(field, "==", value).stream()]


EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def newest_first(rows: List[Dict[str, Any]], field: str = "created_at") -> List[Dict[str, Any]]:
    # sorted client-side so equality filters don't need composite indexes
    return sorted(rows, key=lambda r: r.get(field) or EPOCH, reverse=True)


def oldest_first(rows: List[Dict[str, Any]], field: str = "created_at") -> List[Dict[str, Any]]:
    return sorted(rows, key=lambda r: r.get(field) or EPOCH)
