import logging
import secrets
import string
from typing import Any, Dict

from google.cloud import firestore

from quizcircle.core.errors import NotFoundError, StoreError
from quizcircle.db.firestore import get_db
from quizcircle.models.results import Found, Lookup, NotFound, StoreFailure
from quizcircle.repositories import members_repo, rotations_repo, topics_repo
from quizcircle.repositories.base import GROUPS, insert, store_call, to_record

logger = logging.getLogger("quizcircle.groups")

INVITE_ALPHABET = string.digits + string.ascii_lowercase
INVITE_LENGTH = 6
INVITE_ATTEMPTS = 5


def new_invite_code() -> str:
    return "".join(secrets.choice(INVITE_ALPHABET) for _ in range(INVITE_LENGTH))


def _invite_taken(db, code: str) -> bool:
    return bool(list(db.collection(GROUPS).where("invite_code", "==", code).limit(1).stream()))


def create_group(group_settings: Dict[str, Any]) -> Dict[str, Any]:
    with store_call("create group"):
        db = get_db()
        for _ in range(INVITE_ATTEMPTS):
            code = new_invite_code()
            if not _invite_taken(db, code):
                break
        else:
            raise StoreError("Could not allocate a unique invite code")
        group = insert(db, GROUPS, {**group_settings, "invite_code": code, "demo_time_offset": 0})
    logger.info("Created group %s (invite %s)", group["id"], code)
    return group


def get_group(group_id: str) -> Dict[str, Any]:
    with store_call("get group"):
        snap = get_db().collection(GROUPS).document(group_id).get()
    if not snap.exists:
        raise NotFoundError("Group not found")
    return to_record(snap)


def join_group(invite_code: str, name: str) -> Dict[str, Any]:
    with store_call("join group"):
        docs = list(get_db().collection(GROUPS).where("invite_code", "==", invite_code).limit(1).stream())
        if not docs:
            raise NotFoundError("Group not found")
        group = to_record(docs[0])
        member = members_repo.add_member(group["id"], name)
    return {"group": group, "member": member}


def get_landing_page_data(group_id: str) -> Dict[str, Any]:
    """Group, members, topics and rotations, fetched as four separate reads."""
    group = get_group(group_id)
    members = members_repo.list_members(group_id)
    topics = topics_repo.list_topics(group_id)
    rotations = rotations_repo.list_rotations(group_id)
    return {"group": group, "members": members, "topics": topics, "rotations": rotations}


def _first_by_created(direction: str) -> Lookup:
    try:
        with store_call("ordered group lookup"):
            q = get_db().collection(GROUPS).order_by("created_at", direction=direction).limit(1)
            docs = list(q.stream())
    except StoreError as e:
        return StoreFailure(str(e))
    if not docs:
        return NotFound()
    return Found(to_record(docs[0]))


def get_latest_group() -> Lookup:
    return _first_by_created(firestore.Query.DESCENDING)


def get_first_group() -> Lookup:
    return _first_by_created(firestore.Query.ASCENDING)


def get_group_by_invite(invite_code: str) -> Lookup:
    try:
        with store_call("group lookup by invite"):
            docs = list(get_db().collection(GROUPS).where("invite_code", "==", invite_code).limit(1).stream())
    except StoreError as e:
        return StoreFailure(str(e))
    if not docs:
        return NotFound()
    return Found(to_record(docs[0]))


# ------------------------------------------------------------------------------
# Demo time offset (milliseconds added to real time, per group)
# ------------------------------------------------------------------------------

def get_group_time_offset(group_id: str) -> int:
    return int(get_group(group_id).get("demo_time_offset") or 0)


def set_group_time_offset(group_id: str, offset_ms: int) -> Dict[str, Any]:
    with store_call("set time offset"):
        ref = get_db().collection(GROUPS).document(group_id)
        ref.update({"demo_time_offset": offset_ms})
        return to_record(ref.get())


def skip_group_time(group_id: str, skip_ms: int) -> Dict[str, Any]:
    """Add skip_ms to the stored offset.

    Read-then-write: two concurrent skips on the same group can lose one of
    the increments. Acceptable for a demo control used by one small group.
    """
    current = get_group_time_offset(group_id)
    return set_group_time_offset(group_id, current + skip_ms)


def reset_group_time_offset(group_id: str) -> Dict[str, Any]:
    return set_group_time_offset(group_id, 0)
