from typing import Any, Dict, List, Optional

from quizcircle.db.firestore import get_db
from quizcircle.repositories.base import MEMBERS, insert, oldest_first, store_call, to_record, where_eq


def add_member(group_id: str, name: str) -> Dict[str, Any]:
    with store_call("add member"):
        return insert(get_db(), MEMBERS, {"group_id": group_id, "name": name})

def list_members(group_id: str) -> List[Dict[str, Any]]:
    with store_call("list members"):
        rows = where_eq(get_db(), MEMBERS, "group_id", group_id)
    # join order decides each member's place in the writing queue
    return oldest_first(rows)

def get_member(member_id: str) -> Optional[Dict[str, Any]]:
    if not member_id:
        return None
    with store_call("get member"):
        snap = get_db().collection(MEMBERS).document(member_id).get()
    return to_record(snap) if snap.exists else None
