from typing import Any, Dict, List

from quizcircle.db.firestore import get_db
from quizcircle.repositories.base import ROTATIONS, insert, store_call, where_eq


def save_rotation(group_id: str, rotation_number: int, assignments: Dict[str, Any]) -> Dict[str, Any]:
    # assignments are opaque here; callers own their meaning
    with store_call("save rotation"):
        return insert(get_db(), ROTATIONS, {
            "group_id": group_id,
            "rotation_number": rotation_number,
            "assignments": assignments,
        })

def list_rotations(group_id: str) -> List[Dict[str, Any]]:
    with store_call("list rotations"):
        rows = where_eq(get_db(), ROTATIONS, "group_id", group_id)
    return sorted(rows, key=lambda r: r.get("rotation_number") or 0)
