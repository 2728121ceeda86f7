from typing import Any, Dict, List

from quizcircle.db.firestore import get_db
from quizcircle.repositories.base import TOPICS, insert, store_call, where_eq


def submit_topic(group_id: str, member_id: str, topic_text: str, rotation_cycle: int) -> Dict[str, Any]:
    with store_call("submit topic"):
        return insert(get_db(), TOPICS, {
            "group_id": group_id,
            "member_id": member_id,
            "topic_text": topic_text,
            "rotation_cycle": rotation_cycle,
        })

def list_topics(group_id: str) -> List[Dict[str, Any]]:
    with store_call("list topics"):
        return where_eq(get_db(), TOPICS, "group_id", group_id)
