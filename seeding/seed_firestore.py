from typing import Any, Dict, List, Optional

from quizcircle.models.schemas import GroupSettings
from quizcircle.repositories import groups_repo, members_repo, rotations_repo, topics_repo

DEMO_MEMBERS = [
    ("Alice", "A place that changed how you think"),
    ("Bob", "The best meal you ever cooked"),
    ("Charlie", "A skill you taught yourself"),
]


def seed_demo_group(members: Optional[List[tuple]] = None, **overrides: Any) -> Dict[str, Any]:
    """Create a demo group with members, first-cycle topics and rotation 1.

    Rotation 1 assigns each member the topic of the next member in join order.
    """
    members = members or DEMO_MEMBERS
    group = groups_repo.create_group(GroupSettings(**overrides).model_dump())

    created = []
    for name, topic_text in members:
        member = members_repo.add_member(group["id"], name)
        topic = topics_repo.submit_topic(group["id"], member["id"], topic_text, 1)
        created.append((member, topic))

    assignments = {
        member["id"]: created[(i + 1) % len(created)][1]["id"]
        for i, (member, _) in enumerate(created)
    }
    rotation = rotations_repo.save_rotation(group["id"], 1, assignments)

    print(f"Seeded group {group['id']} (invite code {group['invite_code']}) with {len(created)} members")
    return {"group": group, "members": [m for m, _ in created], "rotation": rotation}


if __name__ == "__main__":
    seed_demo_group()
