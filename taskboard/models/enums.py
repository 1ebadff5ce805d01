from enum import Enum

class GlobalRole(str, Enum):
    admin = "admin"
    manager = "manager"
    user = "user"

class MemberRole(str, Enum):
    owner = "owner"
    manager = "manager"
    member = "member"

class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in-progress"
    review = "review"
    done = "done"

class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

def enum_values(enum_cls: type[Enum]) -> list[str]:
    # persist values ("in-progress"), not member names
    return [m.value for m in enum_cls]
