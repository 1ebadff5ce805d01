from dataclasses import dataclass

from taskboard.access.decisions import ResourceKind
from taskboard.models.enums import GlobalRole, MemberRole

@dataclass(frozen=True)
class Rule:
    # the resource the action is checked against
    target: ResourceKind
    # member roles allowed, on top of admins and the project owner
    roles: frozenset[MemberRole]
    # task creator/assignee is allowed before membership is consulted
    task_party: bool = False

ANY_MEMBER = frozenset(MemberRole)
MANAGERS = frozenset({MemberRole.owner, MemberRole.manager})
NOBODY: frozenset[MemberRole] = frozenset()

PROJECT = ResourceKind.project
BOARD = ResourceKind.board
TASK = ResourceKind.task

PERMS: dict[str, Rule] = {
    "projects:read": Rule(PROJECT, ANY_MEMBER),
    "projects:update": Rule(PROJECT, NOBODY),
    "projects:delete": Rule(PROJECT, NOBODY),

    "members:read": Rule(PROJECT, ANY_MEMBER),
    "members:add": Rule(PROJECT, NOBODY),
    "members:remove": Rule(PROJECT, NOBODY),

    "boards:create": Rule(PROJECT, ANY_MEMBER),
    "boards:read": Rule(BOARD, ANY_MEMBER),
    "boards:update": Rule(BOARD, MANAGERS),
    "boards:delete": Rule(BOARD, MANAGERS),

    "tasks:create": Rule(BOARD, ANY_MEMBER),
    "tasks:read": Rule(TASK, ANY_MEMBER),
    "tasks:update": Rule(TASK, MANAGERS, task_party=True),
    "tasks:delete": Rule(TASK, MANAGERS, task_party=True),

    "comments:read": Rule(TASK, ANY_MEMBER),
    "comments:create": Rule(TASK, ANY_MEMBER),
}

# every authenticated account may start a project
PROJECT_CREATORS = frozenset({GlobalRole.admin, GlobalRole.manager, GlobalRole.user})

def rule_for(action: str, target: ResourceKind) -> Rule:
    rule = PERMS.get(action)
    if rule is None:
        raise RuntimeError(f"unknown permission action: {action}")
    if rule.target is not target:
        raise RuntimeError(f"action {action} targets a {rule.target.value}, not a {target.value}")
    return rule
