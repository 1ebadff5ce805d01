"""Unit tests for the access evaluator against an in-memory resource store.

Rows are SimpleNamespace objects standing in for ORM instances; the
evaluator only reads attributes.
"""

import logging
import uuid
from types import SimpleNamespace

import pytest

from taskboard.access.decisions import Outcome, ResourceKind
from taskboard.access.errors import EvaluationFailed, Forbidden, NotFound, Unauthenticated
from taskboard.access.evaluator import AccessEvaluator
from taskboard.access.identity import Identity
from taskboard.access.perms import PERMS
from taskboard.access.store import StoreError
from taskboard.models.enums import GlobalRole, MemberRole

class FakeStore:
    def __init__(self):
        self.projects: dict = {}
        self.boards: dict = {}
        self.tasks: dict = {}
        self.members: dict = {}
        self.calls: list[tuple[str, uuid.UUID]] = []
        self.broken = False

    def _read(self, kind: str, key: uuid.UUID):
        self.calls.append((kind, key))
        if self.broken:
            raise StoreError(f"{kind} lookup failed")

    def get_project(self, project_id):
        self._read("project", project_id)
        return self.projects.get(project_id)

    def get_board(self, board_id):
        self._read("board", board_id)
        return self.boards.get(board_id)

    def get_task(self, task_id):
        self._read("task", task_id)
        return self.tasks.get(task_id)

    def get_project_members(self, project_id):
        self._read("members", project_id)
        return list(self.members.get(project_id, []))

    # builders

    def add_project(self, owner_id):
        p = SimpleNamespace(id=uuid.uuid4(), owner_id=owner_id)
        self.projects[p.id] = p
        return p

    def add_board(self, project_id):
        b = SimpleNamespace(id=uuid.uuid4(), project_id=project_id)
        self.boards[b.id] = b
        return b

    def add_task(self, board_id, created_by_id, assignee_id=None):
        t = SimpleNamespace(id=uuid.uuid4(), board_id=board_id, created_by_id=created_by_id, assignee_id=assignee_id)
        self.tasks[t.id] = t
        return t

    def add_member(self, project_id, user_id, role: MemberRole):
        self.members.setdefault(project_id, []).append(
            SimpleNamespace(project_id=project_id, user_id=user_id, role=role)
        )

def _user(role: GlobalRole = GlobalRole.user) -> Identity:
    return Identity(user_id=uuid.uuid4(), role=role)

@pytest.fixture()
def world():
    store = FakeStore()
    w = SimpleNamespace(store=store, evaluator=AccessEvaluator(store))

    w.owner = _user()
    w.admin = _user(GlobalRole.admin)
    w.manager = _user(GlobalRole.manager)
    w.member = _user()
    w.co_owner = _user()
    w.outsider = _user(GlobalRole.manager)

    w.project = store.add_project(w.owner.user_id)
    w.board = store.add_board(w.project.id)
    # a task nobody but the owner is attached to
    w.task = store.add_task(w.board.id, created_by_id=w.owner.user_id)

    store.add_member(w.project.id, w.manager.user_id, MemberRole.manager)
    store.add_member(w.project.id, w.member.user_id, MemberRole.member)
    store.add_member(w.project.id, w.co_owner.user_id, MemberRole.owner)
    return w

def check(w, identity, action, *, project=None, board=None, task=None):
    target = PERMS[action].target
    if target is ResourceKind.project:
        return w.evaluator.check_project(identity, (project or w.project).id, action)
    if target is ResourceKind.board:
        return w.evaluator.check_board(identity, (board or w.board).id, action)
    return w.evaluator.check_task(identity, (task or w.task).id, action)

ALL_ACTIONS = sorted(PERMS)

MEMBER_ALLOWED = {
    "projects:read",
    "members:read",
    "boards:create",
    "boards:read",
    "tasks:create",
    "tasks:read",
    "comments:read",
    "comments:create",
}
MANAGER_ALLOWED = MEMBER_ALLOWED | {"boards:update", "boards:delete", "tasks:update", "tasks:delete"}

@pytest.mark.parametrize("action", ALL_ACTIONS)
def test_owner_and_admin_are_allowed_everything(world, action):
    assert check(world, world.owner, action).outcome is Outcome.allow
    assert check(world, world.admin, action).outcome is Outcome.allow

@pytest.mark.parametrize("action", ALL_ACTIONS)
def test_admin_fast_path_needs_no_membership(world, action):
    check(world, world.admin, action)
    assert not [c for c in world.store.calls if c[0] == "members"]

@pytest.mark.parametrize("action", ALL_ACTIONS)
def test_outsider_is_never_allowed(world, action):
    # a global manager role grants nothing inside someone else's project
    d = check(world, world.outsider, action)
    assert d.outcome is Outcome.deny
    assert d.reason == "not a project member"

@pytest.mark.parametrize("action", ALL_ACTIONS)
def test_member_role_matrix(world, action):
    expected = Outcome.allow if action in MEMBER_ALLOWED else Outcome.deny
    assert check(world, world.member, action).outcome is expected

@pytest.mark.parametrize("action", ALL_ACTIONS)
def test_manager_and_owner_member_roles(world, action):
    expected = Outcome.allow if action in MANAGER_ALLOWED else Outcome.deny
    assert check(world, world.manager, action).outcome is expected
    assert check(world, world.co_owner, action).outcome is expected

def test_denial_carries_required_roles_and_actual_role(world):
    d = check(world, world.member, "boards:update")
    assert d.outcome is Outcome.deny
    assert d.required_roles == {"owner", "manager"}
    assert d.user_role == "member"

    with pytest.raises(Forbidden) as exc:
        d.raise_for_outcome()
    assert exc.value.status_code == 403
    assert exc.value.detail["required_roles"] == ["manager", "owner"]
    assert exc.value.detail["user_role"] == "member"

def test_member_cannot_modify_someone_elses_task(world):
    d = check(world, world.member, "tasks:update")
    assert d.outcome is Outcome.deny
    assert "creator or assignee" in d.reason

@pytest.mark.parametrize("action", ["tasks:update", "tasks:delete"])
def test_task_creator_and_assignee_may_modify(world, action):
    created = world.store.add_task(world.board.id, created_by_id=world.member.user_id)
    assigned = world.store.add_task(
        world.board.id, created_by_id=world.owner.user_id, assignee_id=world.member.user_id
    )

    assert check(world, world.member, action, task=created).outcome is Outcome.allow
    assert check(world, world.member, action, task=assigned).outcome is Outcome.allow

def test_task_creator_with_member_role_bypasses_role_check(world):
    created = world.store.add_task(world.board.id, created_by_id=world.member.user_id)
    world.store.calls.clear()

    d = check(world, world.member, "tasks:update", task=created)

    assert d.outcome is Outcome.allow
    assert d.membership.role is MemberRole.member
    assert [c[0] for c in world.store.calls] == ["task", "board", "project", "members"]

@pytest.mark.parametrize("action", ["tasks:read", "tasks:update", "tasks:delete"])
def test_non_member_assignee_is_denied(world, action):
    # assignee who was never added to the project
    stranger = _user()
    t = world.store.add_task(world.board.id, created_by_id=world.owner.user_id, assignee_id=stranger.user_id)

    d = check(world, stranger, action, task=t)
    assert d.outcome is Outcome.deny
    assert d.reason == "not a project member"

def test_task_party_does_not_extend_to_board(world):
    created = world.store.add_task(world.board.id, created_by_id=world.member.user_id)
    assert check(world, world.member, "tasks:update", task=created).outcome is Outcome.allow
    assert check(world, world.member, "boards:delete").outcome is Outcome.deny

def test_task_with_deleted_board_is_not_found(world):
    orphan = world.store.add_task(uuid.uuid4(), created_by_id=world.member.user_id)

    for identity in (world.admin, world.owner, world.member, world.outsider):
        d = check(world, identity, "tasks:update", task=orphan)
        assert d.outcome is Outcome.not_found
        assert d.resource_kind is ResourceKind.board

def test_board_with_deleted_project_is_not_found(world):
    orphan = world.store.add_board(uuid.uuid4())
    d = check(world, world.admin, "boards:read", board=orphan)
    assert d.outcome is Outcome.not_found
    assert d.resource_kind is ResourceKind.project

def test_unknown_ids_are_not_found(world):
    missing = SimpleNamespace(id=uuid.uuid4())
    assert check(world, world.owner, "projects:read", project=missing).resource_kind is ResourceKind.project
    assert check(world, world.owner, "boards:read", board=missing).resource_kind is ResourceKind.board
    assert check(world, world.owner, "tasks:read", task=missing).resource_kind is ResourceKind.task

    with pytest.raises(NotFound) as exc:
        check(world, world.owner, "tasks:read", task=missing).raise_for_outcome()
    assert exc.value.status_code == 404
    assert exc.value.detail == "task not found"

@pytest.mark.parametrize("action", ALL_ACTIONS)
def test_unauthenticated_before_any_lookup(world, action):
    d = check(world, None, action)
    assert d.outcome is Outcome.unauthenticated
    assert world.store.calls == []

    with pytest.raises(Unauthenticated) as exc:
        d.raise_for_outcome()
    assert exc.value.status_code == 401

def test_store_failure_is_evaluation_failed(world, caplog):
    world.store.broken = True

    with caplog.at_level(logging.ERROR, logger="taskboard.access.evaluator"):
        d = check(world, world.admin, "boards:delete")

    assert d.outcome is Outcome.evaluation_failed
    assert isinstance(d.cause, StoreError)
    assert any("boards:delete" in r.getMessage() for r in caplog.records)

    with pytest.raises(EvaluationFailed) as exc:
        d.raise_for_outcome()
    assert exc.value.status_code == 500
    # internals stay out of the client-facing detail
    assert exc.value.detail == "failed to verify access"

def test_membership_lookup_failure_is_evaluation_failed(world):
    class MembersDown(FakeStore):
        def get_project_members(self, project_id):
            raise StoreError("membership lookup failed")

    store = MembersDown()
    project = store.add_project(uuid.uuid4())
    d = AccessEvaluator(store).check_project(world.member, project.id, "projects:read")
    assert d.outcome is Outcome.evaluation_failed

def test_unknown_action_is_a_programming_error(world):
    with pytest.raises(RuntimeError):
        world.evaluator.check_project(world.owner, world.project.id, "projects:archive")

def test_action_checked_against_wrong_kind(world):
    with pytest.raises(RuntimeError):
        world.evaluator.check_project(world.owner, world.project.id, "tasks:update")

@pytest.mark.parametrize("role", list(GlobalRole))
def test_any_authenticated_identity_may_create_projects(role):
    evaluator = AccessEvaluator(FakeStore())
    assert evaluator.check_project_create(_user(role)).outcome is Outcome.allow
    assert evaluator.check_project_create(None).outcome is Outcome.unauthenticated

def test_allowed_decision_exposes_resolved_chain(world):
    d = check(world, world.member, "tasks:read")
    assert d.raise_for_outcome() is d
    assert d.task is world.task
    assert d.board is world.board
    assert d.project is world.project
    assert d.membership.role is MemberRole.member
