"""Access evaluator for the project -> board -> task hierarchy.

Every check follows the same order:

1. no identity -> unauthenticated, before any lookup
2. resolve the target and walk up to its project; any missing link -> not_found
3. admin -> allow
4. project owner -> allow
5. no membership row -> deny
6. task creator/assignee -> allow, for actions that permit it, whatever the
   membership role
7. otherwise allow if the membership role is in the action's role set

Store failures become ``evaluation_failed``; nothing here ever turns an
error into an allow.
"""

import logging
import uuid
from collections.abc import Callable

from taskboard.access import decisions
from taskboard.access.decisions import Chain, Decision, ResourceKind
from taskboard.access.errors import NotFound
from taskboard.access.identity import Identity
from taskboard.access.perms import PROJECT_CREATORS, Rule, rule_for
from taskboard.access.store import ResourceStore, StoreError
from taskboard.models.enums import MemberRole

logger = logging.getLogger(__name__)

class AccessEvaluator:
    def __init__(self, store: ResourceStore):
        self.store = store

    def check_project_create(self, identity: Identity | None) -> Decision:
        if identity is None:
            return decisions.unauthenticated()
        if identity.role not in PROJECT_CREATORS:
            return decisions.deny(
                "insufficient permissions to create projects",
                user_role=identity.role.value,
            )
        return decisions.allow()

    def check_project(self, identity: Identity | None, project_id: uuid.UUID, action: str) -> Decision:
        rule = rule_for(action, ResourceKind.project)
        return self._evaluate(identity, action, rule, lambda: self._resolve_project(project_id))

    def check_board(self, identity: Identity | None, board_id: uuid.UUID, action: str) -> Decision:
        rule = rule_for(action, ResourceKind.board)
        return self._evaluate(identity, action, rule, lambda: self._resolve_board(board_id))

    def check_task(self, identity: Identity | None, task_id: uuid.UUID, action: str) -> Decision:
        rule = rule_for(action, ResourceKind.task)
        return self._evaluate(identity, action, rule, lambda: self._resolve_task(task_id))

    # chain resolution

    def _project(self, project_id: uuid.UUID):
        project = self.store.get_project(project_id)
        if project is None:
            raise NotFound(ResourceKind.project.value)
        return project

    def _board(self, board_id: uuid.UUID):
        board = self.store.get_board(board_id)
        if board is None:
            raise NotFound(ResourceKind.board.value)
        return board

    def _resolve_project(self, project_id: uuid.UUID) -> Chain:
        return Chain(project=self._project(project_id))

    def _resolve_board(self, board_id: uuid.UUID) -> Chain:
        board = self._board(board_id)
        return Chain(project=self._project(board.project_id), board=board)

    def _resolve_task(self, task_id: uuid.UUID) -> Chain:
        task = self.store.get_task(task_id)
        if task is None:
            raise NotFound(ResourceKind.task.value)
        board = self._board(task.board_id)
        return Chain(project=self._project(board.project_id), board=board, task=task)

    # decision

    def _evaluate(
        self,
        identity: Identity | None,
        action: str,
        rule: Rule,
        resolve: Callable[[], Chain],
    ) -> Decision:
        if identity is None:
            return decisions.unauthenticated()

        try:
            chain = resolve()
            decision = self._decide(identity, rule, chain)
        except NotFound as e:
            return decisions.not_found(ResourceKind(e.resource_kind))
        except StoreError as e:
            logger.exception("access check %s failed for user %s", action, identity.user_id)
            return decisions.failed(e)

        if not decision.allowed:
            logger.debug(
                "denied %s for user %s on project %s: %s",
                action,
                identity.user_id,
                chain.project.id,
                decision.reason,
            )
        return decision

    def _decide(self, identity: Identity, rule: Rule, chain: Chain) -> Decision:
        if identity.is_admin:
            return decisions.allow(chain)

        if chain.project.owner_id == identity.user_id:
            return decisions.allow(chain)

        members = self.store.get_project_members(chain.project.id)
        membership = next((m for m in members if m.user_id == identity.user_id), None)
        if membership is None:
            return decisions.deny("not a project member", chain=chain)

        if rule.task_party and chain.task is not None:
            if identity.user_id in (chain.task.created_by_id, chain.task.assignee_id):
                return decisions.allow(chain, membership=membership)

        role = MemberRole(membership.role)
        if role in rule.roles:
            return decisions.allow(chain, membership=membership)

        if rule.task_party:
            reason = "only the task creator or assignee may modify this task"
        elif not rule.roles:
            reason = "only the project owner or an admin may do this"
        else:
            reason = "insufficient project role"
        return decisions.deny(
            reason,
            chain=chain,
            required_roles=frozenset(r.value for r in rule.roles),
            user_role=role.value,
        )
