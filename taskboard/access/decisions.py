"""Access decisions.

A ``Decision`` is the only thing the evaluator returns. Callers look at
``outcome`` or ``allowed``, or call ``raise_for_outcome``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from taskboard.access.errors import EvaluationFailed, Forbidden, NotFound, Unauthenticated

class Outcome(str, Enum):
    allow = "allow"
    deny = "deny"
    not_found = "not_found"
    unauthenticated = "unauthenticated"
    evaluation_failed = "evaluation_failed"

class ResourceKind(str, Enum):
    project = "project"
    board = "board"
    task = "task"

@dataclass(frozen=True)
class Chain:
    """A resource and its ancestors, resolved up to the owning project."""

    project: Any
    board: Any = None
    task: Any = None

@dataclass(frozen=True)
class Decision:
    outcome: Outcome
    reason: str | None = None
    resource_kind: ResourceKind | None = None
    required_roles: frozenset[str] = field(default_factory=frozenset)
    user_role: str | None = None
    cause: BaseException | None = None
    chain: Chain | None = None
    membership: Any = None

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.allow

    @property
    def project(self) -> Any:
        return self.chain.project if self.chain else None

    @property
    def board(self) -> Any:
        return self.chain.board if self.chain else None

    @property
    def task(self) -> Any:
        return self.chain.task if self.chain else None

    def raise_for_outcome(self) -> Decision:
        """Return self when allowed, otherwise raise the matching AccessError."""
        if self.outcome is Outcome.allow:
            return self
        if self.outcome is Outcome.unauthenticated:
            raise Unauthenticated()
        if self.outcome is Outcome.not_found:
            kind = self.resource_kind.value if self.resource_kind else "resource"
            raise NotFound(kind)
        if self.outcome is Outcome.deny:
            raise Forbidden(self.reason or "forbidden", self.required_roles, self.user_role)
        raise EvaluationFailed(self.cause)

def allow(chain: Chain | None = None, membership: Any = None) -> Decision:
    return Decision(Outcome.allow, chain=chain, membership=membership)

def deny(
    reason: str,
    *,
    chain: Chain | None = None,
    required_roles: frozenset[str] = frozenset(),
    user_role: str | None = None,
) -> Decision:
    return Decision(
        Outcome.deny,
        reason=reason,
        chain=chain,
        required_roles=required_roles,
        user_role=user_role,
    )

def not_found(resource_kind: ResourceKind) -> Decision:
    return Decision(
        Outcome.not_found,
        reason=f"{resource_kind.value} not found",
        resource_kind=resource_kind,
    )

def unauthenticated() -> Decision:
    return Decision(Outcome.unauthenticated, reason="authentication required")

def failed(cause: BaseException) -> Decision:
    return Decision(Outcome.evaluation_failed, reason="failed to verify access", cause=cause)
