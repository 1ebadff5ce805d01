from collections.abc import Iterable

class AccessError(Exception):
    """Base for access-check failures; carries the HTTP status and response detail."""

    status_code: int = 500

    def __init__(self, detail):
        super().__init__(detail if isinstance(detail, str) else detail.get("message"))
        self.detail = detail

class Unauthenticated(AccessError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("authentication required")

class NotFound(AccessError):
    status_code = 404

    def __init__(self, resource_kind: str):
        self.resource_kind = resource_kind
        super().__init__(f"{resource_kind} not found")

class Forbidden(AccessError):
    status_code = 403

    def __init__(
        self,
        reason: str,
        required_roles: Iterable[str] = (),
        user_role: str | None = None,
    ):
        self.reason = reason
        self.required_roles = sorted(required_roles)
        self.user_role = user_role
        super().__init__(
            {
                "message": reason,
                "required_roles": self.required_roles,
                "user_role": user_role,
            }
        )

class EvaluationFailed(AccessError):
    status_code = 500

    def __init__(self, cause: BaseException | None = None):
        self.cause = cause
        # the cause is logged, never returned to the client
        super().__init__("failed to verify access")
