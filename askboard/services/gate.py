"""Authorization gate.

Capabilities are named checks over (actor, resource owner). The question
handlers ask for MODIFY_QUESTION before edit/update/destroy.
"""

from collections.abc import Callable
import logging

from askboard.services.errors import Forbidden

MODIFY_QUESTION = "modify-question"

logger = logging.getLogger("uvicorn.error")

Check = Callable[[int, int], bool]


def _is_owner(actor_id: int, resource_owner_id: int) -> bool:
    return actor_id == resource_owner_id


class AuthorizationGate:
    """Registry of capability checks."""

    def __init__(self) -> None:
        self._checks: dict[str, Check] = {MODIFY_QUESTION: _is_owner}

    def define(self, capability: str, check: Check) -> None:
        """Register or replace the check for a capability."""
        self._checks[capability] = check

    def is_allowed(self, capability: str, actor_id: int, resource_owner_id: int) -> bool:
        """Whether `actor_id` holds `capability` over a resource owned by `resource_owner_id`.

        Unknown capabilities are denied.
        """
        check = self._checks.get(capability)
        if check is None:
            return False
        return check(actor_id, resource_owner_id)

    def authorize(self, capability: str, actor_id: int, resource_owner_id: int) -> None:
        """Raise Forbidden unless the actor is allowed."""
        if not self.is_allowed(capability, actor_id, resource_owner_id):
            logger.info(f"Gate denied {capability} for user {actor_id} (owner {resource_owner_id})")
            raise Forbidden(
                "This action is unauthorized.",
                detail={"capability": capability},
            )
