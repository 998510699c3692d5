# sessionauth/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from sessionauth.services._shared.errors import AuthorizationError
from sessionauth.services._shared.policies.common import is_owner


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids, etc.).

    :param actor_id: Authenticated account identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Carry the request-scoped :class:`ServiceContext`.
    * Centralize ownership checks.
    * Keep services thin, orchestration-only, no web/ORM leakage.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: str | None, owner_id: str, *, msg: str | None = None) -> None:
        """
        Ensure the current actor owns the resource.

        :param actor_id: Authenticated account id (``None`` when anonymous).
        :param owner_id: Account id the resource belongs to.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg) if msg else AuthorizationError()
