"""
Principal resolution and the single authorization policy used by every
scheduling operation.

Identity itself lives outside this service: a fronting proxy authenticates
the user and forwards who they are in ``X-User-Id``, ``X-User-Role`` and
``X-Profile-Id`` (the client or caregiver profile the user owns).
"""

import logging

from fastapi import Header
from pydantic import BaseModel

from care_scheduling.errors import (
    InvalidInputError,
    UnauthenticatedError,
    UnauthorizedError,
)
from care_scheduling.models import Role

logger = logging.getLogger(__name__)

ADMIN_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


class Principal(BaseModel):
    id: str
    role: Role
    profile_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


async def get_current_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
    x_profile_id: str | None = Header(default=None),
) -> Principal:
    if not x_user_id or not x_user_role:
        raise UnauthenticatedError("Not authenticated")
    try:
        role = Role(x_user_role.upper())
    except ValueError:
        logger.warning(f"Rejected principal {x_user_id} with unknown role {x_user_role!r}")
        raise UnauthenticatedError("Not authenticated") from None
    return Principal(id=x_user_id, role=role, profile_id=x_profile_id)


def authorize(
    principal: Principal, resource_owner_id: str | None, required_role: Role
) -> None:
    """
    Allow admins, or a principal with ``required_role`` whose profile owns
    the resource. Raises UnauthorizedError otherwise.
    """
    if principal.is_admin:
        return
    if principal.role != required_role:
        raise UnauthorizedError(
            f"Only {required_role.lower()}s can perform this action"
        )
    if resource_owner_id is None or principal.profile_id != resource_owner_id:
        raise UnauthorizedError("You do not have access to this resource")


def acting_client_id(principal: Principal, client_id: str | None = None) -> str:
    """
    The client a CLIENT principal acts for is implicit (their own profile).
    Admins act on behalf of the client they name.
    """
    if principal.is_admin:
        if not client_id:
            raise InvalidInputError("client_id is required")
        return client_id
    if principal.role != Role.CLIENT or not principal.profile_id:
        raise UnauthorizedError("Only clients can perform this action")
    return principal.profile_id


def readable_client_id(principal: Principal, client_id: str | None = None) -> str:
    """Clients read their own schedule; other roles must name a client."""
    if principal.role == Role.CLIENT and principal.profile_id:
        return principal.profile_id
    if not client_id:
        raise InvalidInputError("client_id is required")
    return client_id
