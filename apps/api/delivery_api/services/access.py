"""
Ownership and role predicates shared by every mutating service operation.
"""
from uuid import UUID

from delivery_api.core.exceptions import ForbiddenError
from delivery_api.models.enums import STAFF_ROLES
from delivery_api.models.user import User


def is_staff(caller: User) -> bool:
    return caller.role in STAFF_ROLES


def can_manage(caller: User, owner_id: UUID | None) -> bool:
    """True when the caller owns the resource or holds a MANAGER/MASTER role."""
    return is_staff(caller) or (owner_id is not None and caller.id == owner_id)


def require_staff(caller: User, action: str) -> None:
    if not is_staff(caller):
        raise ForbiddenError(action, user=caller.username, role=caller.role.value)


def require_manage(caller: User, owner_id: UUID | None, action: str) -> None:
    if not can_manage(caller, owner_id):
        raise ForbiddenError(action, user=caller.username, role=caller.role.value)
