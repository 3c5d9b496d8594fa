from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import ResourceType
from ..core.exceptions import NotFoundError


class OwnerLookup(Protocol):
    def get_owner_id(self, resource_id: int) -> Optional[int]:
        raise NotImplementedError


class OwnershipPolicy:
    """Single authorization predicate for teacher-owned resources.

    A resource that does not exist and a resource owned by someone else are
    indistinguishable to the caller: both are "not found".
    """

    def __init__(self, *, students: OwnerLookup, attendance: OwnerLookup):
        self._lookups = {
            ResourceType.STUDENT: students,
            ResourceType.ATTENDANCE: attendance,
        }

    def is_owner(self, resource_type: ResourceType, resource_id: int, caller_id: int) -> bool:
        lookup = self._lookups[ResourceType(resource_type)]
        owner_id = lookup.get_owner_id(int(resource_id))
        return owner_id is not None and int(owner_id) == int(caller_id)

    def require_owner(self, resource_type: ResourceType, resource_id: int, caller_id: int) -> None:
        if not self.is_owner(resource_type, resource_id, caller_id):
            label = "Student" if ResourceType(resource_type) == ResourceType.STUDENT else "Attendance record"
            raise NotFoundError(f"{label} not found")
