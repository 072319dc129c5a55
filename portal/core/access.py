"""Read/write decisions for shareable resources.

Every check here is a pure function of the caller and rows that the store has
already loaded. Stores look the resource up first (missing row -> NotFound)
and only then ask these functions (denied -> Forbidden).
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from portal.models.drive import PERMISSION_WRITE
from portal.models.event import VISIBILITY_PUBLIC
from portal.models.project import MEMBER_ADMIN, MEMBER_MEMBER, MEMBER_OWNER
from portal.models.user import ROLE_ADMIN


@dataclass(frozen=True)
class Caller:
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_user(cls, user) -> "Caller":
        return cls(id=user.id, role=user.role)


def _owns(caller: Caller, owner_id: int) -> bool:
    return owner_id == caller.id


# Events

def can_read_event(caller: Caller, event, shared_with: Iterable[int]) -> bool:
    return (
        event.visibility == VISIBILITY_PUBLIC
        or _owns(caller, event.user_id)
        or caller.id in set(shared_with)
        or caller.is_admin
    )


def can_write_event(caller: Caller, event) -> bool:
    return _owns(caller, event.user_id) or caller.is_admin


# Folders and files
#
# `permission` is the caller's effective share permission on the folder
# (READ/WRITE) or None when no share row applies.

def can_read_folder(caller: Caller, folder, permission: Optional[str]) -> bool:
    return _owns(caller, folder.user_id) or permission is not None or caller.is_admin


def can_write_folder(caller: Caller, folder, permission: Optional[str]) -> bool:
    return _owns(caller, folder.user_id) or permission == PERMISSION_WRITE


def can_manage_drive_item(caller: Caller, item) -> bool:
    """Rename, favorite, trash and restore are reserved to the owner."""
    return _owns(caller, item.user_id)


def can_delete_folder(caller: Caller, folder) -> bool:
    return _owns(caller, folder.user_id)


def can_read_file(caller: Caller, file, folder, permission: Optional[str]) -> bool:
    if folder is None:
        return _owns(caller, file.user_id)
    return can_read_folder(caller, folder, permission)


def can_delete_file(caller: Caller, file) -> bool:
    return _owns(caller, file.user_id)


def can_remove_share(caller: Caller, folder, target_user_id: int) -> bool:
    return _owns(caller, folder.user_id) or caller.id == target_user_id


# Posts, post comments, task comments

def can_modify_post(caller: Caller, author_id: int) -> bool:
    return _owns(caller, author_id) or caller.is_admin


# Projects
#
# `member_role` is the caller's row in project_members, or None.

def can_read_project(caller: Caller, project, member_role: Optional[str]) -> bool:
    return (
        project.visibility == VISIBILITY_PUBLIC
        or _owns(caller, project.owner_id)
        or member_role is not None
        or caller.is_admin
    )


def can_manage_project(caller: Caller, project, member_role: Optional[str]) -> bool:
    return _owns(caller, project.owner_id) or caller.is_admin or member_role in (MEMBER_OWNER, MEMBER_ADMIN)


def can_contribute_to_project(caller: Caller, project, member_role: Optional[str]) -> bool:
    return (
        _owns(caller, project.owner_id)
        or caller.is_admin
        or member_role in (MEMBER_OWNER, MEMBER_ADMIN, MEMBER_MEMBER)
    )


def can_delete_project(caller: Caller, project) -> bool:
    return _owns(caller, project.owner_id) or caller.is_admin
