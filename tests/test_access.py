from types import SimpleNamespace

from portal.core.access import (
    Caller,
    can_contribute_to_project,
    can_delete_file,
    can_delete_folder,
    can_manage_project,
    can_modify_post,
    can_read_event,
    can_read_file,
    can_read_folder,
    can_read_project,
    can_remove_share,
    can_write_event,
    can_write_folder,
)

ALICE = Caller(id=1, role="USER")
BOB = Caller(id=2, role="USER")
ADMIN = Caller(id=9, role="ADMIN")


def _event(visibility: str, user_id: int = 1):
    return SimpleNamespace(visibility=visibility, user_id=user_id)


def test_event_read_rules() -> None:
    assert can_read_event(BOB, _event("public"), [])
    assert not can_read_event(BOB, _event("private"), [])
    assert not can_read_event(BOB, _event("shared"), [3])
    assert can_read_event(BOB, _event("shared"), [3, 2])
    assert can_read_event(ALICE, _event("private"), [])
    assert can_read_event(ADMIN, _event("private"), [])


def test_event_write_rules() -> None:
    event = _event("public")
    assert can_write_event(ALICE, event)
    assert not can_write_event(BOB, event)
    assert can_write_event(ADMIN, event)


def test_folder_permissions() -> None:
    folder = SimpleNamespace(user_id=1)
    assert can_read_folder(ALICE, folder, None)
    assert not can_read_folder(BOB, folder, None)
    assert can_read_folder(BOB, folder, "READ")
    assert not can_write_folder(BOB, folder, "READ")
    assert can_write_folder(BOB, folder, "WRITE")
    # Administrators read everything but only write where shared
    assert can_read_folder(ADMIN, folder, None)
    assert not can_write_folder(ADMIN, folder, None)


def test_delete_is_owner_only() -> None:
    folder = SimpleNamespace(user_id=1)
    file = SimpleNamespace(user_id=1, folder_id=None)
    assert can_delete_folder(ALICE, folder)
    assert not can_delete_folder(ADMIN, folder)
    assert can_delete_file(ALICE, file)
    assert not can_delete_file(BOB, file)


def test_file_read_follows_folder() -> None:
    root_file = SimpleNamespace(user_id=1, folder_id=None)
    assert can_read_file(ALICE, root_file, None, None)
    assert not can_read_file(BOB, root_file, None, None)

    folder = SimpleNamespace(user_id=1)
    nested = SimpleNamespace(user_id=1, folder_id=7)
    assert can_read_file(BOB, nested, folder, "READ")
    assert not can_read_file(BOB, nested, folder, None)


def test_share_removal() -> None:
    folder = SimpleNamespace(user_id=1)
    assert can_remove_share(ALICE, folder, 2)
    assert can_remove_share(BOB, folder, 2)
    assert not can_remove_share(BOB, folder, 3)


def test_post_modification() -> None:
    assert can_modify_post(ALICE, 1)
    assert not can_modify_post(BOB, 1)
    assert can_modify_post(ADMIN, 1)


def test_project_roles() -> None:
    private = SimpleNamespace(owner_id=1, visibility="private")
    public = SimpleNamespace(owner_id=1, visibility="public")

    assert can_read_project(BOB, public, None)
    assert not can_read_project(BOB, private, None)
    assert can_read_project(BOB, private, "viewer")

    assert not can_contribute_to_project(BOB, private, "viewer")
    assert can_contribute_to_project(BOB, private, "member")
    assert not can_manage_project(BOB, private, "member")
    assert can_manage_project(BOB, private, "admin")
    assert can_manage_project(ADMIN, private, None)
