import pytest

from clinic_records.helpers.enums import SortOrder
from clinic_records.models.model_user import User
from clinic_records.repository.repo_user import build_user_filters


def add_user(user_repo, **fields):
    values = dict(user_type="user", password="hashed", active_status=True)
    values.update(fields)
    return user_repo.create(User(**values))


def test_no_filters_builds_no_clauses():
    assert build_user_filters() == []


def test_false_active_status_is_a_filter():
    assert len(build_user_filters(active_status=False)) == 1
    assert len(build_user_filters(search_key="an", active_status=True, user_type="doctor")) == 3


def test_search_treats_wildcards_literally(user_repo):
    add_user(user_repo, full_name="100% Tran", phone="0900000031")
    add_user(user_repo, full_name="1000 Tran", phone="0900000032")

    total, users = user_repo.search(build_user_filters(search_key="100%"))
    assert total == 1
    assert users[0].full_name == "100% Tran"


def test_unknown_sort_field_falls_back_to_created_at(user_repo):
    older = add_user(user_repo, full_name="B", phone="0900000041")
    newer = add_user(user_repo, full_name="A", phone="0900000042")

    total, users = user_repo.search([], sort=("noSuchField", SortOrder.ASC))
    assert total == 2
    assert [user.id for user in users] == [newer.id, older.id]


def test_update_and_delete_missing_record(user_repo):
    assert user_repo.find_by_id_and_update("missing", {"note": "x"}) is None
    assert user_repo.find_by_id_and_delete("missing") is None


def test_delete_returns_removed_record(user_repo):
    user = add_user(user_repo, full_name="Do Thi G", phone="0900000051")
    deleted = user_repo.find_by_id_and_delete(user.id)
    assert deleted.full_name == "Do Thi G"
    assert user_repo.get_by_id(user.id) is None


def test_failed_delete_rolls_back(user_repo, db_session, monkeypatch):
    user = add_user(user_repo, full_name="Ly Van H", phone="0900000061")

    def failing_commit():
        raise RuntimeError("disk I/O error")

    monkeypatch.setattr(db_session, "commit", failing_commit)
    with pytest.raises(RuntimeError):
        user_repo.find_by_id_and_delete(user.id)
    monkeypatch.undo()

    assert user_repo.get_by_id(user.id).full_name == "Ly Van H"
