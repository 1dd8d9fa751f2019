import pytest

from clinic_records.core.security import verify_password
from clinic_records.helpers.enums import UserType
from clinic_records.helpers.exception_handler import (
    Conflict, InvalidInput, NotFound, PolicyViolation, WriteFailure,
)
from clinic_records.models.model_user import User
from clinic_records.schemas.sche_user import (
    PatientCreateRequest, UserCreateRequest, UserListRequest, UserUpdateDetailsRequest,
)
from clinic_records.services.srv_user import UserService


def employee_request(**fields):
    values = dict(username="admin.hoa", email="hoa@clinic.vn", phone="0977777777", user_type=UserType.ADMIN)
    values.update(fields)
    return UserCreateRequest(**values)


def test_configured_default_password_is_hashed(user_repo):
    service = UserService(user_repo, default_password="Clinic@2024")
    user = service.create_user(employee_request())
    assert user.password != "Clinic@2024"
    assert verify_password("Clinic@2024", user.password)


def test_short_default_password_is_rejected(user_repo, db_session):
    service = UserService(user_repo, default_password="12345")
    with pytest.raises(PolicyViolation) as exc_info:
        service.create_user(employee_request())
    assert exc_info.value.http_code == 406
    assert db_session.query(User).count() == 0


def test_missing_field_writes_nothing(user_repo, db_session):
    service = UserService(user_repo, default_password="123456")
    with pytest.raises(InvalidInput):
        service.create_user(employee_request(user_type=None))
    with pytest.raises(InvalidInput):
        service.create_patient(PatientCreateRequest(full_name="Pham Thi E", phone="0988888888"))
    assert db_session.query(User).count() == 0


def test_unique_constraint_backs_username_check(user_repo, monkeypatch):
    service = UserService(user_repo, default_password="123456")
    service.create_user(employee_request())

    # Simulate a concurrent request that passed the pre-check
    monkeypatch.setattr(user_repo, "get_by_username", lambda username: None)
    with pytest.raises(Conflict) as exc_info:
        service.create_user(employee_request(email="other@clinic.vn"))
    assert exc_info.value.http_code == 406


def test_unique_constraint_backs_patient_phone_check(user_repo, db_session, monkeypatch):
    service = UserService(user_repo, default_password="123456")
    patient = PatientCreateRequest(full_name="Vo Van F", birthday="2000-02-02", phone="0999999999")
    service.create_patient(patient)

    monkeypatch.setattr(user_repo, "get_by_phone", lambda phone: None)
    with pytest.raises(Conflict):
        service.create_patient(patient)
    assert db_session.query(User).count() == 1


def test_create_failure_when_store_returns_nothing(user_repo, monkeypatch):
    service = UserService(user_repo, default_password="123456")
    monkeypatch.setattr(user_repo, "create", lambda user: None)
    with pytest.raises(WriteFailure) as exc_info:
        service.create_user(employee_request())
    assert exc_info.value.http_code == 403


def test_empty_listing_carries_empty_page(user_repo):
    service = UserService(user_repo, default_password="123456")
    with pytest.raises(NotFound) as exc_info:
        service.get_users(UserListRequest())
    assert exc_info.value.data == {"total": 0, "users": []}


def test_empty_string_is_applied_in_details_update(user_repo):
    service = UserService(user_repo, default_password="123456")
    user = service.create_user(employee_request())
    service.update_user_details(user.id, UserUpdateDetailsRequest(name="Hoa", photo="hoa.png"))

    updated = service.update_user_details(user.id, UserUpdateDetailsRequest(photo=""))
    assert updated.photo == ""
    assert updated.name == "Hoa"


def test_delete_without_id(user_repo):
    service = UserService(user_repo, default_password="123456")
    with pytest.raises(NotFound):
        service.delete_user("")
