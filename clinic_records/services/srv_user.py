import logging
from typing import Any, Dict, List, Tuple

from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from clinic_records.core.config import settings
from clinic_records.core.security import get_password_hash
from clinic_records.helpers.enums import UserType
from clinic_records.helpers.exception_handler import (
    Conflict, InvalidInput, NotFound, PolicyViolation, WriteFailure,
)
from clinic_records.helpers.messages import get_message
from clinic_records.helpers.time_utils import utc_now
from clinic_records.models.model_user import User
from clinic_records.repository.repo_user import UserRepository, build_user_filters
from clinic_records.schemas.sche_user import (
    PatientCreateRequest, UserCreateRequest, UserListRequest,
    PatientUpdateRequest, UserUpdateDetailsRequest, UserUpdateStatusRequest,
)

logger = logging.getLogger(__name__)

# Columns a patch may not clear
NON_NULLABLE_FIELDS = ('user_type',)


def is_unique_violation(error: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed", postgres: "duplicate key value violates unique constraint"
    return 'unique' in str(error.orig).lower()


def get_default_password() -> str:
    return settings.DEFAULT_PASSWORD


class UserService:
    def __init__(self, user_repo: UserRepository = Depends(),
                 default_password: str = Depends(get_default_password)):
        self.user_repo = user_repo
        self.default_password = default_password

    def _hashed_default_password(self) -> str:
        if len(self.default_password) < settings.PASSWORD_MIN_LENGTH:
            raise PolicyViolation(get_message('password_too_short', min_length=settings.PASSWORD_MIN_LENGTH))
        return get_password_hash(self.default_password)

    def create_user(self, data: UserCreateRequest) -> User:
        if not data.username or not data.email or not data.phone or not data.user_type:
            raise InvalidInput()

        if self.user_repo.get_by_username(data.username):
            raise Conflict(get_message('username_exists'))

        new_user = User(
            username=data.username,
            email=data.email,
            phone=data.phone,
            user_type=data.user_type.value,
            password=self._hashed_default_password(),
            active_status=True,
        )
        try:
            created_user = self.user_repo.create(new_user)
        except IntegrityError:
            # Another request took the username between the check and the insert
            logger.warning(f"Username {data.username} rejected by unique constraint")
            raise Conflict(get_message('username_exists'))

        if not created_user:
            raise WriteFailure(get_message('create_failed'), http_code=403)

        logger.info(f"Employee created: id={created_user.id}, username={created_user.username}")
        return created_user

    def create_patient(self, data: PatientCreateRequest) -> User:
        user_type = UserType.USER
        if not data.full_name or not data.birthday or not data.phone or not user_type:
            raise InvalidInput()

        if self.user_repo.get_by_phone(data.phone):
            raise Conflict(get_message('phone_exists'))

        new_patient = User(
            full_name=data.full_name,
            birthday=data.birthday,
            phone=data.phone,
            address=data.address,
            note=data.note,
            user_type=user_type.value,
            password=self._hashed_default_password(),
            active_status=True,
        )
        try:
            created_patient = self.user_repo.create(new_patient)
        except IntegrityError:
            logger.warning(f"Phone {data.phone} rejected by unique constraint")
            raise Conflict(get_message('phone_exists'))

        if not created_patient:
            raise WriteFailure(get_message('create_failed'), http_code=403)

        logger.info(f"Patient created: id={created_patient.id}")
        return created_patient

    def get_users(self, data: UserListRequest) -> Tuple[int, List[User]]:
        clauses = build_user_filters(
            search_key=data.search_key,
            active_status=data.active_status,
            user_type=data.user_type.value if data.user_type else None,
        )
        sort = (data.sort_by.field, data.sort_by.direction) if data.sort_by else None
        total, users = self.user_repo.search(clauses, sort=sort, limit=data.limit, skip=data.skip)
        if not users:
            raise NotFound(get_message('users_not_found'), data={'total': 0, 'users': []})
        return total, users

    def get_user(self, user_id: str) -> User:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFound(get_message('user_not_found'))
        return user

    def _apply_update(self, user_id: str, values: Dict[str, Any]) -> User:
        if not values:
            raise WriteFailure(get_message('update_failed'))
        try:
            updated_user = self.user_repo.find_by_id_and_update(user_id, values)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            raise Conflict(get_message('username_exists' if 'username' in values else 'phone_exists'))
        if not updated_user:
            raise WriteFailure(get_message('update_failed'))
        logger.info(f"User updated: id={user_id}, fields={sorted(values)}")
        return updated_user

    def update_user_details(self, user_id: str, data: UserUpdateDetailsRequest) -> User:
        values = {}
        if data.name is not None:
            values['name'] = data.name
        if data.mobile is not None:
            values['mobile'] = data.mobile
        if data.photo is not None:
            values['photo'] = data.photo
        values['updated_at'] = utc_now()
        return self._apply_update(user_id, values)

    def update_patient(self, user_id: str, data: PatientUpdateRequest) -> User:
        values = data.model_dump(exclude_unset=True)
        for field in NON_NULLABLE_FIELDS:
            if field in values and values[field] is None:
                raise InvalidInput()
        if values.get('user_type') is not None:
            values['user_type'] = values['user_type'].value
        values['updated_at'] = utc_now()
        return self._apply_update(user_id, values)

    def update_status(self, user_id: str, data: UserUpdateStatusRequest) -> User:
        values = {}
        if data.active_status is not None:
            values['active_status'] = data.active_status
        values['updated_at'] = utc_now()
        return self._apply_update(user_id, values)

    def delete_user(self, user_id: str) -> User:
        if not user_id:
            raise NotFound(get_message('user_not_found'))
        deleted_user = self.user_repo.find_by_id_and_delete(user_id)
        if not deleted_user:
            raise WriteFailure(get_message('delete_failed'))
        logger.info(f"User deleted: id={user_id}")
        return deleted_user

    @staticmethod
    def get_user_types() -> List[Dict[str, str]]:
        return [{'value': user_type.value, 'label': user_type.label} for user_type in UserType]
