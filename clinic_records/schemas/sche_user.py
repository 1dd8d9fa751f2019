from datetime import datetime
from typing import List, Optional, Union

from pydantic import ConfigDict, EmailStr

from clinic_records.helpers.enums import UserType, SortOrder
from clinic_records.schemas.sche_base import CamelModel


class UserItemResponse(CamelModel):
    id: str
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    user_type: str
    password: str
    active_status: bool
    full_name: Optional[str] = None
    birthday: Optional[str] = None
    address: Optional[str] = None
    note: Optional[str] = None
    name: Optional[str] = None
    mobile: Optional[str] = None
    photo: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserDataResponse(CamelModel):
    user: UserItemResponse


class UserListResponse(CamelModel):
    total: int
    users: List[UserItemResponse]


class UserTypeResponse(CamelModel):
    value: str
    label: str


# Required fields are checked by the service so that a missing one is reported
# in the response envelope rather than as a schema error.
class UserCreateRequest(CamelModel):
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    user_type: Optional[UserType] = None


class PatientCreateRequest(CamelModel):
    full_name: Optional[str] = None
    birthday: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    note: Optional[str] = None


class SortBy(CamelModel):
    field: str = 'createdAt'
    order: Union[int, SortOrder] = SortOrder.DESC

    @property
    def direction(self) -> SortOrder:
        if isinstance(self.order, SortOrder):
            return self.order
        return SortOrder.ASC if self.order > 0 else SortOrder.DESC


class UserListRequest(CamelModel):
    skip: Optional[int] = None
    limit: Optional[int] = None
    active_status: Optional[bool] = None
    user_type: Optional[UserType] = None
    search_key: Optional[str] = None
    sort_by: Optional[SortBy] = None


class UserUpdateDetailsRequest(CamelModel):
    name: Optional[str] = None
    mobile: Optional[str] = None
    photo: Optional[str] = None


class UserUpdateStatusRequest(CamelModel):
    active_status: Optional[bool] = None


class PatientUpdateRequest(CamelModel):
    """
    Fields a patient update may write, accepted in camelCase or snake_case.
    Unknown keys are dropped. The id, the password hash and the active status
    are not listed, so a body never writes them.
    """
    model_config = ConfigDict(extra='ignore')

    username: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    user_type: Optional[UserType] = None
    full_name: Optional[str] = None
    birthday: Optional[str] = None
    address: Optional[str] = None
    note: Optional[str] = None
    name: Optional[str] = None
    mobile: Optional[str] = None
    photo: Optional[str] = None
    created_at: Optional[datetime] = None
