import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends

from clinic_records.helpers.exception_handler import CustomException, InternalError
from clinic_records.models.model_user import User
from clinic_records.schemas.sche_base import DataResponse
from clinic_records.schemas.sche_user import (
    PatientCreateRequest, PatientUpdateRequest, UserCreateRequest, UserDataResponse, UserItemResponse,
    UserListRequest, UserListResponse, UserTypeResponse, UserUpdateDetailsRequest,
    UserUpdateStatusRequest,
)
from clinic_records.services.srv_user import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


def _user_data(user: User) -> UserDataResponse:
    return UserDataResponse(user=UserItemResponse.model_validate(user))


@router.get("/user-types", response_model=DataResponse[List[UserTypeResponse]])
def get_user_types() -> Any:
    """
    API list user types with their display labels
    """
    return DataResponse().success_response(data=UserService.get_user_types())


@router.post("/employees", status_code=202, response_model=DataResponse[UserDataResponse])
def create_user(user_data: UserCreateRequest, user_service: UserService = Depends()) -> Any:
    """
    API Create employee account with the default password
    """
    try:
        user = user_service.create_user(user_data)
        return DataResponse().success_response(data=_user_data(user))
    except CustomException:
        raise
    except Exception as e:
        logger.exception("Failed to create employee")
        raise InternalError(message=str(e))


@router.post("/patients", status_code=202, response_model=DataResponse[UserDataResponse])
def create_patient(patient_data: PatientCreateRequest, user_service: UserService = Depends()) -> Any:
    """
    API Create patient account with the default password
    """
    try:
        patient = user_service.create_patient(patient_data)
        return DataResponse().success_response(data=_user_data(patient))
    except CustomException:
        raise
    except Exception as e:
        logger.exception("Failed to create patient")
        raise InternalError(message=str(e))


@router.post("/search", response_model=DataResponse[UserListResponse])
def get_users(filters: Optional[UserListRequest] = None, user_service: UserService = Depends()) -> Any:
    """
    API Get list User, filtered, sorted and paginated
    """
    try:
        total, users = user_service.get_users(filters or UserListRequest())
        return DataResponse().success_response(data=UserListResponse(
            total=total,
            users=[UserItemResponse.model_validate(user) for user in users],
        ))
    except CustomException:
        raise
    except Exception as e:
        logger.exception("Failed to list users")
        raise InternalError(message=str(e))


@router.put("/patients/{user_id}", status_code=202, response_model=DataResponse[UserDataResponse])
def update_patient(user_id: str, patient_data: PatientUpdateRequest, user_service: UserService = Depends()) -> Any:
    """
    API Update patient, every known field of the body is written except the active status
    """
    try:
        return DataResponse().success_response(data=_user_data(user_service.update_patient(user_id, patient_data)))
    except CustomException:
        raise
    except Exception as e:
        logger.exception(f"Failed to update patient {user_id}")
        raise InternalError(message=str(e))


@router.get("/{user_id}", response_model=DataResponse[UserDataResponse])
def detail(user_id: str, user_service: UserService = Depends()) -> Any:
    """
    API get Detail User
    """
    try:
        return DataResponse().success_response(data=_user_data(user_service.get_user(user_id)))
    except CustomException:
        raise
    except Exception as e:
        logger.exception(f"Failed to get user {user_id}")
        raise InternalError(message=str(e))


@router.put("/{user_id}", status_code=202, response_model=DataResponse[UserDataResponse])
def update_details(user_id: str, user_data: UserUpdateDetailsRequest, user_service: UserService = Depends()) -> Any:
    """
    API Update name, mobile and photo of a User
    """
    try:
        return DataResponse().success_response(data=_user_data(user_service.update_user_details(user_id, user_data)))
    except CustomException:
        raise
    except Exception as e:
        logger.exception(f"Failed to update user {user_id}")
        raise InternalError(message=str(e))


@router.put("/{user_id}/status", status_code=202, response_model=DataResponse[UserDataResponse])
def update_status(user_id: str, status_data: UserUpdateStatusRequest, user_service: UserService = Depends()) -> Any:
    """
    API Activate or deactivate a User
    """
    try:
        return DataResponse().success_response(data=_user_data(user_service.update_status(user_id, status_data)))
    except CustomException:
        raise
    except Exception as e:
        logger.exception(f"Failed to update status of user {user_id}")
        raise InternalError(message=str(e))


@router.delete("/{user_id}", status_code=202, response_model=DataResponse[UserDataResponse])
def delete(user_id: str, user_service: UserService = Depends()) -> Any:
    """
    API Delete User
    """
    try:
        return DataResponse().success_response(data=_user_data(user_service.delete_user(user_id)))
    except CustomException:
        raise
    except Exception as e:
        logger.exception(f"Failed to delete user {user_id}")
        raise InternalError(message=str(e))
