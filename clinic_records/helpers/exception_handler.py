import logging
from typing import Any, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from clinic_records.helpers.messages import get_message
from clinic_records.schemas.sche_base import DataResponse

logger = logging.getLogger(__name__)


class CustomException(Exception):
    http_code: int
    code: str
    message: str
    data: Any

    def __init__(self, http_code: int = None, code: str = None, message: str = None, data: Optional[Any] = None):
        self.http_code = http_code if http_code else 500
        self.code = code if code else str(self.http_code)
        self.message = message
        self.data = data if data is not None else {}
        super().__init__(message)


class InvalidInput(CustomException):
    """A required field is missing."""

    def __init__(self, message: str = None, data: Optional[Any] = None):
        super().__init__(http_code=400, message=message or get_message('invalid_input'), data=data)


class Conflict(CustomException):
    """Username or phone number is already taken."""

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(http_code=406, message=message, data=data)


class PolicyViolation(CustomException):
    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(http_code=406, message=message, data=data)


class NotFound(CustomException):
    def __init__(self, message: str = None, data: Optional[Any] = None):
        super().__init__(http_code=404, message=message or get_message('user_not_found'), data=data)


class WriteFailure(CustomException):
    """The store returned nothing for a create (403) or an update/delete (400)."""

    def __init__(self, message: str, http_code: int = 400, data: Optional[Any] = None):
        super().__init__(http_code=http_code, message=message, data=data)


class InternalError(CustomException):
    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(http_code=500, message=message, data=data)


async def http_exception_handler(request: Request, exc: CustomException):
    return JSONResponse(
        status_code=exc.http_code,
        content=jsonable_encoder(
            DataResponse().custom_response(success=False, message=exc.message, data=exc.data),
            by_alias=True,
        )
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = get_message_validation(exc)
    logger.info(f"Rejected request {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(DataResponse().custom_response(success=False, message=message, data={}))
    )


def get_message_validation(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        messages.append(f"{location}: {error.get('msg')}" if location else error.get('msg'))
    return '; '.join(messages) or get_message('invalid_input')
