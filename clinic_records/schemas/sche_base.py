from typing import Optional, TypeVar, Generic

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from clinic_records.helpers.messages import get_message

T = TypeVar("T")


class CamelModel(BaseModel):
    """Wire models use camelCase names while Python code keeps snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def custom_response(self, success: bool, message: Optional[str], data: T):
        self.success = success
        self.message = message
        self.data = data
        return self

    def success_response(self, data: T):
        self.success = True
        self.message = get_message('success')
        self.data = data
        return self
