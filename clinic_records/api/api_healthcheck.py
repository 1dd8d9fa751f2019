from fastapi import APIRouter

from clinic_records.schemas.sche_base import DataResponse

router = APIRouter()


@router.get("", response_model=DataResponse[dict])
def get():
    return DataResponse().success_response(data={"status": "healthy"})
