import logging.config
import os

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

from clinic_records.api.api_router import router
from clinic_records.models import Base
from clinic_records.db.base import engine
from clinic_records.core.config import settings
from clinic_records.helpers.exception_handler import (
    CustomException, http_exception_handler, validation_exception_handler,
)

if os.path.exists(settings.LOGGING_CONFIG_FILE):
    logging.config.fileConfig(settings.LOGGING_CONFIG_FILE, disable_existing_loggers=False)

Base.metadata.create_all(bind=engine)


def get_application() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME, docs_url="/docs", redoc_url='/re-docs',
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        description='''
        Clinic record management with FastAPI
            - Employee and patient accounts
            - Search, filter and paginate users
            - Activate, update and delete accounts
        '''
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router, prefix=settings.API_PREFIX)
    application.add_exception_handler(CustomException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    return application


app = get_application()
if __name__ == '__main__':
    uvicorn.run(app, host="0.0.0.0", port=8000)
