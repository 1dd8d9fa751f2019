import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv('PROJECT_NAME', 'CLINIC RECORDS')
    API_PREFIX: str = '/api'
    BACKEND_CORS_ORIGINS: List[str] = ['*']
    DATABASE_URL: str = os.getenv('SQL_DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'clinic_records.db'))
    LOGGING_CONFIG_FILE: str = os.path.join(BASE_DIR, 'logging.ini')

    # Accounts created through the API get this password until they change it
    DEFAULT_PASSWORD: str = os.getenv('DEFAULT_PASSWORD', '123456')
    PASSWORD_MIN_LENGTH: int = int(os.getenv('PASSWORD_MIN_LENGTH', '6'))

    # 'vi' or 'en'
    MESSAGE_LANGUAGE: str = os.getenv('MESSAGE_LANGUAGE', 'vi')


settings = Settings()
