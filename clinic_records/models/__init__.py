from clinic_records.models.model_base import Base
from clinic_records.models.model_user import User
