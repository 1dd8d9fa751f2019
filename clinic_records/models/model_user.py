import uuid

from sqlalchemy import Column, String, DateTime, Boolean, Text, Index

from clinic_records.helpers.time_utils import utc_now
from clinic_records.models.model_base import Base


class User(Base):
    """Employee and patient accounts share this table, told apart by user_type and the populated fields."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Employee fields
    username = Column(String(255), unique=True)
    email = Column(String(255))
    phone = Column(String(50), index=True)
    user_type = Column(String(20), nullable=False)
    password = Column(String(255), nullable=False)
    active_status = Column(Boolean, default=True, nullable=False)

    # Patient fields
    full_name = Column(String(255))
    birthday = Column(String(50))
    address = Column(String(255))
    note = Column(Text)

    # Profile fields
    name = Column(String(255))
    mobile = Column(String(50))
    photo = Column(String(500))

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now)

    __table_args__ = (
        # Patients have no username; their phone number identifies them.
        Index(
            "uq_users_patient_phone", "phone", unique=True,
            postgresql_where=username.is_(None),
            sqlite_where=username.is_(None),
        ),
    )
