from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import and_, asc, desc, or_
from sqlalchemy.orm import Session

from clinic_records.db.base import get_db
from clinic_records.helpers.enums import SortOrder
from clinic_records.models.model_user import User

# camelCase wire names that may be used to sort results
SORTABLE_COLUMNS = {
    'createdAt': User.created_at,
    'updatedAt': User.updated_at,
    'fullName': User.full_name,
    'username': User.username,
    'email': User.email,
    'phone': User.phone,
    'userType': User.user_type,
    'activeStatus': User.active_status,
    'birthday': User.birthday,
}


def _contains(column, key: str):
    escaped = key.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return column.ilike(f'%{escaped}%', escape='\\')


def build_user_filters(search_key: Optional[str] = None,
                       active_status: Optional[bool] = None,
                       user_type: Optional[str] = None) -> list:
    """
    Build the list of clauses to AND together when listing users.

    The search key matches full name, email or phone, case-insensitively.
    Active status is matched whenever given, including False.
    """
    clauses = []
    if search_key:
        clauses.append(or_(
            _contains(User.full_name, search_key),
            _contains(User.email, search_key),
            _contains(User.phone, search_key),
        ))
    if active_status is not None:
        clauses.append(User.active_status == active_status)
    if user_type:
        clauses.append(User.user_type == user_type)
    return clauses


class UserRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_phone(self, phone: str) -> Optional[User]:
        return self.db.query(User).filter(User.phone == phone).first()

    def search(self, clauses: list, sort: Optional[Tuple[str, SortOrder]] = None,
               limit: Optional[int] = None, skip: Optional[int] = None) -> Tuple[int, List[User]]:
        query = self.db.query(User)
        if clauses:
            query = query.filter(and_(*clauses))
        total = query.count()

        column, order = User.created_at, SortOrder.DESC
        if sort and sort[0] in SORTABLE_COLUMNS:
            column, order = SORTABLE_COLUMNS[sort[0]], sort[1]
        direction = desc if order == SortOrder.DESC else asc
        query = query.order_by(direction(column))

        if limit:
            query = query.limit(limit)
        if skip:
            query = query.offset(skip)
        return total, query.all()

    def create(self, user_data: User) -> User:
        self.db.add(user_data)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user_data)
        return user_data

    def find_by_id_and_update(self, user_id: str, values: Dict[str, Any]) -> Optional[User]:
        """Apply the values to the record and return it as stored afterwards, or None if it does not exist."""
        user = self.get_by_id(user_id)
        if not user:
            return None
        for field, value in values.items():
            setattr(user, field, value)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def find_by_id_and_delete(self, user_id: str) -> Optional[User]:
        user = self.get_by_id(user_id)
        if not user:
            return None
        # Detach first so the returned record keeps its loaded values after commit
        self.db.expunge(user)
        try:
            self.db.query(User).filter(User.id == user_id).delete()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return user
