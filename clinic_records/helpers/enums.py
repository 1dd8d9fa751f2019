import enum


class UserType(enum.Enum):
    ADMIN = 'admin'
    USER = 'user'
    DOCTOR = 'doctor'
    ADMINISTRATIVE = 'administrative'
    SALES = 'sales'

    @property
    def label(self) -> str:
        return USER_TYPE_LABELS[self]


USER_TYPE_LABELS = {
    UserType.ADMIN: 'Quản lý',
    UserType.USER: 'Người dùng',
    UserType.DOCTOR: 'Bác sĩ',
    UserType.ADMINISTRATIVE: 'Nhân viên hành chánh',
    UserType.SALES: 'Nhân viên bán hàng',
}


class SortOrder(enum.Enum):
    ASC = 'asc'
    DESC = 'desc'
