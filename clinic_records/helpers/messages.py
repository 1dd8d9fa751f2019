from clinic_records.core.config import settings

MESSAGES = {
    'vi': {
        'success': 'Thành công',
        'invalid_input': 'Cung cấp đầy đủ thông tin',
        'username_exists': 'username đã tồn tại',
        'phone_exists': 'Số điện thoại đã tồn tại',
        'password_too_short': 'Mật khẩu phải có tối thiểu {min_length} ký tự',
        'create_failed': 'Không thể tạo người dùng',
        'user_not_found': 'Không tìm thấy người dùng',
        'users_not_found': 'Không tìm thấy người dùng nào',
        'update_failed': 'Không thể cập nhật',
        'delete_failed': 'Không thể xóa',
    },
    'en': {
        'success': 'Success',
        'invalid_input': 'Please provide all required information',
        'username_exists': 'Username already exists',
        'phone_exists': 'Phone number already exists',
        'password_too_short': 'Password must be at least {min_length} characters',
        'create_failed': 'Could not create user',
        'user_not_found': 'No user found',
        'users_not_found': 'No users found',
        'update_failed': 'Could not update',
        'delete_failed': 'Could not delete',
    },
}


def get_message(key: str, language: str = None, **kwargs) -> str:
    """
    Look up a user facing message by key.
    Falls back to the Vietnamese table for unknown languages.
    """
    table = MESSAGES.get(language or settings.MESSAGE_LANGUAGE, MESSAGES['vi'])
    return table[key].format(**kwargs)
