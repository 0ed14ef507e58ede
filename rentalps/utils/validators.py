"""
Parsing helpers for JSON request bodies and query strings.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation

from flask import request

from rentalps.errors import ValidationError

# largest id a BIGINT or SQLite INTEGER column holds
MAX_ID = 2 ** 63 - 1


def get_json_body() -> dict:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def parse_id(value):
    """
    Positive integer id from an int or a digit string, else None.

    0, booleans, floats with a fraction, free text and anything past
    MAX_ID all resolve to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, int):
        return value if 0 < value <= MAX_ID else None
    text = str(value).strip()
    if text.isdigit() and 0 < int(text) <= MAX_ID:
        return int(text)
    return None


def require_id(value, field):
    parsed = parse_id(value)
    if parsed is None:
        raise ValidationError(f'{field} must be a valid integer')
    return parsed


def parse_optional_int(value, field):
    """None/'' -> None, otherwise an integer or a ValidationError"""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f'{field} must be a number')
    if number != number.to_integral_value():
        raise ValidationError(f'{field} must be an integer')
    return int(number)


def parse_money(value, field, required=True):
    """Non-negative decimal amount"""
    if value is None or value == '':
        if required:
            raise ValidationError(f'{field} is required')
        return None
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f'{field} must be a number')
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f'{field} must be a non-negative number')
    return amount


def clean_string(value):
    """None/blank -> None, otherwise the stripped text"""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_string(value, field):
    text = clean_string(value)
    if text is None:
        raise ValidationError(f'{field} is required')
    return text


def parse_date(value, fmt='%Y-%m-%d'):
    try:
        return datetime.strptime(str(value).strip(), fmt).date()
    except ValueError:
        raise ValidationError('Format date tidak valid (YYYY-MM-DD)')


def parse_booking_start(date_value, time_value):
    """Strict 'YYYY-MM-DD' + 'HH:MM' into a naive local datetime"""
    if not date_value or not time_value:
        raise ValidationError('date dan time wajib diisi (YYYY-MM-DD & HH:mm)')
    try:
        return datetime.strptime(f'{str(date_value).strip()} {str(time_value).strip()}',
                                 '%Y-%m-%d %H:%M')
    except ValueError:
        raise ValidationError('Format date/time tidak valid (YYYY-MM-DD & HH:mm)')


def parse_duration(value, max_hours=24):
    """Booking length in whole hours; missing means one hour"""
    if value is None or value == '':
        return 1
    hours = parse_optional_int(value, 'duration')
    if hours is None or hours <= 0:
        raise ValidationError('duration must be a positive number of hours')
    if hours > max_hours:
        raise ValidationError(f'duration tidak boleh lebih dari {max_hours} jam')
    return hours


def parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {'1', 'true', 'yes', 'y', 'on'}
