from datetime import datetime
from decimal import Decimal

import pytest

from rentalps.errors import ValidationError
from rentalps.services.booking import intervals_overlap
from rentalps.utils.validators import parse_booking_start, parse_duration, parse_id, parse_money


@pytest.mark.parametrize('value, expected', [
    (3, 3), ('12', 12), (' 7 ', 7), (4.0, 4),
    (0, None), (-1, None), ('abc', None), ('', None), (None, None), (True, None), (2.5, None),
    (2 ** 63 - 1, 2 ** 63 - 1), (2 ** 63, None), ('99999999999999999999999', None), (1e30, None),
])
def test_parse_id(value, expected):
    assert parse_id(value) == expected


def test_parse_booking_start_is_strict():
    assert parse_booking_start('2025-01-10', '09:30') == datetime(2025, 1, 10, 9, 30)
    for date_value, time_value in [('2025-1-10x', '09:30'), ('2025-01-10', '9h30'),
                                   ('2025-02-30', '10:00'), (None, '10:00'), ('2025-01-10', '')]:
        with pytest.raises(ValidationError):
            parse_booking_start(date_value, time_value)


def test_parse_duration():
    assert parse_duration(None) == 1
    assert parse_duration('3') == 3
    with pytest.raises(ValidationError):
        parse_duration('0')
    assert parse_duration('24') == 24
    with pytest.raises(ValidationError):
        parse_duration(25)
    with pytest.raises(ValidationError):
        parse_duration('3', max_hours=2)


def test_parse_money():
    assert parse_money('1500.50', 'harga') == Decimal('1500.50')
    assert parse_money(None, 'harga', required=False) is None
    with pytest.raises(ValidationError):
        parse_money('NaN', 'harga')


def test_half_open_overlap():
    ten, eleven, twelve = (datetime(2025, 1, 10, hour) for hour in (10, 11, 12))
    assert intervals_overlap(ten, twelve, eleven, twelve)
    assert not intervals_overlap(ten, eleven, eleven, twelve)
    assert not intervals_overlap(eleven, twelve, ten, eleven)
