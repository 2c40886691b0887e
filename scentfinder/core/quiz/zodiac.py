"""
Zodiac sign lookup from a birth month and day.
"""
import calendar
from dataclasses import dataclass
from functools import lru_cache

from core.quiz_data import ZODIAC_SIGNS, ZODIAC_DESCRIPTIONS, GENERIC_ZODIAC_DESCRIPTION
from .errors import InvalidDate

MONTH_NAMES = list(calendar.month_name)

# Any leap year, so February 29 is accepted
_LEAP_YEAR = 2000


@dataclass(frozen=True)
class ZodiacSign:
    name: str
    symbol: str
    start: tuple
    end: tuple
    element: str

    @property
    def date_range(self):
        return (
            f"{MONTH_NAMES[self.start[0]]} {self.start[1]} - "
            f"{MONTH_NAMES[self.end[0]]} {self.end[1]}"
        )

    def contains(self, month, day):
        start_month, start_day = self.start
        end_month, end_day = self.end
        return (
            (month == start_month and day >= start_day)
            or (month == end_month and day <= end_day)
            or (start_month > end_month and (month > start_month or month < end_month))
        )

    def to_dict(self):
        return {
            'name': self.name,
            'symbol': self.symbol,
            'element': self.element,
            'date_range': self.date_range,
            'start': list(self.start),
            'end': list(self.end),
        }


SIGNS = tuple(
    ZodiacSign(s['name'], s['symbol'], tuple(s['start']), tuple(s['end']), s['element'])
    for s in ZODIAC_SIGNS
)
SIGNS_BY_NAME = {sign.name: sign for sign in SIGNS}


def _as_int(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def validate_birth_date(month, day):
    """
    Input-boundary check: returns (month, day) as ints or raises InvalidDate,
    including for days that do not exist in the given month.
    """
    month_number = _as_int(month)
    day_number = _as_int(day)
    if month_number is None or day_number is None or not 1 <= month_number <= 12:
        raise InvalidDate(month, day)
    if not 1 <= day_number <= calendar.monthrange(_LEAP_YEAR, month_number)[1]:
        raise InvalidDate(month, day)
    return month_number, day_number


def _is_plain_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


# typed, so True and 1 are cached separately
@lru_cache(maxsize=None, typed=True)
def resolve_zodiac_sign(month, day):
    """
    Sign for (month, day), or None when no sign matches.
    Out-of-range month or day raises InvalidDate.
    """
    if not _is_plain_int(month) or not _is_plain_int(day) or not 1 <= month <= 12 or not 1 <= day <= 31:
        raise InvalidDate(month, day)
    for sign in SIGNS:
        if sign.contains(month, day):
            return sign
    return None


def get_sign(name):
    return SIGNS_BY_NAME.get(name)


def default_description(sign_name, product_name):
    return ZODIAC_DESCRIPTIONS.get(sign_name) or GENERIC_ZODIAC_DESCRIPTION.format(
        sign=sign_name, product=product_name
    )
