import math
import re
from datetime import date, datetime
from typing import Dict, Iterable, Optional, Union

import cfg
from entities import CourierType, CourierFactors
from errors import DateRangeError

DateLike = Union[str, date]

DATE_FORMAT = '%Y-%m-%d'
DATE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def parse_date(value: DateLike) -> date:
    """
    Converts 'YYYY-MM-DD' strings to dates, dates are passed through.
    :raises DateRangeError: if the string doesn't match the format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # strptime alone would also take 2023-5-1
    if type(value) is not str or DATE.match(value) is None:
        raise DateRangeError(f'invalid date {value!r}, expected YYYY-MM-DD')
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as error:
        raise DateRangeError(f'invalid date {value!r}: {error}') from error


def round_half_away_from_zero(value: float) -> int:
    # built-in round() rounds half to even
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _factors(courier_type: CourierType, factors: Optional[Dict[CourierType, CourierFactors]]) -> CourierFactors:
    table = cfg.COURIER_TYPE_FACTORS if factors is None else factors
    return table[courier_type]


def earnings(costs: Iterable[int], courier_type: CourierType,
             factors: Optional[Dict[CourierType, CourierFactors]] = None) -> int:
    """
    Earnings of a courier: sum of costs of the completed orders scaled by the cost factor of the courier type.
    :param costs: costs of the orders completed in the requested window
    :param courier_type: type of the courier
    :param factors: factor table, cfg.COURIER_TYPE_FACTORS is used if omitted
    :return: earnings as an int
    """
    return sum(costs) * _factors(courier_type, factors).cost


def rating(completed_orders: int, start_date: DateLike, end_date: DateLike, courier_type: CourierType,
           factors: Optional[Dict[CourierType, CourierFactors]] = None) -> int:
    """
    Rating of a courier: completed orders per hour of the window scaled by the rate factor of the courier type,
    rounded half away from zero. The window is measured midnight to midnight.
    Callers are expected to report rating 0 without calling this when nothing was completed.
    :raises DateRangeError: if a date can't be parsed or the window has zero length
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    hours = (end - start).days * 24
    if hours == 0:
        raise DateRangeError(f'zero-length window {start.isoformat()}..{end.isoformat()}')

    return round_half_away_from_zero(completed_orders / hours * _factors(courier_type, factors).rate)
