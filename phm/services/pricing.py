# PHM/backend/phm/services/pricing.py : booking price computation

import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from phm.constants import MONTH_DAYS, SECONDS_PER_DAY


def duration_in_days(start: datetime, end: datetime) -> int:
    """Number of started days between start and end (partial days count as one)"""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def storage_price(price_per_ton: float, quantity: float, start: datetime, end: datetime) -> float:
    """
    Storage rental price. price_per_ton is a monthly rate, prorated by
    the day count of the booking against a MONTH_DAYS month.
    The result is not rounded.
    """
    return price_per_ton * quantity * duration_in_days(start, end) / MONTH_DAYS


def transport_price(price_per_km: float, distance: float) -> float:
    """Flat per-kilometre rate, not rounded"""
    return price_per_km * distance


def display_price(value: float) -> int:
    """Half-up rounding used for price previews; never applied to stored prices"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
