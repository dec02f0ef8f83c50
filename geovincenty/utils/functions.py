"""Module for miscellaneous multi-use functions"""

__all__ = ['default_to_zulu', 'round_half_up']

from datetime import datetime, timezone

from geovincenty.utils.logging import warn_once


def default_to_zulu(dt: datetime) -> datetime:
    """Add Zulu/UTC as timezone, if timezone not present"""
    if not dt.tzinfo:
        warn_once(
            'Datetime does not contain timezone information; Zulu/UTC time assumed. '
            '(this warning will not repeat)'
        )
        return dt.replace(tzinfo=timezone.utc)

    return dt


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)
