from decimal import Decimal
from functools import wraps
import math


# What the display shows instead of a number that isn't finite.
ERROR = 'Error'


class CalcError(Exception):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts unexpected exceptions into CalcErrors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise CalcError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def parse_number(text):
    '''
    Read a displayed numeral back as a float.

    Anything that isn't one, the error sentinel included, reads as NaN.
    '''
    try:
        return float(text)
    except ValueError:
        return math.nan


def format_number(value, *, large=1e12, small=1e-9, precision=8):
    '''
    Format a computed value for the display.

    :param large: Smallest magnitude shown in scientific notation.
    :param small: Magnitudes below this (but not zero) are scientific too.
    :param precision: Fractional digits of the scientific notation mantissa.
    '''
    if not math.isfinite(value):
        return ERROR
    magnitude = abs(value)
    if magnitude and (magnitude >= large or magnitude < small):
        return '{:.{}e}'.format(value, precision)
    return _shortest(value)


def _shortest(value):
    '''
    Shortest numeral that reads back as value.

    repr() already picks the shortest round-tripping digits; this only lays
    them out: fixed point from 1e-6 up, 1.5e-7 style below.
    '''
    if not value:
        # Negative zero too.
        return '0'
    number = Decimal(repr(value)).normalize()
    exponent = number.adjusted()
    if exponent >= -6:
        return '{:f}'.format(number)
    sign, digits, _ = number.as_tuple()
    mantissa = ''.join(map(str, digits))
    if len(mantissa) > 1:
        mantissa = mantissa[0] + '.' + mantissa[1:]
    return '{}{}e{}'.format('-' if sign else '', mantissa, exponent)
