'''
Number formatting for the X display and the registers.

Scientific notation is written with a markup suffix, e.g. ``1.2346 x10^7``,
so the exponent can be edited in place while typing. The suffix is always the
last part of the string.
'''

from decimal import Decimal, ROUND_HALF_UP
import math

import regex


# Separates mantissa from exponent in scientific notation.
EXPONENT_MARK = ' x10^'

# Magnitudes outside [SMALL, LARGE) switch to scientific notation on their own.
LARGE = 1e7
SMALL = 1e-4

# Digits shown by the full precision peek.
FULL_PRECISION = 11

# A lone decimal point is the legal start of an entry.
BARE_POINT = regex.compile(r'-?\.')


def _nonfinite(value):
    '''
    Return the display literal for inf and nan, None for finite numbers.
    '''
    if math.isnan(value):
        return 'NaN'
    elif math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    return None


def _quantum(exponent):
    return Decimal(1).scaleb(exponent)


def _fixed(value, places):
    '''
    Round half away from zero, on the exact binary value.
    '''
    rounded = Decimal(value).quantize(_quantum(-places),
                                      rounding=ROUND_HALF_UP)
    return '{:f}'.format(rounded)


def _scientific(value, places):
    exact = Decimal(value)
    exponent = exact.adjusted()
    rounded = exact.quantize(_quantum(exponent - places),
                             rounding=ROUND_HALF_UP)
    if rounded and rounded.adjusted() > exponent:
        # 9.99... rounded up to 10.0
        exponent += 1
        rounded = rounded.quantize(_quantum(exponent - places),
                                   rounding=ROUND_HALF_UP)
    mantissa = rounded.scaleb(-exponent)
    return '{:f}'.format(mantissa) + EXPONENT_MARK + str(exponent)


def format_number(value, places, scientific=False):
    '''
    Render number for display.

    :param value: Number to render.
    :param places: Digits after the decimal point, of the mantissa when
                   scientific.
    :param scientific: Force scientific notation, whatever the magnitude.
    '''
    literal = _nonfinite(value)
    if literal is not None:
        return literal
    if value == 0:
        # No '-0.0000'.
        value = 0.0
    magnitude = abs(value)
    if scientific or magnitude >= LARGE or 0 < magnitude <= SMALL:
        return _scientific(value, places)
    return _fixed(value, places)


def format_full(value):
    '''
    Render number in scientific notation with all significant digits.
    '''
    literal = _nonfinite(value)
    if literal is not None:
        return literal
    return _scientific(value or 0.0, FULL_PRECISION)


def parse(text):
    '''
    Convert display or entry text back to a number.

    Raises ValueError on anything that is not a number.
    '''
    text = text.strip()
    if BARE_POINT.fullmatch(text):
        return 0.0
    mantissa, mark, exponent = text.partition(EXPONENT_MARK)
    if mark:
        if not exponent:
            raise ValueError('Missing exponent in {!r}'.format(text))
        if BARE_POINT.fullmatch(mantissa):
            mantissa = '0'
        text = mantissa + 'e' + exponent
    return float(text)


def is_number(text):
    '''
    Return True if text parses as a number.
    '''
    try:
        parse(text)
    except ValueError:
        return False
    return True
