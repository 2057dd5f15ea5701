'''
The value model: every value is either a number or text.

Numbers are floats, text is str. There is nothing else.
'''

import math

import regex

from .util import EvaluationError, NotNumeric


Number = float
Text = str

# Whole-text decimal literal, after surrounding whitespace is stripped.
NUMERIC = regex.compile(r'''
                        [+-]?
                        (?:
                            \d+ (?: \. \d* )?
                            |
                            \. \d+
                        )
                        (?: [eE] [+-]? \d+ )?
                        ''', flags=regex.VERBOSE)


def normalize(value):
    '''
    Turn a host value (e.g., from an identifier resolver) into a Value.
    '''
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return float(value)
    raise EvaluationError('Unsupported value {!r}'.format(value))


def parse_number(text):
    '''
    Return text as a float if it is entirely a decimal literal, else None.
    '''
    text = text.strip()
    if NUMERIC.fullmatch(text) is None:
        return None
    return float(text)


def is_numeric(value):
    return isinstance(value, float) or parse_number(value) is not None


def to_number(value):
    '''
    Coerce value to a number, raising NotNumeric when it isn't one.
    '''
    if isinstance(value, float):
        return value
    number = parse_number(value)
    if number is None:
        raise NotNumeric('{!r} is not a number'.format(value))
    return number


def to_text(value):
    '''
    Coerce value to text. Always succeeds.

    Whole numbers drop their trailing .0.
    '''
    if isinstance(value, str):
        return value
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def is_truthy(value):
    '''
    Decide a condition.

    Non-numeric, non-empty text counts as true. This is deliberate: a
    condition that fails to parse as a number is not an error.
    '''
    if isinstance(value, float):
        return value != 0
    if not value:
        return False
    number = parse_number(value)
    if number is None:
        return True
    return number != 0


def from_bool(flag):
    return 1.0 if flag else 0.0
