'''
Operators, and the built-in operator table.

Higher precedence binds tighter. Unary forms bind tighter than any binary
form, so -2^2 is 4.
'''

from collections import namedtuple
import math

from .util import ExpressionSyntaxError, NotNumeric
from .values import (from_bool, is_numeric, is_truthy, to_number, to_text)


LEFT = 'left'
RIGHT = 'right'


class Operator(namedtuple('Operator',
                          'symbol precedence associativity binary unary',
                          defaults=(LEFT, None, None))):
    '''
    A named symbol with fixed precedence and associativity.

    binary takes (left, right), unary takes (operand); either may be None
    when the operator has no such form.
    '''
    __slots__ = ()

    def evaluate_binary(self, left, right):
        if self.binary is None:
            raise ExpressionSyntaxError(
                '{} is not a binary operator'.format(self.symbol))
        return self.binary(left, right)

    def evaluate_unary(self, operand):
        if self.unary is None:
            raise ExpressionSyntaxError(
                '{} is not a unary operator'.format(self.symbol))
        return self.unary(operand)

    def yields_to(self, incoming):
        '''
        Return True if this (stacked) operator is reduced before incoming.
        '''
        if self.precedence == incoming.precedence:
            return incoming.associativity == LEFT
        return self.precedence > incoming.precedence


def _numeric(f):
    '''
    Lift a float function to one over Values, coercing every operand.
    '''
    def wrapped(*operands):
        return float(f(*map(to_number, operands)))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = getattr(f, '__name__', 'operator')
    return wrapped


def _comparison(f):
    '''
    Compare numerically if both sides are numbers, as text otherwise.
    '''
    def wrapped(left, right):
        if is_numeric(left) and is_numeric(right):
            return from_bool(f(to_number(left), to_number(right)))
        return from_bool(f(to_text(left), to_text(right)))
    wrapped.__name__ = f.__name__
    return wrapped


def _add(left, right):
    '''
    Numeric addition, falling back to concatenating text.
    '''
    try:
        return to_number(left) + to_number(right)
    except NotNumeric:
        return to_text(left) + to_text(right)


def _divide(left, right):
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1, right)
    return left / right


def _modulo(left, right):
    if right == 0:
        return math.nan
    return math.fmod(left, right)


def _power(left, right):
    try:
        return math.pow(left, right)
    except OverflowError:
        if left < 0 and right.is_integer() and right % 2:
            return -math.inf
        return math.inf
    except ValueError:
        # Negative base, fractional exponent; or zero to a negative power.
        if left == 0:
            return math.inf
        return math.nan


def _and(left, right):
    return from_bool(is_truthy(left) and is_truthy(right))


def _or(left, right):
    return from_bool(is_truthy(left) or is_truthy(right))


def _not(operand):
    return from_bool(not is_truthy(operand))


OR = Operator('||', 1, binary=_or)
AND = Operator('&&', 2, binary=_and)
EQUAL = Operator('==', 3, binary=_comparison(lambda a, b: a == b))
NOT_EQUAL = Operator('!=', 3, binary=_comparison(lambda a, b: a != b))
LESS = Operator('<', 4, binary=_comparison(lambda a, b: a < b))
LESS_EQUAL = Operator('<=', 4, binary=_comparison(lambda a, b: a <= b))
GREATER = Operator('>', 4, binary=_comparison(lambda a, b: a > b))
GREATER_EQUAL = Operator('>=', 4, binary=_comparison(lambda a, b: a >= b))
ADD = Operator('+', 5, binary=_add, unary=_numeric(lambda a: a))
SUBTRACT = Operator('-', 5,
                    binary=_numeric(lambda a, b: a - b),
                    unary=_numeric(lambda a: -a))
MULTIPLY = Operator('*', 6, binary=_numeric(lambda a, b: a * b))
DIVIDE = Operator('/', 6, binary=_numeric(_divide))
MODULO = Operator('%', 6, binary=_numeric(_modulo))
POWER = Operator('^', 7, RIGHT, binary=_numeric(_power))
NOT = Operator('!', 8, RIGHT, unary=_not)

# Built once, never mutated; shared by every evaluator.
OPERATORS = {
    operator.symbol: operator
    for operator
    in (OR, AND,
        EQUAL, NOT_EQUAL,
        LESS, LESS_EQUAL, GREATER, GREATER_EQUAL,
        ADD, SUBTRACT,
        MULTIPLY, DIVIDE, MODULO,
        POWER,
        NOT)
}
