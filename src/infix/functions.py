'''
Functions, and the built-in function registry.

A function gets the raw, unevaluated text between its parentheses, and
decides itself which arguments get evaluated. That is what lets if() leave
its untaken branch alone.
'''

from collections import namedtuple
import math

from .tokenizer import ArgumentTokenizer
from .util import wrap_user_errors
from .values import is_truthy, to_number


class Function(namedtuple('Function', 'name execute')):
    '''
    A named function. execute(evaluator, arguments) returns a Value.
    '''
    __slots__ = ()


def _if(evaluator, arguments):
    '''
    if(condition, then, otherwise): evaluate only the branch taken.
    '''
    tokens = ArgumentTokenizer(arguments)
    child = evaluator.child()
    condition = child.evaluate(tokens.next_token())
    if is_truthy(condition):
        taken = tokens.next_token()
        tokens.skip()
    else:
        tokens.skip()
        taken = tokens.next_token()
    tokens.ensure_exhausted()
    return child.evaluate(taken)


def _numeric_arguments(evaluator, arguments, count):
    '''
    Evaluate exactly count arguments, all of which must be numbers.
    '''
    tokens = ArgumentTokenizer(arguments)
    child = evaluator.child()
    values = [child.evaluate(tokens.next_token()) for _ in range(count)]
    tokens.ensure_exhausted()
    return [to_number(value) for value in values]


def _binary(f, message):
    '''
    Function of two numeric arguments.
    '''
    @wrap_user_errors(message)
    def execute(evaluator, arguments):
        return float(f(*_numeric_arguments(evaluator, arguments, 2)))
    return execute


def _unary(f, message):
    '''
    Function of one numeric argument.
    '''
    @wrap_user_errors(message)
    def execute(evaluator, arguments):
        return float(f(*_numeric_arguments(evaluator, arguments, 1)))
    return execute


def _max(a, b):
    '''
    Larger of a and b; NaN if either is.
    '''
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return max(a, b)


def _min(a, b):
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return min(a, b)


def _round(number):
    '''
    Round half up.
    '''
    return math.floor(number + 0.5)


TWO_NUMBERS = 'Two numeric arguments are required'
ONE_NUMBER = 'One numeric argument is required'
POSITIVE_NUMBER = 'One positive numeric argument is required'

IF = Function('if', _if)
MAX = Function('max', _binary(_max, TWO_NUMBERS))
MIN = Function('min', _binary(_min, TWO_NUMBERS))

MATH = {
    'abs': _unary(abs, ONE_NUMBER),
    'ceil': _unary(math.ceil, ONE_NUMBER),
    'floor': _unary(math.floor, ONE_NUMBER),
    'round': _unary(_round, ONE_NUMBER),
    'exp': _unary(math.exp, ONE_NUMBER),
    'sqrt': _unary(math.sqrt, POSITIVE_NUMBER),
    'log': _unary(math.log, POSITIVE_NUMBER),
    'log10': _unary(math.log10, POSITIVE_NUMBER),
}

# Built once, never mutated; shared by every evaluator.
FUNCTIONS = {function.name: function for function in (IF, MAX, MIN)}
FUNCTIONS.update((name, Function(name, execute))
                 for name, execute
                 in MATH.items())
