'''
Built-in function tests
'''

import math

import regex

from infix.util import (ArgumentCountMismatch, ExhaustedArguments,
                        InvalidArguments, NotNumeric, UnknownIdentifier)

from pytest import mark, raises


@mark.parametrize('expression,expected', [
    ('if(1,"yes","no")', 'yes'),
    ('if(0,"yes","no")', 'no'),
    ('if("","x","y")', 'y'),
    ('if("abc","x","y")', 'x'),
    ('if("0.0","x","y")', 'y'),
    ('if(x > 1, x * 10, -1)', 20),
    ('if(if(0, 1, 0), "a", "b")', 'b'),
])
def test_if(evaluator, expression, expected):
    assert evaluator.evaluate(expression) == expected


def test_if_skips_untaken_branch(evaluator, counter):
    assert evaluator.evaluate('if(0, tick(), "no")') == 'no'
    assert counter.calls == 0
    assert evaluator.evaluate('if(1, "yes", tick())') == 'yes'
    assert counter.calls == 0
    assert evaluator.evaluate('if(1, tick(), "no")') == 1
    assert counter.calls == 1


def test_if_untaken_branch_may_be_unresolvable(evaluator):
    assert evaluator.evaluate('if(1, 2, nosuchname)') == 2
    with raises(UnknownIdentifier):
        evaluator.evaluate('if(0, 2, nosuchname)')


def test_if_argument_count(evaluator, counter):
    with raises(ExhaustedArguments):
        evaluator.evaluate('if(1, tick())')
    with raises(ExhaustedArguments):
        evaluator.evaluate('if(0)')
    with raises(ArgumentCountMismatch, match='Too many arguments'):
        evaluator.evaluate('if(1, tick(), 2, 3)')
    assert counter.calls == 0


def test_max(evaluator):
    assert evaluator.evaluate('max(3,5)') == 5
    assert evaluator.evaluate('max(-1,-5)') == -1
    assert evaluator.evaluate('max("7", 2)') == 7
    assert evaluator.evaluate('max(max(1, y), x)') == 10


def test_max_wraps_failures(evaluator):
    with raises(InvalidArguments,
                match=regex.escape('Two numeric arguments are required')) \
            as info:
        evaluator.evaluate('max("x",5)')
    assert isinstance(info.value.cause, NotNumeric)
    assert info.value.__cause__ is info.value.cause


@mark.parametrize('expression', ['max(1)', 'max(1, 2, 3)', 'max()',
                                 'max(1, nosuchname)', 'max(1, 1 +)'])
def test_max_invalid(evaluator, expression):
    with raises(InvalidArguments):
        evaluator.evaluate(expression)


def test_min(evaluator):
    assert evaluator.evaluate('min(3, 5)') == 3
    with raises(InvalidArguments):
        evaluator.evaluate('min("a", "b")')


@mark.parametrize('expression,expected', [
    ('abs(-3)', 3),
    ('ceil(1.2)', 2),
    ('floor(-1.2)', -2),
    ('round(2.5)', 3),
    ('round(-2.5)', -2),
    ('sqrt(16)', 4),
    ('exp(0)', 1),
    ('log(1)', 0),
    ('log10(1000)', 3),
])
def test_math(evaluator, expression, expected):
    result = evaluator.evaluate(expression)
    assert result == expected
    assert isinstance(result, float)


def test_math_domain_errors(evaluator):
    with raises(InvalidArguments,
                match=regex.escape('One positive numeric argument')) as info:
        evaluator.evaluate('sqrt(-1)')
    assert isinstance(info.value.cause, ValueError)


def test_max_evaluates_both_arguments(evaluator, counter):
    with raises(InvalidArguments):
        evaluator.evaluate('max("x", tick())')
    assert counter.calls == 1


@mark.parametrize('expression', ['max(0/0, 5)', 'max(5, 0/0)',
                                 'min(0/0, 5)', 'min(5, 0/0)'])
def test_nan_wins_either_way(evaluator, expression):
    assert math.isnan(evaluator.evaluate(expression))
