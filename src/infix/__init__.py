'''
Infix expression evaluator.

Numbers and text, operators with precedence and associativity, and
functions that evaluate their own arguments, so if() only evaluates the
branch it takes. Not intended to be Turing-complete!

Identifiers are resolved by whoever embeds the evaluator: pass a resolver,
e.g. mapping_resolver({'x': 2}).
'''

from .cli import CLI
from .evaluator import Evaluator, evaluate, mapping_resolver
from .functions import FUNCTIONS, Function
from .lexer import Lexer
from .operators import LEFT, OPERATORS, RIGHT, Operator
from .tokenizer import ArgumentTokenizer
from .util import (ArgumentCountMismatch, EvaluationError,
                   ExhaustedArguments, ExpressionSyntaxError,
                   InvalidArguments, NotNumeric, RecursionLimitExceeded,
                   UnknownFunction, UnknownIdentifier, UnknownOperator)
from .values import Number, Text


__all__ = ('Evaluator', 'evaluate', 'mapping_resolver',
           'Operator', 'OPERATORS', 'LEFT', 'RIGHT',
           'Function', 'FUNCTIONS',
           'ArgumentTokenizer', 'Lexer', 'CLI',
           'Number', 'Text',
           'EvaluationError', 'ExpressionSyntaxError', 'UnknownOperator',
           'UnknownFunction', 'UnknownIdentifier', 'ArgumentCountMismatch',
           'ExhaustedArguments', 'NotNumeric', 'InvalidArguments',
           'RecursionLimitExceeded')
